"""
Employees service - storage for employee rows
"""

from timesheet_rest.models.employee import Employee
from timesheet_rest.services.base_service import BaseService


class EmployeesService(BaseService[Employee]):
    table_name = "employee"
    model = Employee
