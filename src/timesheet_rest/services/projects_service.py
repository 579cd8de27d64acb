"""
Projects service - storage for project rows
"""

from timesheet_rest.models.project import Project
from timesheet_rest.services.base_service import BaseService


class ProjectsService(BaseService[Project]):
    table_name = "project"
    model = Project
