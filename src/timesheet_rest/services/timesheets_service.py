"""
Timesheets service - storage for timesheet rows
"""

from timesheet_rest.models.timesheet import Timesheet
from timesheet_rest.services.base_service import BaseService


class TimesheetsService(BaseService[Timesheet]):
    """Repository for the timesheet table"""

    table_name = "timesheet"
    model = Timesheet
