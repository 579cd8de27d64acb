"""
Repository registry - the storage collaborators handed to the application
"""

import logging
from dataclasses import dataclass

import asyncpg

from timesheet_rest.models.employee import Employee
from timesheet_rest.models.project import Project
from timesheet_rest.models.timesheet import Timesheet
from timesheet_rest.services.base_service import Repository
from timesheet_rest.services.employees_service import EmployeesService
from timesheet_rest.services.projects_service import ProjectsService
from timesheet_rest.services.timesheets_service import TimesheetsService

logger = logging.getLogger(__name__)


@dataclass
class RepositoryRegistry:
    """One repository per entity type"""
    timesheets: Repository[Timesheet]
    projects: Repository[Project]
    employees: Repository[Employee]


def build_postgres_registry(pool: asyncpg.Pool) -> RepositoryRegistry:
    """Create asyncpg-backed repositories sharing one pool"""
    logger.info("Building PostgreSQL repositories")
    return RepositoryRegistry(
        timesheets=TimesheetsService(pool),
        projects=ProjectsService(pool),
        employees=EmployeesService(pool),
    )
