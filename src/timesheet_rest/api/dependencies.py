"""
FastAPI dependencies resolving the repositories injected into the app
"""

from fastapi import Depends, HTTPException, Request

from timesheet_rest.models.employee import Employee
from timesheet_rest.models.project import Project
from timesheet_rest.models.timesheet import Timesheet
from timesheet_rest.services.base_service import Repository
from timesheet_rest.services.registry import RepositoryRegistry


def get_repositories(request: Request) -> RepositoryRegistry:
    repositories = getattr(request.app.state, "repositories", None)
    if repositories is None:
        raise HTTPException(status_code=503, detail="Storage is not initialized")
    return repositories


def get_timesheet_repository(
    repositories: RepositoryRegistry = Depends(get_repositories)
) -> Repository[Timesheet]:
    return repositories.timesheets


def get_project_repository(
    repositories: RepositoryRegistry = Depends(get_repositories)
) -> Repository[Project]:
    return repositories.projects


def get_employee_repository(
    repositories: RepositoryRegistry = Depends(get_repositories)
) -> Repository[Employee]:
    return repositories.employees
