"""
Project API routes
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from timesheet_rest.api.dependencies import get_project_repository
from timesheet_rest.models.project import Project
from timesheet_rest.services.base_service import Repository
from timesheet_rest.utils.error_handling import EntityNotFoundError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: int,
    repository: Repository[Project] = Depends(get_project_repository)
):
    """Get a project by id"""
    project = await repository.find_by_id(project_id)
    if project is None:
        raise EntityNotFoundError("Project", project_id)
    return project


@router.get("", response_model=List[Project])
async def list_projects(
    repository: Repository[Project] = Depends(get_project_repository)
):
    return await repository.find_all()


@router.post("", response_model=Project, status_code=201)
async def create_project(
    project: Project,
    repository: Repository[Project] = Depends(get_project_repository)
):
    """Create a project; any id in the body is ignored"""
    created = await repository.save(project.model_copy(update={"id": None}))
    logger.info(f"Created project {created.id}: {created.name}")
    return created


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: int,
    project: Project,
    repository: Repository[Project] = Depends(get_project_repository)
):
    """Replace an existing project, keeping the id from the path"""
    updated = await repository.update(project.model_copy(update={"id": project_id}))
    if updated is None:
        raise EntityNotFoundError("Project", project_id)
    return updated


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: int,
    repository: Repository[Project] = Depends(get_project_repository)
):
    if not await repository.delete_by_id(project_id):
        raise EntityNotFoundError("Project", project_id)

    logger.info(f"Deleted project {project_id}")
    return Response(status_code=204)
