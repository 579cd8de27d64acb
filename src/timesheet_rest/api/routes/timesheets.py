"""
Timesheet API routes
Each route is a single read or write through the injected timesheet repository.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from timesheet_rest.api.dependencies import get_timesheet_repository
from timesheet_rest.models.timesheet import Timesheet
from timesheet_rest.services.base_service import Repository
from timesheet_rest.utils.error_handling import EntityNotFoundError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{timesheet_id}", response_model=Timesheet)
async def get_timesheet(
    timesheet_id: int,
    repository: Repository[Timesheet] = Depends(get_timesheet_repository)
):
    """Get a timesheet by id"""
    timesheet = await repository.find_by_id(timesheet_id)
    if timesheet is None:
        raise EntityNotFoundError("Timesheet", timesheet_id)
    return timesheet


@router.get("", response_model=List[Timesheet])
async def list_timesheets(
    repository: Repository[Timesheet] = Depends(get_timesheet_repository)
):
    """List every stored timesheet"""
    return await repository.find_all()


@router.post("", response_model=Timesheet, status_code=201)
async def create_timesheet(
    timesheet: Timesheet,
    repository: Repository[Timesheet] = Depends(get_timesheet_repository)
):
    """
    Create a timesheet.

    An ``id`` sent in the body is ignored; the store assigns a new one.
    """
    created = await repository.save(timesheet.model_copy(update={"id": None}))
    logger.info(f"Created timesheet {created.id} (project={created.project_id}, employee={created.employee_id})")
    return created


@router.put("/{timesheet_id}", response_model=Timesheet)
async def update_timesheet(
    timesheet_id: int,
    timesheet: Timesheet,
    repository: Repository[Timesheet] = Depends(get_timesheet_repository)
):
    """
    Replace every field of an existing timesheet.

    The id in the path wins over any id in the body. Fields omitted from
    the body are stored as null.
    """
    updated = await repository.update(timesheet.model_copy(update={"id": timesheet_id}))
    if updated is None:
        raise EntityNotFoundError("Timesheet", timesheet_id)

    logger.info(f"Updated timesheet {timesheet_id}")
    return updated


@router.delete("/{timesheet_id}", status_code=204)
async def delete_timesheet(
    timesheet_id: int,
    repository: Repository[Timesheet] = Depends(get_timesheet_repository)
):
    """Delete a timesheet"""
    if not await repository.delete_by_id(timesheet_id):
        raise EntityNotFoundError("Timesheet", timesheet_id)

    logger.info(f"Deleted timesheet {timesheet_id}")
    return Response(status_code=204)
