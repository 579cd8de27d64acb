"""
Employee API routes
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from timesheet_rest.api.dependencies import get_employee_repository
from timesheet_rest.models.employee import Employee
from timesheet_rest.services.base_service import Repository
from timesheet_rest.utils.error_handling import EntityNotFoundError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: int,
    repository: Repository[Employee] = Depends(get_employee_repository)
):
    employee = await repository.find_by_id(employee_id)
    if employee is None:
        raise EntityNotFoundError("Employee", employee_id)
    return employee


@router.get("", response_model=List[Employee])
async def list_employees(
    repository: Repository[Employee] = Depends(get_employee_repository)
):
    return await repository.find_all()


@router.post("", response_model=Employee, status_code=201)
async def create_employee(
    employee: Employee,
    repository: Repository[Employee] = Depends(get_employee_repository)
):
    created = await repository.save(employee.model_copy(update={"id": None}))
    logger.info(f"Created employee {created.id}: {created.name}")
    return created


@router.put("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: int,
    employee: Employee,
    repository: Repository[Employee] = Depends(get_employee_repository)
):
    updated = await repository.update(employee.model_copy(update={"id": employee_id}))
    if updated is None:
        raise EntityNotFoundError("Employee", employee_id)
    return updated


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: int,
    repository: Repository[Employee] = Depends(get_employee_repository)
):
    if not await repository.delete_by_id(employee_id):
        raise EntityNotFoundError("Employee", employee_id)

    logger.info(f"Deleted employee {employee_id}")
    return Response(status_code=204)
