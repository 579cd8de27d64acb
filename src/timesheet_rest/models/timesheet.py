"""
Timesheet Pydantic models
"""

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Timesheet(BaseModel):
    """Minutes an employee booked on a project on a given day.

    ``project_id`` and ``employee_id`` are copied by value; they are not
    checked against the project and employee tables.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    project_id: Optional[int] = Field(None, alias="projectId")
    employee_id: Optional[int] = Field(None, alias="employeeId")
    minutes: Optional[int] = None
    created_at: Optional[date] = Field(None, alias="createdAt")

    @classmethod
    def from_record(cls, record: Any) -> "Timesheet":
        """Build from a ``timesheet`` row (asyncpg Record or mapping)"""
        return cls(
            id=record["id"],
            project_id=record["project_id"],
            employee_id=record["employee_id"],
            minutes=record["minutes"],
            created_at=record["created_at"],
        )

    def to_record(self) -> Dict[str, Any]:
        """Column values for the ``timesheet`` table, identity excluded"""
        return {
            "project_id": self.project_id,
            "employee_id": self.employee_id,
            "minutes": self.minutes,
            "created_at": self.created_at,
        }
