"""
Project Pydantic models
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel


class Project(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "Project":
        return cls(id=record["id"], name=record["name"])

    def to_record(self) -> Dict[str, Any]:
        return {"name": self.name}
