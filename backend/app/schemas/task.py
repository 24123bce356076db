from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from app.models.task import Task


class TaskResponse(BaseModel):
    """A task together with the display fields of its part."""

    id: UUID
    part_id: UUID
    part_name: str
    company_name: str | None
    sap_code: str
    location: str
    comments: str | None
    image_urls: list[str]
    created_by: str | None
    created_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            part_id=task.part_id,
            part_name=task.part.part_name,
            company_name=task.part.company_name,
            sap_code=task.part.sap_code,
            location=task.location,
            comments=task.comments,
            image_urls=list(task.image_urls or []),
            created_by=task.created_by,
            created_at=task.created_at,
        )
