from uuid import UUID

from sqlalchemy.orm import Session

from app.models.shared import generate_uuid
from app.models.task import Task


class TaskRepository:
    """Task access. ``add`` only flushes: the caller owns the transaction."""

    def __init__(self, db: Session):
        self.db = db

    def add(
        self,
        *,
        part_id: UUID,
        location: str,
        comments: str | None = None,
        image_urls: list[str] | None = None,
        created_by: str | None = None,
    ) -> Task:
        task = Task(
            id=generate_uuid(),
            part_id=part_id,
            location=location,
            comments=comments,
            image_urls=list(image_urls or []),
            created_by=created_by,
        )
        self.db.add(task)
        self.db.flush()
        return task

    def get_by_id(self, task_id: UUID) -> Task | None:
        return self.db.query(Task).filter(Task.id == task_id).first()

    def get_all(self, skip: int = 0, limit: int = 100) -> list[Task]:
        return (
            self.db.query(Task)
            .order_by(Task.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(Task).count()
