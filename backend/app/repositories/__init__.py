from app.repositories.notification_repository import NotificationRepository
from app.repositories.part_repository import PartRepository
from app.repositories.task_repository import TaskRepository

__all__ = [
    "NotificationRepository",
    "PartRepository",
    "TaskRepository",
]
