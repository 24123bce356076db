from app.models.notification import Notification
from app.models.part import Part
from app.models.task import Task

__all__ = [
    "Notification",
    "Part",
    "Task",
]
