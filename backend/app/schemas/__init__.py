from app.schemas.notification import (
    NotificationClearResponse,
    NotificationCountResponse,
    NotificationResponse,
)
from app.schemas.part import PartCreate, PartResponse
from app.schemas.task import TaskResponse

__all__ = [
    "NotificationClearResponse",
    "NotificationCountResponse",
    "NotificationResponse",
    "PartCreate",
    "PartResponse",
    "TaskResponse",
]
