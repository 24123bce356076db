"""Pydantic schemas for Notification."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: UUID
    task_id: UUID
    part_name: str
    company_name: str | None
    sap_code: str
    location: str
    comments: str | None
    recipient_role: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationCountResponse(BaseModel):
    unread_count: int


class NotificationClearResponse(BaseModel):
    cleared: int
