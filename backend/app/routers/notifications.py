"""Notification ledger endpoints, scoped to the caller's role."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.auth import Actor, require_capability
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.roles import Capability
from app.schemas.notification import (
    NotificationClearResponse,
    NotificationCountResponse,
    NotificationResponse,
)
from app.services.notification_service import NotificationService

router = APIRouter()

reader = require_capability(Capability.READ_NOTIFICATIONS)


@router.get(
    "/",
    response_model=list[NotificationResponse],
    summary="List notifications for my role",
    responses={401: {"description": "Unauthorized – invalid or missing access token"}},
)
async def list_notifications(
    unread_only: bool = Query(default=False),
    db: Session = Depends(get_db),
    actor: Actor = Depends(reader),
) -> list[NotificationResponse]:
    """List notifications addressed to the caller's role or to everyone, newest first."""
    service = NotificationService(db)
    notifications = service.list_for_role(actor.role, unread_only=unread_only)
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.get(
    "/unread_count",
    response_model=NotificationCountResponse,
    summary="Get unread notification count",
    responses={401: {"description": "Unauthorized – invalid or missing access token"}},
)
async def get_unread_count(
    db: Session = Depends(get_db),
    actor: Actor = Depends(reader),
) -> NotificationCountResponse:
    service = NotificationService(db)
    return NotificationCountResponse(unread_count=service.unread_count(actor.role))


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    summary="Mark a notification as read",
    responses={
        401: {"description": "Unauthorized – invalid or missing access token"},
        404: {"description": "Notification not found or not accessible"},
    },
)
async def mark_as_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(reader),
) -> NotificationResponse:
    """Mark a single notification as read."""
    service = NotificationService(db)
    try:
        notification = service.mark_read(notification_id, actor.role)
    except NotFoundError:
        raise HTTPException(
            status_code=404, detail="Notification not found or not accessible"
        ) from None
    return NotificationResponse.model_validate(notification)


@router.post(
    "/read_all",
    response_model=NotificationCountResponse,
    summary="Mark all my notifications as read",
    responses={401: {"description": "Unauthorized – invalid or missing access token"}},
)
async def mark_all_as_read(
    db: Session = Depends(get_db),
    actor: Actor = Depends(reader),
) -> NotificationCountResponse:
    """Mark every visible unread notification as read."""
    service = NotificationService(db)
    service.mark_all_read(actor.role)
    return NotificationCountResponse(unread_count=service.unread_count(actor.role))


@router.delete(
    "/clear",
    response_model=NotificationClearResponse,
    summary="Clear my notifications",
    responses={401: {"description": "Unauthorized – invalid or missing access token"}},
)
async def clear_notifications(
    db: Session = Depends(get_db),
    actor: Actor = Depends(reader),
) -> NotificationClearResponse:
    """Delete every notification visible to the caller's role."""
    service = NotificationService(db)
    return NotificationClearResponse(cleared=service.clear_for_role(actor.role))
