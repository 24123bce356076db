"""Role-scoped notification ledger."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.core.roles import Role
from app.models.notification import Notification
from app.repositories.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Read, mark and clear the notifications visible to a role.

    A row is visible to a role when it was addressed to that role or to
    "all". The same rule scopes listing, marking and clearing.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository(db)

    def list_for_role(self, role: Role, unread_only: bool = False) -> list[Notification]:
        """Visible notifications, newest first."""
        notifications = self.repo.list_for_role(role, unread_only=unread_only)
        logger.debug("Fetched %d notifications for %s", len(notifications), role.value)
        return notifications

    def unread_count(self, role: Role) -> int:
        return self.repo.count_unread(role)

    def mark_read(self, notification_id: UUID, role: Role) -> Notification:
        """Mark one notification read.

        Raises NotFoundError both when the row does not exist and when it is
        addressed to another role, so existence is never revealed.
        """
        notification = self.repo.mark_read(notification_id, role)
        if notification is None:
            logger.warning(
                "Notification %s not found or not accessible for %s",
                notification_id,
                role.value,
            )
            raise NotFoundError("Notification", notification_id)
        logger.info("Notification %s marked as read by %s", notification_id, role.value)
        return notification

    def mark_all_read(self, role: Role) -> int:
        count = self.repo.mark_all_read(role)
        logger.info("Marked %d notifications as read for %s", count, role.value)
        return count

    def clear_for_role(self, role: Role) -> int:
        """Delete every notification visible to ``role``. Irreversible."""
        count = self.repo.clear_for_role(role)
        logger.info("Cleared %d notifications for %s", count, role.value)
        return count
