"""Repository for the role-scoped notification ledger."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.core.roles import ALL_ROLES_RECIPIENT, Role
from app.models.notification import Notification
from app.models.part import Part
from app.models.shared import generate_uuid
from app.models.task import Task


def visible_to(role: Role):  # type: ignore[no-untyped-def]
    """SQL form of the visibility rule: own-role rows plus rows sent to "all"."""
    return or_(
        Notification.recipient_role == role.value,
        Notification.recipient_role == ALL_ROLES_RECIPIENT,
    )


class NotificationRepository:
    def __init__(self, db: Session):
        self.db = db

    def _visible(self, role: Role) -> Query:  # type: ignore[type-arg]
        return self.db.query(Notification).filter(visible_to(role))

    def add_for_task(self, task: Task, part: Part, recipient_role: str) -> Notification:
        """Stage one notification row for ``task``. Flushes, never commits."""
        notification = Notification(
            id=generate_uuid(),
            task_id=task.id,
            part_name=part.part_name,
            company_name=part.company_name,
            sap_code=part.sap_code,
            location=task.location,
            comments=task.comments,
            recipient_role=recipient_role,
            read=False,
        )
        self.db.add(notification)
        self.db.flush()
        return notification

    def list_for_role(self, role: Role, unread_only: bool = False) -> list[Notification]:
        query = self._visible(role)
        if unread_only:
            query = query.filter(Notification.read == False)  # noqa: E712
        return query.order_by(Notification.created_at.desc()).all()

    def count_unread(self, role: Role) -> int:
        return (
            self._visible(role)
            .filter(Notification.read == False)  # noqa: E712
            .count()
        )

    def mark_read(self, notification_id: UUID, role: Role) -> Notification | None:
        """Flip ``read`` on a row visible to ``role``; None when absent or not visible."""
        notification = (
            self._visible(role).filter(Notification.id == notification_id).first()
        )
        if notification is None:
            return None
        notification.read = True  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_read(self, role: Role) -> int:
        count = (
            self._visible(role)
            .filter(Notification.read == False)  # noqa: E712
            .update({"read": True}, synchronize_session=False)
        )
        self.db.commit()
        return count

    def clear_for_role(self, role: Role) -> int:
        count = self._visible(role).delete(synchronize_session=False)
        self.db.commit()
        return count
