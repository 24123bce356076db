"""Notification model - one ledger row per recipient role of a task."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid, utc_now


class Notification(Base):
    """Snapshot of a task's part and location fields, addressed to a role.

    ``recipient_role`` holds a Role value or the "all" sentinel.
    """

    __tablename__ = "notifications"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    task_id = Column(
        UUIDType,
        ForeignKey("quality_tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    part_name = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=True)
    sap_code = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    comments = Column(Text, nullable=True)
    recipient_role = Column(String(20), nullable=False, index=True)
    read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
