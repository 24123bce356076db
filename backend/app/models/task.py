"""Quality task model - one inspection event recorded against a part."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid, utc_now


class Task(Base):
    __tablename__ = "quality_tasks"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    part_id = Column(
        UUIDType,
        ForeignKey("parts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    location = Column(String(255), nullable=False)
    comments = Column(Text, nullable=True)
    image_urls = Column(JSON, nullable=False, default=list)
    created_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)

    part = relationship("Part", lazy="joined")
