"""Part model - a manufactured part identified by its SAP code."""

from sqlalchemy import JSON, Column, DateTime, String, Text

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid, utc_now


class Part(Base):
    __tablename__ = "parts"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    sap_code = Column(String(100), nullable=False, unique=True, index=True)
    part_name = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    image_urls = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
