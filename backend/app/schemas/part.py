from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class PartCreate(BaseModel):
    sap_code: str = Field(..., min_length=1, max_length=100)
    part_name: str = Field(..., min_length=1, max_length=255)
    company_name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)


class PartResponse(BaseModel):
    id: UUID
    sap_code: str
    part_name: str
    company_name: str | None
    description: str | None
    location: str | None
    image_urls: list[str]
    created_at: datetime

    model_config = {"from_attributes": True}
