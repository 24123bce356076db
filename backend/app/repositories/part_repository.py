
from sqlalchemy.orm import Session

from app.models.part import Part
from app.schemas.part import PartCreate


class PartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, skip: int = 0, limit: int = 100) -> list[Part]:
        return (
            self.db.query(Part)
            .order_by(Part.sap_code.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(Part).count()

    def get_by_sap_code(self, sap_code: str) -> Part | None:
        return self.db.query(Part).filter(Part.sap_code == sap_code).first()

    def sap_code_exists(self, sap_code: str) -> bool:
        return self.get_by_sap_code(sap_code) is not None

    def create(self, data: PartCreate, image_urls: list[str] | None = None) -> Part:
        part = Part(**data.model_dump(), image_urls=image_urls or [])
        self.db.add(part)
        self.db.commit()
        self.db.refresh(part)
        return part
