"""Part registration and lookup endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import Actor, get_current_actor, require_capability
from app.core.database import get_db
from app.core.roles import Capability
from app.models.part import Part
from app.repositories.part_repository import PartRepository
from app.schemas.part import PartCreate, PartResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/",
    response_model=PartResponse,
    status_code=201,
    summary="Register a part",
    responses={
        400: {"description": "SAP code already exists"},
        401: {"description": "Unauthorized – invalid or missing access token"},
        403: {"description": "Role may not manage parts"},
    },
)
async def create_part(
    data: PartCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_capability(Capability.MANAGE_PARTS)),
) -> Part:
    """Register a new part under a unique SAP code."""
    repo = PartRepository(db)
    if repo.sap_code_exists(data.sap_code):
        logger.warning("Part creation failed: SAP Code '%s' already exists", data.sap_code)
        raise HTTPException(status_code=400, detail="SAP Code already exists")
    part = repo.create(data)
    logger.info("New part %s (%s) created by %s", part.id, part.sap_code, actor.label)
    return part


@router.get(
    "/",
    response_model=list[PartResponse],
    summary="List parts",
    responses={401: {"description": "Unauthorized – invalid or missing access token"}},
)
async def list_parts(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> list[Part]:
    """List parts ordered by SAP code."""
    repo = PartRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit)


@router.get(
    "/{sap_code}",
    response_model=PartResponse,
    summary="Get a part by SAP code",
    responses={
        401: {"description": "Unauthorized – invalid or missing access token"},
        404: {"description": "Part not found"},
    },
)
async def get_part(
    sap_code: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> Part:
    part = PartRepository(db).get_by_sap_code(sap_code)
    if part is None:
        raise HTTPException(status_code=404, detail="Part not found")
    return part
