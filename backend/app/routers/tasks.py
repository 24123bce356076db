"""Quality task endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile
from sqlalchemy.orm import Session

from app.core.auth import Actor, get_current_actor, require_capability
from app.core.database import get_db
from app.core.errors import NotFoundError, StorageError, ValidationFailedError
from app.core.realtime import RealtimeChannel, get_realtime_channel
from app.core.roles import Capability
from app.core.uploads import LocalArtifactStore, get_artifact_store
from app.repositories.task_repository import TaskRepository
from app.schemas.task import TaskResponse
from app.services.task_service import TaskService

router = APIRouter()


@router.post(
    "/",
    response_model=TaskResponse,
    status_code=201,
    summary="Create a quality task",
    responses={
        400: {"description": "Missing SAP code or location, or invalid images"},
        401: {"description": "Unauthorized – invalid or missing access token"},
        403: {"description": "Role may not create tasks"},
        404: {"description": "Part with the given SAP code not found"},
        500: {"description": "Task could not be persisted"},
    },
)
async def create_task(
    sap_code: str = Form(default=""),
    location: str = Form(default=""),
    comments: str | None = Form(default=None),
    images: list[UploadFile] | None = File(default=None),
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_capability(Capability.CREATE_TASK)),
    channel: RealtimeChannel = Depends(get_realtime_channel),
    artifacts: LocalArtifactStore = Depends(get_artifact_store),
) -> TaskResponse:
    """Create a task against a registered part and notify the recipient roles.

    Images are stored before the task is written and removed again if the
    task cannot be created.
    """
    try:
        image_refs = artifacts.save_all(
            [(f.filename or "", f.content_type, f.file) for f in images or []]
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None

    service = TaskService(db, publisher=channel, artifacts=artifacts)
    try:
        created = service.create_task(
            sap_code=sap_code,
            location=location,
            comments=comments,
            image_refs=image_refs,
            actor=actor,
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except NotFoundError:
        raise HTTPException(
            status_code=404, detail="Part with the given SAP Code not found."
        ) from None
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None
    return TaskResponse.from_task(created.task)


@router.get(
    "/",
    response_model=list[TaskResponse],
    summary="List quality tasks",
    responses={401: {"description": "Unauthorized – invalid or missing access token"}},
)
async def list_tasks(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> list[TaskResponse]:
    """List tasks newest first, each with its part's display fields."""
    repo = TaskRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return [TaskResponse.from_task(t) for t in repo.get_all(skip=skip, limit=limit)]


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a quality task",
    responses={
        401: {"description": "Unauthorized – invalid or missing access token"},
        404: {"description": "Task not found"},
    },
)
async def get_task(
    task_id: UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> TaskResponse:
    task = TaskRepository(db).get_by_id(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse.from_task(task)
