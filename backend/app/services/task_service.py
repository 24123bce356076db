"""Task creation: persist a task and its role notifications atomically, then fan out."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth import Actor
from app.core.errors import NotFoundError, RealtimeDeliveryError, StorageError, ValidationFailedError
from app.core.realtime import RealtimePublisher
from app.core.roles import Role, RolePolicy, role_policy
from app.core.unit_of_work import UnitOfWork
from app.core.uploads import ArtifactStore
from app.models.notification import Notification
from app.models.part import Part
from app.models.task import Task
from app.repositories.notification_repository import NotificationRepository
from app.repositories.part_repository import PartRepository
from app.repositories.task_repository import TaskRepository
from app.schemas.notification import NotificationResponse

module_logger = logging.getLogger(__name__)


def notification_payload(notification: Notification) -> dict[str, Any]:
    """JSON-ready realtime payload for a ledger row."""
    return NotificationResponse.model_validate(notification).model_dump(mode="json")


@dataclass
class CreatedTask:
    task: Task
    part: Part
    notifications: list[Notification] = field(default_factory=list)


class TaskService:
    """Creates quality tasks and fans their notifications out to the recipient roles.

    Collaborators are injected: the database session, the realtime publisher,
    the artifact store used for cleanup, the role policy, and the logger.
    """

    def __init__(
        self,
        db: Session,
        publisher: RealtimePublisher,
        artifacts: ArtifactStore,
        policy: RolePolicy | None = None,
        logger: logging.Logger | None = None,
        notification_repo: NotificationRepository | None = None,
    ):
        self.db = db
        self.publisher = publisher
        self.artifacts = artifacts
        self.policy = policy or role_policy
        self.logger = logger or module_logger
        self.part_repo = PartRepository(db)
        self.task_repo = TaskRepository(db)
        self.notification_repo = notification_repo or NotificationRepository(db)

    def create_task(
        self,
        *,
        sap_code: str | None,
        location: str | None,
        comments: str | None,
        image_refs: list[str],
        actor: Actor,
    ) -> CreatedTask:
        """Create a task for the part with ``sap_code``.

        The task row and one notification per recipient role are written in
        one transaction. Realtime events are published only after it commits.
        On any failure the uploaded artifacts in ``image_refs`` are deleted.

        Raises:
            ValidationFailedError: ``sap_code`` or ``location`` is blank.
            NotFoundError: no part has ``sap_code``.
            StorageError: the transaction failed and was rolled back.
        """
        sap_code = (sap_code or "").strip()
        location = (location or "").strip()
        comments = (comments or "").strip() or None

        if not sap_code or not location:
            self._discard_artifacts(image_refs)
            raise ValidationFailedError("SAP Code and Location are required.")

        part = self.part_repo.get_by_sap_code(sap_code)
        if part is None:
            self._discard_artifacts(image_refs)
            self.logger.warning(
                "Task creation by %s rejected: part %s not found", actor.label, sap_code
            )
            raise NotFoundError("Part", sap_code)

        notifications: list[Notification] = []
        try:
            with UnitOfWork(self.db) as uow:
                task = self.task_repo.add(
                    part_id=part.id,  # type: ignore[arg-type]
                    location=location,
                    comments=comments,
                    image_urls=image_refs,
                    created_by=actor.user_id,
                )
                for role in self.policy.notification_roles:
                    notification = self.notification_repo.add_for_task(task, part, role.value)
                    notifications.append(notification)
                    uow.on_commit(self._publisher_for(role, notification))
        except SQLAlchemyError as exc:
            self._discard_artifacts(image_refs)
            self.logger.exception("Error creating task for part %s", sap_code)
            raise StorageError("Server error while creating task.") from exc
        except Exception:
            self._discard_artifacts(image_refs)
            raise

        self.logger.info(
            "New quality task %s created by %s for part %s",
            task.id,
            actor.label,
            part.id,
        )
        return CreatedTask(task=task, part=part, notifications=notifications)

    def _publisher_for(self, role: Role, notification: Notification) -> Callable[[], None]:
        def publish() -> None:
            try:
                self.publisher.publish(role, notification_payload(notification))
            except RealtimeDeliveryError as exc:
                self.logger.warning("Realtime delivery to %s incomplete: %s", role.value, exc)
            except Exception:
                self.logger.warning("Realtime publish to %s failed", role.value, exc_info=True)

        return publish

    def _discard_artifacts(self, refs: list[str]) -> None:
        for ref in refs:
            try:
                self.artifacts.delete(ref)
            except OSError:
                self.logger.warning("Failed to delete uploaded artifact %s", ref, exc_info=True)
