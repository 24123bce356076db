"""Local filesystem store for uploaded task images."""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Protocol

from fastapi import Request

from app.core.config import settings
from app.core.errors import StorageError, ValidationFailedError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class ArtifactStore(Protocol):
    def delete(self, ref: str) -> None: ...


class LocalArtifactStore:
    """Writes image uploads under a single directory and hands back their paths.

    References are plain filesystem paths; ``delete`` is idempotent.
    """

    def __init__(
        self,
        root: str | None = None,
        max_files: int | None = None,
        max_bytes: int | None = None,
    ):
        self.root = Path(root or settings.upload_dir)
        self.max_files = max_files if max_files is not None else settings.UPLOAD_MAX_FILES
        self.max_bytes = max_bytes if max_bytes is not None else settings.UPLOAD_MAX_BYTES

    def save_all(self, files: list[tuple[str, str | None, BinaryIO]]) -> list[str]:
        """Persist ``(filename, content_type, stream)`` triples.

        All-or-nothing: if any file is rejected or cannot be written, the ones
        already written are removed. Rejections raise ValidationFailedError,
        filesystem failures raise StorageError.
        """
        if len(files) > self.max_files:
            raise ValidationFailedError(f"At most {self.max_files} images may be uploaded")

        saved: list[str] = []
        try:
            for filename, content_type, stream in files:
                saved.append(self.save(filename, content_type, stream))
        except OSError as exc:
            self.delete_all(saved)
            logger.exception("Failed to store uploaded images")
            raise StorageError("Server error while storing images.") from exc
        except Exception:
            self.delete_all(saved)
            raise
        return saved

    def save(self, filename: str, content_type: str | None, stream: BinaryIO) -> str:
        if not content_type or not content_type.startswith("image/"):
            raise ValidationFailedError("Not an image! Please upload only images.")

        self.root.mkdir(parents=True, exist_ok=True)
        suffix = Path(filename or "").suffix.lower()
        target = self.root / f"images-{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{suffix}"

        try:
            with open(target, "wb") as out:
                written = 0
                while chunk := stream.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise ValidationFailedError(
                            f"Image '{filename}' exceeds the {self.max_bytes} byte limit"
                        )
                    out.write(chunk)
        except BaseException:
            target.unlink(missing_ok=True)
            raise
        return str(target)

    def delete(self, ref: str) -> None:
        try:
            os.remove(ref)
        except FileNotFoundError:
            pass

    def delete_all(self, refs: list[str]) -> None:
        for ref in refs:
            try:
                self.delete(ref)
            except OSError:
                logger.warning("Failed to delete uploaded artifact %s", ref, exc_info=True)


def get_artifact_store(request: Request) -> LocalArtifactStore:
    return request.app.state.artifacts  # type: ignore[no-any-return]
