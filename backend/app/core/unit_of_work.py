"""Transaction scope with post-commit hooks."""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

from sqlalchemy.orm import Session


class UnitOfWork:
    """Commit on clean exit, roll back on any exception.

    Callbacks registered with ``on_commit`` run only after the commit
    succeeded, in registration order. They are discarded on rollback.
    """

    def __init__(self, db: Session):
        self.db = db
        self._post_commit: list[Callable[[], None]] = []

    def on_commit(self, callback: Callable[[], None]) -> None:
        self._post_commit.append(callback)

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.db.rollback()
            self._post_commit.clear()
            return

        try:
            self.db.commit()
        except BaseException:
            self.db.rollback()
            self._post_commit.clear()
            raise

        callbacks, self._post_commit = self._post_commit, []
        for callback in callbacks:
            callback()
