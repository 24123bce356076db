from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings


def _is_sqlite(dsn: str) -> bool:
    return dsn.startswith("sqlite")


def build_engine(dsn: str, **engine_kwargs: Any) -> Engine:
    """Engine for ``dsn``; SQLite connections get foreign key enforcement.

    Notifications cascade with their task and tasks restrict part deletion,
    which SQLite only honours with ``PRAGMA foreign_keys`` switched on.
    """
    if not _is_sqlite(dsn):
        return create_engine(dsn, pool_pre_ping=True, **engine_kwargs)

    sqlite_engine = create_engine(
        dsn, connect_args={"check_same_thread": False}, **engine_kwargs
    )

    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = build_engine(settings.APP_DATABASE_DSN)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; any transaction left open is rolled back on close."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the parts, task and notification tables if they are missing."""
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
