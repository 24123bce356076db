"""Shared test fixtures for all test modules."""

import contextlib

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core import database as db_module
from app.core.auth import create_access_token
from app.core.database import Base, build_engine, get_db
from app.core.roles import Role
from app.core.uploads import LocalArtifactStore
from app.main import app as fastapi_app
from app.models.part import Part

# In-memory SQLite with StaticPool so all connections share the same database
# state. Built like the application engine, so foreign keys are enforced.
_test_engine = build_engine("sqlite://", poolclass=StaticPool)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    # Children before parents, so foreign keys stay enforced throughout
    with _test_engine.connect() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture(autouse=True)
def artifact_store(tmp_path):
    """Point uploads at a per-test directory."""
    original = fastapi_app.state.artifacts
    store = LocalArtifactStore(root=str(tmp_path / "uploads"))
    fastapi_app.state.artifacts = store
    yield store
    fastapi_app.state.artifacts = original


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


def auth_headers(role: Role, user_id: str | None = None) -> dict[str, str]:
    """Authorization header for a user of ``role``."""
    token = create_access_token(
        user_id or f"{role.value.lower()}-user",
        role,
        email=f"{role.value.lower()}@example.com",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bolt_part(db_session):
    """A registered part with SAP code X1."""
    part = Part(sap_code="X1", part_name="Bolt", company_name="Acme", location="Rack 4")
    db_session.add(part)
    db_session.commit()
    db_session.refresh(part)
    return part
