"""Tests for the transaction scope and its post-commit hooks."""

import pytest

from app.core.unit_of_work import UnitOfWork
from app.models.part import Part


def test_commits_and_runs_hooks_in_order(db_session):
    calls = []
    with UnitOfWork(db_session) as uow:
        db_session.add(Part(sap_code="U1", part_name="Pin"))
        uow.on_commit(lambda: calls.append("first"))
        uow.on_commit(lambda: calls.append("second"))
        assert calls == []
    assert calls == ["first", "second"]
    db_session.rollback()
    assert db_session.query(Part).count() == 1


def test_rolls_back_and_skips_hooks_on_error(db_session):
    calls = []
    with pytest.raises(RuntimeError):
        with UnitOfWork(db_session) as uow:
            db_session.add(Part(sap_code="U1", part_name="Pin"))
            db_session.flush()
            uow.on_commit(lambda: calls.append("hook"))
            raise RuntimeError("abort")
    assert calls == []
    assert db_session.query(Part).count() == 0


def test_failed_commit_skips_hooks(db_session):
    db_session.add(Part(sap_code="U1", part_name="Pin"))
    db_session.commit()

    calls = []
    with pytest.raises(Exception):
        with UnitOfWork(db_session) as uow:
            # Duplicate SAP code violates the unique index at commit time
            db_session.add(Part(sap_code="U1", part_name="Pin copy"))
            uow.on_commit(lambda: calls.append("hook"))
    assert calls == []
    assert db_session.query(Part).count() == 1
