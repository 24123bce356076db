"""Tests for the task API: multipart creation, listing and lookup."""

import io
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.realtime import get_realtime_channel
from app.core.roles import Role
from app.main import app
from app.models.notification import Notification
from app.models.task import Task
from tests.conftest import auth_headers


class RecordingChannel:
    def __init__(self):
        self.calls = []

    def publish(self, role, payload):
        self.calls.append((role, payload))
        return 0


@pytest.fixture
def channel():
    recording = RecordingChannel()
    app.dependency_overrides[get_realtime_channel] = lambda: recording
    yield recording
    app.dependency_overrides.pop(get_realtime_channel, None)


@pytest.fixture
def client(channel):
    return TestClient(app)


def _png(name="photo.png"):
    return ("images", (name, io.BytesIO(b"\x89PNG\r\n\x1a\nfake"), "image/png"))


def _stored_files(store):
    if not store.root.exists():
        return []
    return sorted(os.listdir(store.root))


class TestCreateTaskAPI:
    def test_create_task(self, client, channel, db_session, bolt_part):
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": "Line3", "comments": "Burr on edge"},
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["part_name"] == "Bolt"
        assert data["company_name"] == "Acme"
        assert data["sap_code"] == "X1"
        assert data["location"] == "Line3"
        assert data["comments"] == "Burr on edge"
        assert data["image_urls"] == []
        assert data["created_by"] == "quality-user"

        assert db_session.query(Task).count() == 1
        rows = db_session.query(Notification).all()
        assert sorted(n.recipient_role for n in rows) == ["Employee", "HOD", "PDC"]
        assert all(str(n.task_id) == data["id"] for n in rows)
        assert [role for role, _ in channel.calls] == [Role.HOD, Role.PDC, Role.EMPLOYEE]

    def test_create_task_with_images(self, client, artifact_store, bolt_part):
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": "Line3"},
            files=[_png("a.png"), _png("b.png")],
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 201
        urls = resp.json()["image_urls"]
        assert len(urls) == 2
        assert all(os.path.exists(u) for u in urls)
        assert len(_stored_files(artifact_store)) == 2

    def test_unknown_part_removes_uploads(self, client, channel, db_session, artifact_store):
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "NOPE", "location": "Line3"},
            files=[_png()],
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Part with the given SAP Code not found."
        assert db_session.query(Task).count() == 0
        assert db_session.query(Notification).count() == 0
        assert channel.calls == []
        assert _stored_files(artifact_store) == []

    def test_missing_location(self, client, channel, artifact_store, bolt_part):
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1"},
            files=[_png()],
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 400
        assert channel.calls == []
        assert _stored_files(artifact_store) == []

    def test_non_image_rejected(self, client, db_session, artifact_store, bolt_part):
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": "Line3"},
            files=[_png(), ("images", ("notes.txt", io.BytesIO(b"hello"), "text/plain"))],
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 400
        assert "Not an image" in resp.json()["detail"]
        assert db_session.query(Task).count() == 0
        assert _stored_files(artifact_store) == []

    def test_too_many_images(self, client, artifact_store, bolt_part):
        files = [_png(f"{i}.png") for i in range(artifact_store.max_files + 1)]
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": "Line3"},
            files=files,
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 400
        assert _stored_files(artifact_store) == []

    def test_storage_failure(self, client, channel, db_session, artifact_store, bolt_part, monkeypatch):
        def failing_add(self, task, part, recipient_role):
            raise OperationalError("INSERT INTO notifications", {}, Exception("disk full"))

        monkeypatch.setattr(
            "app.repositories.notification_repository.NotificationRepository.add_for_task",
            failing_add,
        )
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": "Line3"},
            files=[_png()],
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Server error while creating task."
        assert db_session.query(Task).count() == 0
        assert channel.calls == []
        assert _stored_files(artifact_store) == []

    def test_upload_write_failure(self, client, channel, db_session, artifact_store, bolt_part, monkeypatch):
        real_save = artifact_store.save
        calls = []

        def save_then_fail(filename, content_type, stream):
            calls.append(filename)
            if len(calls) > 1:
                raise OSError(28, "No space left on device")
            return real_save(filename, content_type, stream)

        monkeypatch.setattr(artifact_store, "save", save_then_fail)
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": "Line3"},
            files=[_png("a.png"), _png("b.png")],
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Server error while storing images."
        assert db_session.query(Task).count() == 0
        assert channel.calls == []
        assert _stored_files(artifact_store) == []

    @pytest.mark.parametrize("role", [Role.HOD, Role.EMPLOYEE, Role.PDC, Role.ADMIN])
    def test_only_task_creators_allowed(self, client, channel, role, bolt_part):
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": "Line3"},
            headers=auth_headers(role),
        )
        assert resp.status_code == 403
        assert channel.calls == []

    def test_requires_token(self, client, bolt_part):
        resp = client.post("/v1/tasks/", data={"sap_code": "X1", "location": "Line3"})
        assert resp.status_code == 401


class TestReadTasksAPI:
    def _create(self, client, location):
        resp = client.post(
            "/v1/tasks/",
            data={"sap_code": "X1", "location": location},
            headers=auth_headers(Role.QUALITY),
        )
        assert resp.status_code == 201
        return resp.json()

    def test_list_tasks_newest_first(self, client, bolt_part):
        first = self._create(client, "Line1")
        second = self._create(client, "Line2")
        resp = client.get("/v1/tasks/", headers=auth_headers(Role.EMPLOYEE))
        assert resp.status_code == 200
        assert resp.headers["X-Total-Count"] == "2"
        assert [t["id"] for t in resp.json()] == [second["id"], first["id"]]
        assert resp.json()[0]["part_name"] == "Bolt"

    def test_get_task(self, client, bolt_part):
        created = self._create(client, "Line1")
        resp = client.get(f"/v1/tasks/{created['id']}", headers=auth_headers(Role.HOD))
        assert resp.status_code == 200
        assert resp.json()["location"] == "Line1"

    def test_get_task_not_found(self, client):
        resp = client.get(
            "/v1/tasks/00000000-0000-0000-0000-000000000000", headers=auth_headers(Role.HOD)
        )
        assert resp.status_code == 404
