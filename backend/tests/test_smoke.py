"""Minimal smoke tests.

Proves the app boots and the part -> task -> notification flow works end to end.
"""

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from app.core.roles import Role
from app.main import app
from tests.conftest import auth_headers


@pytest.fixture
def client():
    return TestClient(app)


def test_app_starts():
    """The FastAPI app object can be imported and is a FastAPI instance."""
    assert isinstance(app, FastAPI)


def test_health_endpoint(client: TestClient):
    """GET / returns 200 with app info."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "app" in data
    assert "version" in data
    assert data["status"] == "running"


def test_part_task_notification_flow(client: TestClient):
    """A registered part gets a task; every recipient role sees one unread notification."""
    part = client.post(
        "/v1/parts/",
        json={"sap_code": "X1", "part_name": "Bolt", "company_name": "Acme"},
        headers=auth_headers(Role.HOD),
    )
    assert part.status_code == 201

    task = client.post(
        "/v1/tasks/",
        data={"sap_code": "X1", "location": "Line3"},
        headers=auth_headers(Role.QUALITY),
    )
    assert task.status_code == 201
    assert task.json()["part_name"] == "Bolt"

    for role in (Role.HOD, Role.PDC, Role.EMPLOYEE):
        resp = client.get("/v1/notifications/", headers=auth_headers(role))
        assert resp.status_code == 200
        rows = resp.json()
        assert len(rows) == 1
        assert rows[0]["recipient_role"] == role.value
        assert rows[0]["task_id"] == task.json()["id"]
        assert rows[0]["read"] is False

    quality = client.get("/v1/notifications/", headers=auth_headers(Role.QUALITY))
    assert quality.json() == []


def test_unregistered_part_creates_nothing(client: TestClient):
    resp = client.post(
        "/v1/tasks/",
        data={"sap_code": "NOPE", "location": "Line3"},
        headers=auth_headers(Role.QUALITY),
    )
    assert resp.status_code == 404
    assert client.get("/v1/tasks/", headers=auth_headers(Role.HOD)).json() == []
    for role in Role:
        assert client.get("/v1/notifications/", headers=auth_headers(role)).json() == []
