# tests/v1/test_system.py
"""Tests for root, health and user directory endpoints."""

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from safesync_server.main import create_app, open_database
from tests.conftest import make_settings, register


def test_root_and_health(client) -> None:
    root = client.get("/")
    health = client.get("/health")

    assert root.status_code == status.HTTP_200_OK
    assert root.json()["status"] == "ok"
    assert health.json() == {"status": "ok"}


def test_error_body_is_documented(client) -> None:
    schema = client.get("/openapi.json").json()

    conflict = schema["paths"]["/send_friend_request"]["post"]["responses"]["409"]
    assert conflict["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert schema["components"]["schemas"]["ErrorResponse"]["required"] == ["error"]


def test_list_usernames(client) -> None:
    assert client.get("/users").json() == []

    register(client, "alice")
    register(client, "bob")

    response = client.get("/users")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == ["alice", "bob"]


def test_app_opens_its_own_database_on_startup() -> None:
    from fastapi.testclient import TestClient

    app = create_app(make_settings())

    with TestClient(app, base_url="http://test") as client:
        assert app.state.database is not None
        assert register(client, "alice").status_code == status.HTTP_201_CREATED
    assert app.state.database is None


def test_unreachable_database_is_fatal() -> None:
    settings = make_settings(database_url="sqlite:////nonexistent-dir/sub/safesync.db")

    with pytest.raises(OperationalError):
        open_database(settings)
