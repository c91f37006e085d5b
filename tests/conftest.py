# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from safesync_server.core.security import issue_session
from safesync_server.core.settings import Settings
from safesync_server.db.session import Database
from safesync_server.main import create_app
from safesync_server.models import User
from safesync_server.services import AccountService, FriendshipService, MessageService

TEST_DB_URL = "sqlite://"


def make_settings(**overrides: Any) -> Settings:
    """Return settings tuned for fast tests."""
    values: dict[str, Any] = {
        "secret_key": "test-secret-key",
        "database_url": TEST_DB_URL,
        "bcrypt_rounds": 4,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture()
def database() -> Iterator[Database]:
    database = Database(TEST_DB_URL)
    database.create_tables()
    try:
        yield database
    finally:
        database.drop_tables()
        database.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(test_settings: Settings, database: Database) -> FastAPI:
    return create_app(test_settings, database=database)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def accounts(db_session: Session) -> AccountService:
    return AccountService(db_session, bcrypt_rounds=4)


@pytest.fixture()
def friendships(db_session: Session) -> FriendshipService:
    return FriendshipService(db_session)


@pytest.fixture()
def messages(db_session: Session) -> MessageService:
    return MessageService(db_session)


@pytest.fixture()
def make_user(accounts: AccountService) -> Callable[..., User]:
    """Return a factory registering users directly through the account service."""

    def _make_user(username: str, password: str = "pw", keys: list[str] | None = None) -> User:
        return accounts.register(username, password, keys or [])

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice", "pw1")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob", "pw2")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("carol", "pw3")


def register(client: TestClient, username: str, password: str = "pw", **keys: str) -> Any:
    """Register a user through the HTTP API and return the response."""
    payload: dict[str, Any] = {"username": username, "password": password}
    payload.update(keys)
    return client.post("/register", json=payload)


def auth_headers(settings: Settings, username: str) -> dict[str, str]:
    """Return authorization headers for ``username``."""
    token = issue_session(username, settings)
    return {"Authorization": f"Bearer {token}"}
