# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from taskmanager.config import Settings
from taskmanager.db.database import Database
from taskmanager.main import create_app
from taskmanager.models.user import User, UserRole
from taskmanager.services.auth_service import AuthService
from taskmanager.services.task_service import TaskService

ACCOUNT_EMAIL = "ada@acme.org"
ACCOUNT_PASSWORD = "correct-horse-battery"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a throwaway SQLite file.

    Low bcrypt cost keeps the auth tests fast.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'tasks.sqlite3'}",
        log_level="WARNING",
        bcrypt_rounds=4,
    )


@pytest.fixture()
def database(settings: Settings) -> Iterator[Database]:
    db = Database(settings)
    db.init()
    yield db
    db.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    with database.new_session() as session:
        yield session


@pytest.fixture()
def task_service(db_session: Session) -> TaskService:
    return TaskService(db_session)


@pytest.fixture()
def auth_service(db_session: Session, settings: Settings) -> AuthService:
    return AuthService(db_session, settings)


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    """TestClient over a fresh app; the context manager runs startup/shutdown."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def account(client: TestClient, settings: Settings) -> User:
    """An account stored in the database the client's app uses."""
    with client.app.state.database.new_session() as session:
        return AuthService(session, settings).create_user(
            email=ACCOUNT_EMAIL,
            password=ACCOUNT_PASSWORD,
            role=UserRole.ADMIN,
            name="Ada",
        )


@pytest.fixture()
def auth_client(client: TestClient, account: User) -> TestClient:
    """Client holding a valid session cookie."""
    resp = client.post("/api/login", json={"email": ACCOUNT_EMAIL, "password": ACCOUNT_PASSWORD})
    assert resp.status_code == 200
    return client
