"""Dependency helpers shared across routes.

Handles live on ``app.state`` (set by ``create_app``) rather than in module
globals, so each application instance carries its own database.
"""
from typing import Generator

from fastapi import Depends, Request
from sqlmodel import Session

from taskmanager.config import Settings
from taskmanager.services.auth_service import AuthService
from taskmanager.services.task_service import TaskService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """One database session per request."""
    yield from request.app.state.database.session()


def get_task_service(session: Session = Depends(get_db_session)) -> TaskService:
    return TaskService(session)


def get_auth_service(
    session: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(session, settings)
