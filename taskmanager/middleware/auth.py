"""Session-cookie authentication dependencies for FastAPI."""
from typing import Optional

from fastapi import Depends, Request
from pydantic import BaseModel

from taskmanager.dependencies import get_auth_service, get_settings
from taskmanager.config import Settings
from taskmanager.errors import UnauthorizedError
from taskmanager.services.auth_service import AuthService


class CurrentUser(BaseModel):
    """User information taken from the active session."""
    user_id: str
    email: str
    role: str
    name: Optional[str] = None
    session_token: str


def session_token(request: Request, settings: Settings) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


def get_optional_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[CurrentUser]:
    """
    Resolve the session cookie to a user.

    Returns:
        CurrentUser for an active session, None when anonymous or expired
    """
    token = session_token(request, settings)
    record = auth.get_session(token)
    if record is None:
        return None
    return CurrentUser(
        user_id=record.user_id,
        email=record.email,
        role=record.role,
        name=record.name,
        session_token=record.id,
    )


def get_current_user(
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    """
    Require an authenticated session.

    Raises:
        UnauthorizedError: If the request carries no active session
    """
    if user is None:
        raise UnauthorizedError()
    return user
