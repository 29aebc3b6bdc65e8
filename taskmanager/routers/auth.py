"""Authentication router: login, logout and current-session lookup."""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from taskmanager.config import Settings
from taskmanager.dependencies import get_auth_service, get_settings
from taskmanager.errors import InvalidCredentialsError
from taskmanager.middleware.auth import CurrentUser, get_optional_user, session_token
from taskmanager.schemas.auth import LoginRequest, LoginResponse, MeResponse, SessionUser
from taskmanager.services.auth_service import AuthService, normalize_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])  # No prefix since main.py adds /api prefix


@router.post("/login", response_model=LoginResponse)
def login(
    request: Request,
    response: Response,
    credentials: Optional[LoginRequest] = None,
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
):
    """Check email/password and start a session carried by an HTTP-only cookie."""
    email = (credentials.email or "").strip() if credentials else ""
    password = credentials.password if credentials else None
    if not email or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    user = auth.authenticate(email, password)
    if user is None:
        logger.info(f"Failed login for {normalize_email(email)}")
        raise InvalidCredentialsError()

    auth.purge_expired()
    record = auth.create_session(user)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=record.id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure or request.url.scheme == "https",
    )
    logger.info(f"User {user.email} logged in")
    return LoginResponse(email=user.email, role=user.role, name=user.name)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    request: Request,
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
):
    """End the current session, if any."""
    auth.destroy_session(session_token(request, settings))
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(key=settings.session_cookie_name, httponly=True, samesite="lax")
    return response


@router.get("/me", response_model=MeResponse)
def me(user: Optional[CurrentUser] = Depends(get_optional_user)):
    """Return the logged-in user, or null."""
    if user is None:
        return MeResponse(user=None)
    return MeResponse(
        user=SessionUser(id=user.user_id, email=user.email, role=user.role, name=user.name)
    )
