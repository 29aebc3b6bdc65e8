"""
Error taxonomy for the Task Manager API.

Every failure reaches the client as JSON with an ``error`` field:
- TaskValidationError  -> 400 (plus the itemized ``errors`` list)
- UnauthorizedError    -> 401
- NotFoundError        -> 404
- DuplicateUserError   -> 409
- StorageError         -> 500
"""

from typing import List, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


class TaskValidationError(AppError):
    """Client-supplied task data violates one or more field rules."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message)

    def to_body(self) -> dict:
        return {"error": self.message, "errors": self.errors}


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class InvalidCredentialsError(UnauthorizedError):
    # Same text for unknown email and wrong password
    default_message = "Invalid credentials"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Task not found"


class DuplicateUserError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "User with this email already exists"


class StorageError(AppError):
    """The persistence layer is unreachable or rejected the operation."""

    default_message = "Storage operation failed"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers to the application."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        # StorageError is already logged with its traceback by storage_guard
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            message = err.get("msg", "Invalid value")
            errors.append(f"{location}: {message}" if location else message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
