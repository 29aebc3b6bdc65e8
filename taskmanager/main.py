"""Main FastAPI application for the Task Manager API."""
from typing import Optional
import logging

from fastapi import FastAPI

from taskmanager import __version__
from taskmanager.config import Settings
from taskmanager.db.database import Database
from taskmanager.errors import DuplicateUserError, register_exception_handlers
from taskmanager.middleware.cors import add_cors_middleware
from taskmanager.models.user import UserRole
from taskmanager.routers import auth_router, tasks_router
from taskmanager.services.auth_service import AuthService
from taskmanager.utils.logger import add_request_logging, setup_logging

logger = logging.getLogger(__name__)


def seed_admin_account(database: Database, settings: Settings) -> None:
    """Create the configured bootstrap account if it does not exist yet."""
    if not (settings.admin_email and settings.admin_password):
        return
    with database.new_session() as session:
        auth = AuthService(session, settings)
        try:
            auth.create_user(
                email=settings.admin_email,
                password=settings.admin_password,
                role=UserRole(settings.admin_role),
                name=settings.admin_name,
            )
        except DuplicateUserError:
            logger.info(f"Seed account {settings.admin_email} already exists")


def purge_expired_sessions(database: Database, settings: Settings) -> int:
    with database.new_session() as session:
        return AuthService(session, settings).purge_expired()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task Manager API",
        description="JSON API for a shared task list with a session login gate",
        version=__version__,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    add_cors_middleware(app, settings)
    add_request_logging(app)
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Create tables, drop stale sessions and seed the bootstrap account."""
        database: Database = app.state.database
        database.init()
        purge_expired_sessions(database, settings)
        seed_admin_account(database, settings)
        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.database.dispose()

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    app.include_router(tasks_router, prefix="/api")  # /api/tasks...
    app.include_router(auth_router, prefix="/api")  # /api/login, /api/logout, /api/me

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
