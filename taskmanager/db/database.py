"""Database handle owning the SQLModel engine."""
from typing import Generator
import logging

from sqlalchemy import event
from sqlmodel import SQLModel, Session, create_engine

from taskmanager.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Explicit handle around the SQLAlchemy engine.

    Created by the application factory, initialised on startup and disposed
    on shutdown. Request handlers get sessions through ``session()``.
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.is_sqlite = settings.is_sqlite

        if self.is_sqlite:
            logger.info(f"Using SQLite database: {self.url}")
        else:
            logger.info("Using server database")

        # SQLite connections are shared across the threadpool FastAPI runs sync deps in
        connect_args = {"check_same_thread": False} if self.is_sqlite else {}
        self.engine = create_engine(
            self.url,
            echo=settings.sql_echo,
            connect_args=connect_args,
            pool_pre_ping=not self.is_sqlite,
        )

        if self.is_sqlite:
            @event.listens_for(self.engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.close()

    def init(self) -> None:
        """Create all tables that do not exist yet."""
        # Import models so their tables are registered on the metadata
        from taskmanager.models import Task, User, UserSession  # noqa: F401

        SQLModel.metadata.create_all(self.engine)
        logger.info("Database tables ready")

    def new_session(self) -> Session:
        """A session for use outside request handling (startup, CLI)."""
        return Session(self.engine)

    def session(self) -> Generator[Session, None, None]:
        """Yield a session bound to this database."""
        with self.new_session() as session:
            yield session

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
        logger.info("Database connections closed")
