"""Runtime configuration for the Task Manager API."""
from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings, normally built from the environment."""

    database_url: str = "sqlite:///./taskmanager.db"
    environment: str = "development"
    frontend_url: str = "http://localhost:3000"
    log_level: str = "INFO"
    sql_echo: bool = False

    session_cookie_name: str = "sid"
    session_cookie_secure: bool = False
    session_ttl_days: int = 7
    bcrypt_rounds: int = 12

    # Optional account created on startup when it does not exist yet
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    admin_name: Optional[str] = None
    admin_role: str = "admin"

    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables (and a local .env file)."""
        load_dotenv()
        return cls(
            database_url=os.environ.get("DATABASE_URL", cls.database_url),
            environment=os.environ.get("ENVIRONMENT", cls.environment),
            frontend_url=os.environ.get("FRONTEND_URL", cls.frontend_url),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level),
            sql_echo=_env_bool("SQL_ECHO"),
            session_cookie_name=os.environ.get("SESSION_COOKIE_NAME", cls.session_cookie_name),
            session_cookie_secure=_env_bool("SESSION_COOKIE_SECURE"),
            session_ttl_days=int(os.environ.get("SESSION_TTL_DAYS", cls.session_ttl_days)),
            bcrypt_rounds=int(os.environ.get("BCRYPT_ROUNDS", cls.bcrypt_rounds)),
            admin_email=os.environ.get("ADMIN_EMAIL") or None,
            admin_password=os.environ.get("ADMIN_PASSWORD") or None,
            admin_name=os.environ.get("ADMIN_NAME") or None,
            admin_role=os.environ.get("ADMIN_ROLE", cls.admin_role),
            host=os.environ.get("HOST", cls.host),
            port=int(os.environ.get("PORT", cls.port)),
        )
