"""Authentication service: password hashing, login and server-side sessions."""
from datetime import timedelta
from functools import lru_cache
from typing import Optional
import logging
import secrets

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from taskmanager.config import Settings
from taskmanager.errors import DuplicateUserError
from taskmanager.models.session import UserSession
from taskmanager.models.user import User, UserRole
from taskmanager.services.base import storage_guard
from taskmanager.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Salted bcrypt hash of a password."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return hash_password(secrets.token_hex(16), rounds)


class AuthService:
    """
    Account lookup and session bookkeeping.

    Sessions live in the ``user_session`` table. Their expiry is fixed when
    they are issued and is not extended by activity.
    """

    def __init__(self, session: Session, settings: Settings):
        self.session = session
        self.settings = settings

    # Users

    def get_user_by_email(self, email: str) -> Optional[User]:
        with storage_guard(self.session, "fetch user"):
            statement = select(User).where(User.email == normalize_email(email))
            return self.session.exec(statement).first()

    def create_user(
        self,
        email: str,
        password: str,
        role: UserRole,
        name: Optional[str] = None,
    ) -> User:
        """Create an account. The caller always chooses the role."""
        email = normalize_email(email)
        if self.get_user_by_email(email):
            raise DuplicateUserError()

        user = User(
            email=email,
            password_hash=hash_password(password, self.settings.bcrypt_rounds),
            name=name.strip() if name and name.strip() else None,
            role=UserRole(role).value,
        )
        with storage_guard(self.session, "create user"):
            try:
                self.session.add(user)
                self.session.commit()
            except IntegrityError as e:
                # Unique index caught a concurrent insert of the same email
                self.session.rollback()
                raise DuplicateUserError() from e
            self.session.refresh(user)

        logger.info(f"Created user {user.email} with role {user.role}")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Return the user when the credentials match, else None.

        A missing user still costs one bcrypt check so both failure cases
        take the same work.
        """
        user = self.get_user_by_email(email)
        if user is None:
            verify_password(password, _dummy_hash(self.settings.bcrypt_rounds))
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    # Sessions

    def create_session(self, user: User) -> UserSession:
        """Issue a new session for a user."""
        now = utcnow()
        record = UserSession(
            id=secrets.token_urlsafe(32),
            user_id=user.id,
            email=user.email,
            role=user.role,
            name=user.name,
            created_at=now,
            expires_at=now + timedelta(days=self.settings.session_ttl_days),
        )
        with storage_guard(self.session, "create session"):
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        return record

    def get_session(self, token: Optional[str]) -> Optional[UserSession]:
        """Look up an active session. Expired ones are deleted and ignored."""
        if not token:
            return None
        with storage_guard(self.session, "fetch session"):
            record = self.session.get(UserSession, token)
            if record is None:
                return None
            if record.is_expired():
                self.session.delete(record)
                self.session.commit()
                return None
            return record

    def destroy_session(self, token: Optional[str]) -> None:
        if not token:
            return
        with storage_guard(self.session, "destroy session"):
            record = self.session.get(UserSession, token)
            if record is not None:
                self.session.delete(record)
                self.session.commit()

    def purge_expired(self) -> int:
        """Delete every expired session. Returns how many were removed."""
        with storage_guard(self.session, "purge sessions"):
            statement = select(UserSession).where(UserSession.expires_at <= utcnow())
            expired = list(self.session.exec(statement).all())
            for record in expired:
                self.session.delete(record)
            self.session.commit()
        count = len(expired)
        if count:
            logger.info(f"Purged {count} expired sessions")
        return count
