"""Helpers shared by the services."""
from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from taskmanager.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(session: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise database failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Failed to {action}")
        raise StorageError(f"Failed to {action}") from e
