"""Database package for the Task Manager API."""

from .database import Database
from .types import UTCDateTime

__all__ = ["Database", "UTCDateTime"]
