"""SQLModel tables for the Task Manager API."""

from .task import Task
from .user import User, UserRole
from .session import UserSession

__all__ = ["Task", "User", "UserRole", "UserSession"]
