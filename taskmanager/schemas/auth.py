"""Authentication schemas for the Task Manager API."""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from taskmanager.models.user import UserRole


class LoginRequest(BaseModel):
    """Login request body. Blank fields are rejected by the route with a 400."""
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    email: str
    role: str
    name: Optional[str] = None


class SessionUser(BaseModel):
    """Identity held by an active session."""
    id: str
    email: str
    role: str
    name: Optional[str] = None


class MeResponse(BaseModel):
    user: Optional[SessionUser] = None


class UserCreate(BaseModel):
    """New account. The role is mandatory so it is always a deliberate choice."""
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: Optional[str] = None
    role: UserRole
