"""Task model for SQLModel."""
from datetime import date, datetime
from typing import List, Optional
import uuid

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from taskmanager.db.types import UTCDateTime
from taskmanager.schemas.task import (
    ASSIGNEE_MAX_LENGTH,
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskPriority,
    TaskStatus,
)
from taskmanager.utils.timeutils import utcnow


class Task(SQLModel, table=True):
    """Task entity. Rows are only ever written from validated task fields."""

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex,
        primary_key=True,
        max_length=32,
    )
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    status: str = Field(default=TaskStatus.PENDING.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    due_date: Optional[date] = Field(default=None)
    category: Optional[str] = Field(default=None, max_length=CATEGORY_MAX_LENGTH)
    assignee: Optional[str] = Field(default=None, max_length=ASSIGNEE_MAX_LENGTH)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
