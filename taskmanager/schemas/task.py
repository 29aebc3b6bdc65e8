"""Task schemas for the Task Manager API."""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 2000
CATEGORY_MAX_LENGTH = 100
ASSIGNEE_MAX_LENGTH = 120
MAX_TAGS = 10


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TaskFields(BaseModel):
    """
    A validated task value: every mutable field, already normalized.

    Only ``validate_task`` builds these, so the store can write them as-is.
    """

    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    category: Optional[str] = None
    assignee: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class TaskResponse(BaseModel):
    """Task as returned to API clients (camelCase keys, UTC timestamps)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[date] = None
    category: Optional[str] = None
    assignee: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
