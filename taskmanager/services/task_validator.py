"""Task payload validator.

Turns an untyped request payload into a ``TaskFields`` value or a list of
error messages. Every field is checked independently so callers see all
problems at once. No storage or transport imports here.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Tuple

from taskmanager.schemas.task import (
    ASSIGNEE_MAX_LENGTH,
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    MAX_TAGS,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    TaskFields,
    TaskPriority,
    TaskStatus,
)

# Outcome of a single field check: (normalized value, error or None)
FieldResult = Tuple[Any, Optional[str]]


@dataclass
class ValidationResult:
    """Either ``value`` is set and ``errors`` is empty, or the reverse."""

    value: Optional[TaskFields] = None
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TaskValidator:
    """Field rules for task payloads."""

    @staticmethod
    def validate_title(value: Any) -> FieldResult:
        if not isinstance(value, str) or not value.strip():
            return None, "Title is required."
        title = value.strip()
        if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
            return None, f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters."
        return title, None

    @staticmethod
    def validate_optional_text(value: Any, label: str, max_length: int) -> FieldResult:
        """Trimmed optional string; empty becomes None."""
        if value is None:
            return None, None
        if not isinstance(value, str):
            return None, f"{label} must be a string."
        text = value.strip()
        if len(text) > max_length:
            return None, f"{label} must be at most {max_length} characters."
        return text or None, None

    @staticmethod
    def validate_status(value: Any) -> FieldResult:
        if _is_blank(value):
            return TaskStatus.PENDING, None
        if not isinstance(value, str):
            return None, "Invalid status."
        try:
            return TaskStatus(value.strip()), None
        except ValueError:
            return None, "Invalid status."

    @staticmethod
    def validate_priority(value: Any) -> FieldResult:
        if _is_blank(value):
            return TaskPriority.MEDIUM, None
        if not isinstance(value, str):
            return None, "Invalid priority."
        try:
            return TaskPriority(value.strip()), None
        except ValueError:
            return None, "Invalid priority."

    @staticmethod
    def validate_tags(value: Any) -> FieldResult:
        """
        Accept a list of strings or a comma-separated string.

        Entries are trimmed, empty ones dropped and duplicates removed
        keeping the first occurrence.
        """
        if value is None:
            return [], None
        if isinstance(value, str):
            raw = value.split(",")
        elif isinstance(value, (list, tuple)):
            if not all(isinstance(tag, str) for tag in value):
                return None, "Tags must be strings."
            raw = list(value)
        else:
            return None, "Tags must be a list or a comma-separated string."

        tags: List[str] = []
        for tag in raw:
            tag = tag.strip()
            if tag and tag not in tags:
                tags.append(tag)

        if len(tags) > MAX_TAGS:
            return None, f"At most {MAX_TAGS} tags are allowed."
        return tags, None

    @staticmethod
    def validate_due_date(value: Any) -> FieldResult:
        """
        Parse an ISO date (``YYYY-MM-DD``) or ISO datetime into a date.

        A value that does not parse is an error, never coerced to a default.
        """
        if _is_blank(value):
            return None, None
        if isinstance(value, datetime):
            return value.date(), None
        if isinstance(value, date):
            return value, None
        if not isinstance(value, str):
            return None, "Invalid due date."

        text = value.strip()
        try:
            return date.fromisoformat(text), None
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date(), None
        except ValueError:
            return None, "Invalid due date."


def validate_task(payload: Any) -> ValidationResult:
    """
    Validate a task payload.

    Args:
        payload: Mapping of field name to raw value, usually a decoded JSON body

    Returns:
        ValidationResult holding either the normalized TaskFields or the errors
    """
    if not isinstance(payload, Mapping):
        return ValidationResult(errors=["Request body must be a JSON object."])

    due_raw = payload.get("dueDate", payload.get("due_date"))
    checks = [
        ("title", TaskValidator.validate_title(payload.get("title"))),
        ("description", TaskValidator.validate_optional_text(
            payload.get("description"), "Description", DESCRIPTION_MAX_LENGTH)),
        ("status", TaskValidator.validate_status(payload.get("status"))),
        ("priority", TaskValidator.validate_priority(payload.get("priority"))),
        ("due_date", TaskValidator.validate_due_date(due_raw)),
        ("category", TaskValidator.validate_optional_text(
            payload.get("category"), "Category", CATEGORY_MAX_LENGTH)),
        ("assignee", TaskValidator.validate_optional_text(
            payload.get("assignee"), "Assignee", ASSIGNEE_MAX_LENGTH)),
        ("tags", TaskValidator.validate_tags(payload.get("tags"))),
    ]

    values = {}
    errors: List[str] = []
    for name, (value, error) in checks:
        if error:
            errors.append(error)
        else:
            values[name] = value

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(value=TaskFields(**values))
