# tests/test_task_validator.py

from __future__ import annotations

import subprocess
import sys
from datetime import date

import pytest

from taskmanager.schemas.task import TaskPriority, TaskStatus
from taskmanager.services.task_validator import TaskValidator, validate_task

TITLE_ERROR = "Title must be between 2 and 120 characters."


def test_minimal_payload_gets_defaults() -> None:
    result = validate_task({"title": "  Write report  "})

    assert result.valid
    assert result.errors == []
    value = result.value
    assert value.title == "Write report"
    assert value.description is None
    assert value.status is TaskStatus.PENDING
    assert value.priority is TaskPriority.MEDIUM
    assert value.due_date is None
    assert value.category is None
    assert value.assignee is None
    assert value.tags == []


def test_full_payload_is_normalized() -> None:
    result = validate_task(
        {
            "title": "Ship release",
            "description": "  cut the tag  ",
            "status": "in-progress",
            "priority": "critical",
            "dueDate": "2026-11-02",
            "category": " ops ",
            "assignee": " Grace ",
            "tags": ["release", " backend "],
        }
    )

    assert result.valid
    value = result.value
    assert value.description == "cut the tag"
    assert value.status is TaskStatus.IN_PROGRESS
    assert value.priority is TaskPriority.CRITICAL
    assert value.due_date == date(2026, 11, 2)
    assert value.category == "ops"
    assert value.assignee == "Grace"
    assert value.tags == ["release", "backend"]


@pytest.mark.parametrize("title", ["a", " b ", "x" * 121])
def test_title_length_out_of_range(title: str) -> None:
    result = validate_task({"title": title})

    assert not result.valid
    assert result.value is None
    assert result.errors == [TITLE_ERROR]


@pytest.mark.parametrize("title", ["ab", "x" * 120, "  " + "y" * 120 + "  "])
def test_title_length_bounds_accepted(title: str) -> None:
    assert validate_task({"title": title}).valid


@pytest.mark.parametrize("payload", [{}, {"title": None}, {"title": "   "}, {"title": 42}])
def test_missing_title_is_a_single_error(payload: dict) -> None:
    result = validate_task(payload)

    assert result.errors == ["Title is required."]


def test_all_errors_are_collected() -> None:
    result = validate_task(
        {
            "title": "",
            "status": "later",
            "priority": "urgent",
            "dueDate": "not-a-date",
            "category": "c" * 101,
            "assignee": "a" * 121,
            "tags": 7,
        }
    )

    assert result.value is None
    assert result.errors == [
        "Title is required.",
        "Invalid status.",
        "Invalid priority.",
        "Invalid due date.",
        "Category must be at most 100 characters.",
        "Assignee must be at most 120 characters.",
        "Tags must be a list or a comma-separated string.",
    ]


def test_description_limits() -> None:
    assert validate_task({"title": "ok", "description": "d" * 2000}).valid

    result = validate_task({"title": "ok", "description": "d" * 2001})
    assert result.errors == ["Description must be at most 2000 characters."]

    result = validate_task({"title": "ok", "description": "   "})
    assert result.value.description is None


def test_blank_status_and_priority_fall_back_to_defaults() -> None:
    value = validate_task({"title": "ok", "status": "", "priority": None}).value

    assert value.status is TaskStatus.PENDING
    assert value.priority is TaskPriority.MEDIUM


def test_non_string_enum_values_are_rejected() -> None:
    result = validate_task({"title": "ok", "status": ["done"], "priority": 3})

    assert result.errors == ["Invalid status.", "Invalid priority."]


def test_comma_separated_tags_are_trimmed_and_compacted() -> None:
    value = validate_task({"title": "ok", "tags": "a, b,, c "}).value

    assert value.tags == ["a", "b", "c"]


def test_tag_list_drops_blanks_and_duplicates() -> None:
    tags, error = TaskValidator.validate_tags([" x ", "", "y", "x"])

    assert error is None
    assert tags == ["x", "y"]


def test_tag_limit() -> None:
    ten = [f"t{i}" for i in range(10)]
    assert validate_task({"title": "ok", "tags": ten}).valid

    result = validate_task({"title": "ok", "tags": ten + ["t10"]})
    assert result.errors == ["At most 10 tags are allowed."]


def test_tags_must_be_strings() -> None:
    result = validate_task({"title": "ok", "tags": ["fine", 3]})

    assert result.errors == ["Tags must be strings."]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2026-03-01", date(2026, 3, 1)),
        ("2026-03-01T10:30:00Z", date(2026, 3, 1)),
        ("2026-03-01T23:00:00+02:00", date(2026, 3, 1)),
        ("", None),
        (None, None),
    ],
)
def test_due_date_parsing(raw, expected) -> None:
    result = validate_task({"title": "ok", "dueDate": raw})

    assert result.valid
    assert result.value.due_date == expected


@pytest.mark.parametrize("raw", ["2026-02-30", "tomorrow", 20260301])
def test_invalid_due_date_is_an_error(raw) -> None:
    result = validate_task({"title": "ok", "dueDate": raw})

    assert result.errors == ["Invalid due date."]
    assert result.value is None


def test_snake_case_due_date_key_is_accepted() -> None:
    value = validate_task({"title": "ok", "due_date": "2026-01-15"}).value

    assert value.due_date == date(2026, 1, 15)


@pytest.mark.parametrize("payload", [None, ["title"], "title", 5])
def test_non_mapping_payload(payload) -> None:
    result = validate_task(payload)

    assert result.errors == ["Request body must be a JSON object."]
    assert result.value is None


def test_validator_imports_no_storage_or_web_stack() -> None:
    code = (
        "import sys\n"
        "import taskmanager.services.task_validator\n"
        "loaded = [m for m in ('sqlmodel', 'sqlalchemy', 'fastapi', 'starlette') if m in sys.modules]\n"
        "print(','.join(loaded))\n"
    )

    result = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True)

    assert result.stdout.strip() == ""
