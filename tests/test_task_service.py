# tests/test_task_service.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from taskmanager.errors import StorageError
from taskmanager.schemas.task import TaskFields
from taskmanager.services import task_service as task_service_module
from taskmanager.services.task_service import TaskService
from taskmanager.services.task_validator import validate_task


def fields(**payload) -> TaskFields:
    payload.setdefault("title", "Default title")
    result = validate_task(payload)
    assert result.valid, result.errors
    return result.value


@pytest.fixture()
def ticking_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    """Each utcnow() call in the service is one second after the previous one."""
    state = {"now": datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)}

    def fake_utcnow() -> datetime:
        state["now"] += timedelta(seconds=1)
        return state["now"]

    monkeypatch.setattr(task_service_module, "utcnow", fake_utcnow)


def test_create_assigns_id_and_timestamps(task_service: TaskService) -> None:
    task = task_service.create_task(
        fields(title="Plan sprint", priority="high", tags="planning, team", dueDate="2026-05-04")
    )

    assert task.id
    assert task.created_at is not None
    assert task.created_at == task.updated_at
    assert task.title == "Plan sprint"
    assert task.status == "pending"
    assert task.priority == "high"
    assert task.tags == ["planning", "team"]
    assert task.due_date == date(2026, 5, 4)


def test_timestamps_come_back_as_utc(task_service: TaskService) -> None:
    created = task_service.create_task(fields())

    stored = task_service.list_tasks()[0]

    for stamp in (created.created_at, stored.created_at, stored.updated_at):
        assert stamp.tzinfo is not None
        assert stamp.utcoffset() == timedelta(0)
    assert stored.created_at == created.created_at


def test_list_contains_exactly_the_created_record(task_service: TaskService) -> None:
    value = fields(title="Only one", description="details", category="home")
    created = task_service.create_task(value)

    tasks = task_service.list_tasks()

    assert [t.id for t in tasks] == [created.id]
    stored = tasks[0]
    assert stored.title == value.title
    assert stored.description == value.description
    assert stored.status == value.status.value
    assert stored.priority == value.priority.value
    assert stored.category == value.category
    assert stored.assignee is None
    assert stored.tags == []


def test_list_is_newest_first(task_service: TaskService, ticking_clock) -> None:
    first = task_service.create_task(fields(title="first"))
    second = task_service.create_task(fields(title="second"))
    third = task_service.create_task(fields(title="third"))

    assert [t.id for t in task_service.list_tasks()] == [third.id, second.id, first.id]


def test_update_is_a_full_replace(task_service: TaskService, ticking_clock) -> None:
    original = task_service.create_task(
        fields(
            title="Original",
            description="old notes",
            status="done",
            priority="critical",
            dueDate="2026-02-01",
            category="work",
            assignee="Grace",
            tags=["a", "b"],
        )
    )
    created_at = original.created_at

    updated = task_service.update_task(original.id, fields(title="Replacement"))

    assert updated is not None
    assert updated.id == original.id
    assert updated.title == "Replacement"
    assert updated.description is None
    assert updated.status == "pending"
    assert updated.priority == "medium"
    assert updated.due_date is None
    assert updated.category is None
    assert updated.assignee is None
    assert updated.tags == []
    assert updated.created_at == created_at
    assert updated.updated_at > created_at

    reread = task_service.get_task(original.id)
    assert reread.title == "Replacement"
    assert reread.tags == []


def test_update_unknown_id_returns_none(task_service: TaskService) -> None:
    assert task_service.update_task("missing", fields()) is None
    assert task_service.list_tasks() == []


def test_delete(task_service: TaskService) -> None:
    task = task_service.create_task(fields())

    assert task_service.delete_task(task.id) is True
    assert task_service.get_task(task.id) is None
    assert task_service.delete_task(task.id) is False


def test_storage_failure_is_wrapped(task_service: TaskService, db_session, monkeypatch) -> None:
    def broken_commit() -> None:
        raise OperationalError("COMMIT", {}, Exception("database is unreachable"))

    monkeypatch.setattr(db_session, "commit", broken_commit)

    with pytest.raises(StorageError) as excinfo:
        task_service.create_task(fields(title="Never stored"))

    assert excinfo.value.message == "Failed to create task"
    assert task_service.list_tasks() == []
