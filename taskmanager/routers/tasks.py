"""Task router for the Task Manager API."""
from typing import Any, List
import logging

from fastapi import APIRouter, Body, Depends, Response, status

from taskmanager.dependencies import get_task_service
from taskmanager.errors import NotFoundError, TaskValidationError
from taskmanager.middleware.auth import CurrentUser, get_current_user
from taskmanager.models.task import Task
from taskmanager.schemas.task import TaskFields, TaskResponse
from taskmanager.services.task_service import TaskService
from taskmanager.services.task_validator import validate_task

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tasks"])  # No prefix since main.py adds /api prefix


def serialize_task(task: Task) -> TaskResponse:
    """Convert a stored Task to its API response."""
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        due_date=task.due_date,
        category=task.category,
        assignee=task.assignee,
        tags=list(task.tags or []),
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def require_valid_task(payload: Any) -> TaskFields:
    result = validate_task(payload)
    if not result.valid:
        raise TaskValidationError(result.errors)
    return result.value


@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(service: TaskService = Depends(get_task_service)):
    """List every task, newest first. No login needed."""
    tasks = service.list_tasks()
    return [serialize_task(task) for task in tasks]


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Get a single task by id."""
    task = service.get_task(task_id)
    if not task:
        raise NotFoundError()
    return serialize_task(task)


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: Any = Body(None),
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Create a task from a full payload."""
    fields = require_valid_task(payload)
    task = service.create_task(fields)
    logger.info(f"Task {task.id} created by {current_user.email}")
    return serialize_task(task)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    payload: Any = Body(None),
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Replace a task with a full payload. Omitted fields fall back to their defaults."""
    fields = require_valid_task(payload)
    task = service.update_task(task_id, fields)
    if not task:
        raise NotFoundError()
    logger.info(f"Task {task_id} updated by {current_user.email}")
    return serialize_task(task)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    if not service.delete_task(task_id):
        raise NotFoundError()
    logger.info(f"Task {task_id} deleted by {current_user.email}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
