"""Task service: persistence for validated task records."""
from typing import List, Optional
import logging

from sqlmodel import Session, select

from taskmanager.models.task import Task
from taskmanager.schemas.task import TaskFields
from taskmanager.services.base import storage_guard
from taskmanager.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class TaskService:
    """
    CRUD over the shared task list.

    Methods take ``TaskFields`` that already passed validation. There is no
    locking: concurrent updates to one task are last-write-wins.
    """

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def _apply(task: Task, fields: TaskFields) -> None:
        task.title = fields.title
        task.description = fields.description
        task.status = fields.status.value
        task.priority = fields.priority.value
        task.due_date = fields.due_date
        task.category = fields.category
        task.assignee = fields.assignee
        task.tags = list(fields.tags)

    def list_tasks(self) -> List[Task]:
        """All tasks, most recently created first."""
        with storage_guard(self.session, "fetch tasks"):
            statement = select(Task).order_by(Task.created_at.desc())
            return list(self.session.exec(statement).all())

    def get_task(self, task_id: str) -> Optional[Task]:
        with storage_guard(self.session, "fetch task"):
            return self.session.get(Task, task_id)

    def create_task(self, fields: TaskFields) -> Task:
        """Insert a new task with a fresh id and timestamps."""
        now = utcnow()
        task = Task(title=fields.title, created_at=now, updated_at=now)
        self._apply(task, fields)

        with storage_guard(self.session, "create task"):
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)

        logger.info(f"Created task {task.id}")
        return task

    def update_task(self, task_id: str, fields: TaskFields) -> Optional[Task]:
        """
        Replace every mutable field of a task.

        Fields the client left out take their validated defaults, so nothing
        from the previous version survives. Returns None for an unknown id.
        """
        with storage_guard(self.session, "update task"):
            task = self.session.get(Task, task_id)
            if not task:
                return None

            self._apply(task, fields)
            task.updated_at = utcnow()
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)

        logger.info(f"Updated task {task_id}")
        return task

    def delete_task(self, task_id: str) -> bool:
        """Delete a task. Returns False when no task has that id."""
        with storage_guard(self.session, "delete task"):
            task = self.session.get(Task, task_id)
            if not task:
                return False

            self.session.delete(task)
            self.session.commit()

        logger.info(f"Deleted task {task_id}")
        return True
