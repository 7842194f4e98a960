"""
TASKFLOW - Task Manager
=======================
Session controller: owns the current user, the task collection and the
view options. Every mutation goes through a pure operation, then the new
collection is written through the storage gateway and announced.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .errors import TaskNotFoundError, TaskValidationError
from .ports import Clock, IdFactory, LogNotifier, NotificationKind, Notifier, SystemClock, new_task_id
from .schema import Task, TaskChanges, TaskDraft, TaskStats, ViewOptions
from .stats import compute_stats
from .storage import TaskStorage
from . import operations, views

logger = logging.getLogger("taskflow")


class TaskManager:
    """
    Single-user task session.

    The in-memory collection is the source of truth for the session; a
    failed write only costs durability.
    """

    def __init__(
        self,
        storage: TaskStorage,
        clock: Optional[Clock] = None,
        id_factory: IdFactory = new_task_id,
        notifier: Optional[Notifier] = None,
    ):
        self.storage = storage
        self.clock = clock or SystemClock()
        self.id_factory = id_factory
        self.notifier = notifier or LogNotifier()
        self.view = ViewOptions()
        self._tasks: Tuple[Task, ...] = ()
        self._user: Optional[str] = storage.load_user()

    # ========================================
    # SESSION
    # ========================================

    @property
    def user(self) -> Optional[str]:
        return self._user

    def login(self, name: str) -> str:
        display_name = (name or "").strip()
        if not display_name:
            raise TaskValidationError("name: must not be empty")
        self._user = display_name
        self.storage.save_user(display_name)
        logger.info(f"👋 Logged in as {display_name}")
        return display_name

    def logout(self) -> None:
        self._user = None
        self.storage.clear_user()
        logger.info("👋 Logged out")

    def load(self) -> Tuple[Task, ...]:
        self._tasks = self.storage.load_tasks()
        return self._tasks

    def reset(self) -> None:
        """Drop every task, in memory and in the store."""
        self._tasks = ()
        self.storage.clear_tasks()

    # ========================================
    # TASK OPERATIONS
    # ========================================

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return self._tasks

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _commit(self, tasks: Tuple[Task, ...]) -> None:
        self._tasks = tasks
        self.storage.save_tasks(tasks)

    def add_task(self, fields: Union[TaskDraft, Mapping[str, Any]]) -> Task:
        """Create a task; raises TaskValidationError for a blank title."""
        tasks, task = operations.create_task(
            self._tasks, fields, clock=self.clock, id_factory=self.id_factory
        )
        self._commit(tasks)
        logger.info(f"➕ Created task: {task.title} ({task.id})")
        self.notifier.announce("Task Created: your new task has been added.", NotificationKind.SUCCESS)
        return task

    def update_task(
        self,
        task_id: str,
        changes: Union[TaskChanges, Mapping[str, Any]],
    ) -> Optional[Task]:
        try:
            tasks = operations.update_task(self._tasks, task_id, changes)
        except TaskNotFoundError:
            logger.warning(f"Cannot update, task not found: {task_id}")
            return None
        self._commit(tasks)
        task = operations.find_task(tasks, task_id)
        logger.info(f"✏️ Updated task: {task.title} ({task_id})")
        self.notifier.announce("Task Updated: your task has been updated.", NotificationKind.SUCCESS)
        return task

    def toggle_task(self, task_id: str) -> Optional[bool]:
        """Flip completion; returns the new state, or None if the id is unknown."""
        try:
            tasks, completed = operations.toggle_task(self._tasks, task_id)
        except TaskNotFoundError:
            logger.warning(f"Cannot toggle, task not found: {task_id}")
            return None
        self._commit(tasks)
        if completed:
            logger.info(f"✅ Completed task: {task_id}")
            self.notifier.announce("Task Completed: great job!", NotificationKind.SUCCESS)
        else:
            logger.info(f"↩️ Reopened task: {task_id}")
            self.notifier.announce("Task Reopened: task marked as pending.", NotificationKind.INFO)
        return completed

    def delete_task(self, task_id: str) -> bool:
        tasks = operations.delete_task(self._tasks, task_id)
        if len(tasks) == len(self._tasks):
            logger.warning(f"Cannot delete, task not found: {task_id}")
            return False
        self._commit(tasks)
        logger.info(f"🗑️ Deleted task: {task_id}")
        self.notifier.announce("Task Deleted: the task has been removed.", NotificationKind.DESTRUCTIVE)
        return True

    # ========================================
    # VIEWS & REPORTING
    # ========================================

    def set_view(self, **changes: Any) -> ViewOptions:
        """Change filter/search_query/category/sort_by; unspecified fields are kept."""
        try:
            self.view = ViewOptions.model_validate({**self.view.model_dump(), **changes})
        except ValidationError as e:
            raise TaskValidationError.from_pydantic(e) from e
        return self.view

    def visible_tasks(self) -> Tuple[Task, ...]:
        return views.visible_tasks(self._tasks, self.view, self.clock.now())

    def task_counts(self) -> Dict[str, int]:
        return views.task_counts(self._tasks, self.clock.now())

    def stats(self) -> TaskStats:
        return compute_stats(self._tasks, self.clock.now())
