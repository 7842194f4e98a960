"""
TASKFLOW - Personal Task Tracker
================================

Single-user task list persisted to a key-value store.

Usage:
    from taskflow import TaskManager, TaskStorage, MemoryStore

    manager = TaskManager(TaskStorage(MemoryStore()))
    manager.login("Ada")
    manager.load()

    task = manager.add_task({"title": "Write report", "priority": "high"})
    manager.toggle_task(task.id)

    manager.set_view(filter="pending", sort_by="dueDate")
    print(manager.visible_tasks())
    print(manager.stats())
"""

from .schema import (
    Task,
    TaskPriority,
    TaskFilter,
    SortOrder,
    TaskDraft,
    TaskChanges,
    ViewOptions,
    TaskStats,
    TASK_CATEGORIES,
)
from .errors import TaskFlowError, TaskValidationError, TaskNotFoundError, StorageError
from .storage import TaskStorage, MemoryStore, FileStore
from .manager import TaskManager

__version__ = "1.0.0"
__all__ = [
    "TaskManager",
    "TaskStorage",
    "MemoryStore",
    "FileStore",
    "Task",
    "TaskPriority",
    "TaskFilter",
    "SortOrder",
    "TaskDraft",
    "TaskChanges",
    "ViewOptions",
    "TaskStats",
    "TASK_CATEGORIES",
    "TaskFlowError",
    "TaskValidationError",
    "TaskNotFoundError",
    "StorageError",
]
