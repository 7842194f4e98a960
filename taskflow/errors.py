"""
TASKFLOW - Error Types
======================
Validation failures are raised to the caller so it can re-prompt.
NotFound is raised by the pure operations and treated as a no-op by the
session controller. Storage faults never leave the persistence gateway.
"""

from pydantic import ValidationError


class TaskFlowError(Exception):
    """Base class for all taskflow errors"""


class TaskValidationError(TaskFlowError, ValueError):
    """Rejected user input (e.g. blank title)"""

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "TaskValidationError":
        messages = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "input"
            messages.append(f"{field}: {error.get('msg', 'invalid value')}")
        return cls("; ".join(messages))


class TaskNotFoundError(TaskFlowError, KeyError):
    """No task with the given id exists in the collection"""

    def __init__(self, task_id: str):
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task not found: {self.task_id}"


class StorageError(TaskFlowError):
    """The key-value store could not be read or written"""
