"""
TASKFLOW - Mutation Operations
==============================
Create, update, toggle and delete as pure transformations of an immutable
collection. The input tuple is never modified and the store is never
touched; the caller persists the returned collection.
"""

from typing import Mapping, Sequence, Tuple, Union

from pydantic import ValidationError

from .errors import TaskNotFoundError, TaskValidationError
from .ports import Clock, IdFactory
from .schema import Task, TaskChanges, TaskDraft

Tasks = Tuple[Task, ...]

# Give up rather than loop forever on a broken id factory.
MAX_ID_ATTEMPTS = 100


def _as_model(model, fields):
    if isinstance(fields, model):
        return fields
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        raise TaskValidationError.from_pydantic(e) from e


def _index_of(tasks: Sequence[Task], task_id: str) -> int:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise TaskNotFoundError(task_id)


def _fresh_id(tasks: Sequence[Task], id_factory: IdFactory) -> str:
    taken = {task.id for task in tasks}
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = id_factory()
        if candidate not in taken:
            return candidate
    raise RuntimeError(f"Could not generate a unique task id after {MAX_ID_ATTEMPTS} attempts")


def create_task(
    tasks: Sequence[Task],
    fields: Union[TaskDraft, Mapping],
    *,
    clock: Clock,
    id_factory: IdFactory,
) -> Tuple[Tasks, Task]:
    """
    Build a new task from ``fields`` and insert it at the front.

    Returns:
        (new collection, created task)

    Raises:
        TaskValidationError: blank title or otherwise invalid fields
    """
    draft = _as_model(TaskDraft, fields)
    if not draft.title.strip():
        raise TaskValidationError("title: must not be empty")

    task = Task(
        id=_fresh_id(tasks, id_factory),
        title=draft.title.strip(),
        description=draft.description,
        completed=False,
        created_at=clock.now(),
        due_date=draft.due_date,
        priority=draft.priority,
        category=draft.category,
    )
    return (task,) + tuple(tasks), task


def update_task(
    tasks: Sequence[Task],
    task_id: str,
    changes: Union[TaskChanges, Mapping],
) -> Tasks:
    """Replace only the supplied fields; id, created_at and completed are kept."""
    changes = _as_model(TaskChanges, changes)
    index = _index_of(tasks, task_id)
    updated = tasks[index].model_copy(update=changes.applied_fields())
    return tuple(tasks[:index]) + (updated,) + tuple(tasks[index + 1:])


def toggle_task(tasks: Sequence[Task], task_id: str) -> Tuple[Tasks, bool]:
    """Flip completion. Returns (new collection, resulting completed state)."""
    index = _index_of(tasks, task_id)
    toggled = tasks[index].model_copy(update={"completed": not tasks[index].completed})
    return tuple(tasks[:index]) + (toggled,) + tuple(tasks[index + 1:]), toggled.completed


def delete_task(tasks: Sequence[Task], task_id: str) -> Tasks:
    """Remove the task; an unknown id leaves the collection unchanged."""
    return tuple(task for task in tasks if task.id != task_id)


def find_task(tasks: Sequence[Task], task_id: str) -> Task:
    return tasks[_index_of(tasks, task_id)]
