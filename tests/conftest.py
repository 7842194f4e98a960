# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskflow.manager import TaskManager
from taskflow.schema import Task, TaskPriority
from taskflow.storage import MemoryStore, TaskStorage

from .fakes import FixedClock, RecordingNotifier, SequentialIds

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def make_task(
    task_id: str,
    *,
    title: str = "",
    description: str = "",
    completed: bool = False,
    created_at: datetime = NOW,
    due_date: datetime | None = None,
    priority: TaskPriority = TaskPriority.MEDIUM,
    category: str | None = None,
) -> Task:
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        description=description,
        completed=completed,
        created_at=created_at,
        due_date=due_date,
        priority=priority,
        category=category,
    )


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def yesterday() -> datetime:
    return NOW - timedelta(days=1)


@pytest.fixture()
def tomorrow() -> datetime:
    return NOW + timedelta(days=1)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def storage(store: MemoryStore) -> TaskStorage:
    return TaskStorage(store)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def manager(storage: TaskStorage, clock: FixedClock, ids: SequentialIds, notifier: RecordingNotifier) -> TaskManager:
    """
    TaskManager wired with deterministic fakes and an in-memory store.
    """
    manager = TaskManager(storage, clock=clock, id_factory=ids, notifier=notifier)
    manager.load()
    return manager
