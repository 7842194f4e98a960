"""
TASKFLOW - Statistics Aggregator
================================
Counts over the full collection (never the filtered view), recomputed from
scratch on every call.
"""

from datetime import datetime
from typing import Iterable

from .schema import Task, TaskPriority, TaskStats
from .views import is_overdue


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty collection"""
    if total <= 0:
        return 0
    return (completed * 200 + total) // (total * 2)


def compute_stats(tasks: Iterable[Task], now: datetime) -> TaskStats:
    total = completed = overdue = high_priority_pending = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
            continue
        if is_overdue(task, now):
            overdue += 1
        if task.priority == TaskPriority.HIGH:
            high_priority_pending += 1

    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=overdue,
        completion_rate=completion_rate(completed, total),
        high_priority_pending=high_priority_pending,
    )


def progress_bar(rate: int, width: int = 10) -> str:
    """Text progress bar, e.g. ``████░░░░░░``"""
    filled = max(0, min(width, rate * width // 100))
    return "█" * filled + "░" * (width - filled)
