"""
TASKFLOW - Filter/Search/Sort Pipeline
======================================
Derives the displayed task list from the full collection.

Status filter, text search and category are applied together (a task must
pass all three), then the result is sorted. Every function here is pure and
returns a new tuple; sorts are stable so ties keep their input order.
"""

import unicodedata
from datetime import datetime
from typing import Callable, Dict, Iterable, Tuple

from .schema import ALL_CATEGORIES, SortOrder, Task, TaskFilter, ViewOptions


def is_overdue(task: Task, now: datetime) -> bool:
    """Incomplete with a due date strictly before ``now``"""
    return not task.completed and task.due_date is not None and task.due_date < now


def matches_filter(task: Task, task_filter: TaskFilter, now: datetime) -> bool:
    if task_filter == TaskFilter.COMPLETED:
        return task.completed
    if task_filter == TaskFilter.PENDING:
        return not task.completed
    if task_filter == TaskFilter.OVERDUE:
        return is_overdue(task, now)
    return True


def matches_search(task: Task, query: str) -> bool:
    needle = query.casefold()
    return needle in task.title.casefold() or needle in task.description.casefold()


def matches_category(task: Task, category: str) -> bool:
    return category == ALL_CATEGORIES or task.category == category


def filter_tasks(tasks: Iterable[Task], options: ViewOptions, now: datetime) -> Tuple[Task, ...]:
    return tuple(
        task for task in tasks
        if matches_filter(task, options.filter, now)
        and matches_search(task, options.search_query)
        and matches_category(task, options.category)
    )


def _collation_key(title: str) -> Tuple[str, str]:
    # Accents and case only break ties between otherwise equal letters.
    folded = title.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, folded


def _due_date_key(task: Task):
    if task.due_date is None:
        return (1,)
    return (0, task.due_date)


_SORTS: Dict[SortOrder, Tuple[Callable[[Task], object], bool]] = {
    SortOrder.NEWEST: (lambda t: t.created_at, True),
    SortOrder.OLDEST: (lambda t: t.created_at, False),
    SortOrder.PRIORITY: (lambda t: t.priority.rank, True),
    SortOrder.DUE_DATE: (_due_date_key, False),
    SortOrder.ALPHABETICAL: (lambda t: _collation_key(t.title), False),
}


def sort_tasks(tasks: Iterable[Task], sort_by: SortOrder = SortOrder.NEWEST) -> Tuple[Task, ...]:
    key, descending = _SORTS.get(sort_by, _SORTS[SortOrder.NEWEST])
    return tuple(sorted(tasks, key=key, reverse=descending))


def visible_tasks(tasks: Iterable[Task], options: ViewOptions, now: datetime) -> Tuple[Task, ...]:
    """Filter, then sort. The order matters and must not be swapped."""
    return sort_tasks(filter_tasks(tasks, options, now), options.sort_by)


def task_counts(tasks: Iterable[Task], now: datetime) -> Dict[str, int]:
    """Per-filter counts shown next to each status filter"""
    tasks = tuple(tasks)
    return {
        task_filter.value: sum(1 for task in tasks if matches_filter(task, task_filter, now))
        for task_filter in TaskFilter
    }
