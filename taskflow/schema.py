"""
TASKFLOW - Task Schema Definition
=================================
The task record, its priority scale and the view/statistics value types.

Stored field names are camelCase (createdAt, dueDate) so the serialized
collection keeps the layout existing data already uses.
"""

from enum import Enum
from typing import Annotated, Optional, Tuple
from datetime import datetime, timezone
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


TASKS_KEY = "taskTrackerTasks"
USER_KEY = "taskTrackerUser"

TASK_CATEGORIES: Tuple[str, ...] = (
    "Personal",
    "Work",
    "Health",
    "Learning",
    "Shopping",
    "Travel",
    "Finance",
    "Other",
)

ALL_CATEGORIES = "all"


class TaskPriority(str, Enum):
    """Task priority levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
}


class TaskFilter(str, Enum):
    """Status filters offered by the task list"""
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    OVERDUE = "overdue"


class SortOrder(str, Enum):
    """Display orderings for the task list"""
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"
    DUE_DATE = "dueDate"
    ALPHABETICAL = "alphabetical"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _clean_title(value: str) -> str:
    title = value.strip()
    if not title:
        raise ValueError("title must not be empty")
    return title


def _strip(value: str) -> str:
    return value.strip()


Title = Annotated[str, AfterValidator(_clean_title)]
Description = Annotated[str, AfterValidator(_strip)]
Timestamp = Annotated[datetime, AfterValidator(_as_utc)]


class Task(BaseModel):
    """Individual task definition"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    description: str = ""
    completed: bool = False
    created_at: Timestamp = Field(alias="createdAt")
    due_date: Optional[Timestamp] = Field(default=None, alias="dueDate")
    priority: TaskPriority = TaskPriority.MEDIUM
    category: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _null_description_is_empty(cls, value):
        return "" if value is None else value

    def to_record(self) -> dict:
        """Serializable dict using the stored (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskDraft(BaseModel):
    """User-supplied fields for a new task"""
    title: Title
    description: Description = ""
    due_date: Optional[Timestamp] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    category: Optional[str] = None

    @field_validator("category")
    @classmethod
    def _blank_category_is_none(cls, value: Optional[str]) -> Optional[str]:
        return (value or "").strip() or None


class TaskChanges(BaseModel):
    """
    Partial update for an existing task.

    Only fields explicitly passed are applied, so ``TaskChanges(due_date=None)``
    clears the due date while ``TaskChanges()`` changes nothing. Completion is
    not editable here; use toggle.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[Timestamp] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("title must not be empty")
        return _clean_title(value)

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> str:
        return (value or "").strip()

    @field_validator("priority")
    @classmethod
    def _priority_required(cls, value: Optional[TaskPriority]) -> TaskPriority:
        if value is None:
            raise ValueError("priority must not be empty")
        return value

    @field_validator("category")
    @classmethod
    def _blank_category_is_none(cls, value: Optional[str]) -> Optional[str]:
        return (value or "").strip() or None

    def applied_fields(self) -> dict:
        return {name: getattr(self, name) for name in self.model_fields_set}


class ViewOptions(BaseModel):
    """Transient filter/search/category/sort selections"""
    model_config = ConfigDict(frozen=True)

    filter: TaskFilter = TaskFilter.ALL
    search_query: str = ""
    category: str = ALL_CATEGORIES
    sort_by: SortOrder = SortOrder.NEWEST


class TaskStats(BaseModel):
    """Aggregate counts over the whole collection"""
    model_config = ConfigDict(frozen=True)

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    completion_rate: int = 0
    high_priority_pending: int = 0
