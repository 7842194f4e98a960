"""
TASKFLOW - Collaborator Interfaces
==================================
Capabilities the core depends on: key-value store, clock, id factory and
notification sink. Concrete defaults live next to the protocols; tests swap
in deterministic fakes.
"""

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Protocol

logger = logging.getLogger("taskflow.notify")


class KeyValueStore(Protocol):
    """Synchronous string store; any method may raise on failure."""
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


IdFactory = Callable[[], str]


def new_task_id() -> str:
    """Generate a short opaque task id"""
    return uuid.uuid4().hex[:12]


class NotificationKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    DESTRUCTIVE = "destructive"


class Notifier(Protocol):
    def announce(self, message: str, kind: NotificationKind = NotificationKind.INFO) -> None: ...


class LogNotifier:
    """Notification sink that writes announcements to the log"""

    def announce(self, message: str, kind: NotificationKind = NotificationKind.INFO) -> None:
        if kind == NotificationKind.DESTRUCTIVE:
            logger.warning(f"🗑️ {message}")
        else:
            logger.info(f"🔔 {message}")
