# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from taskflow.ports import NotificationKind


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class SequentialIds:
    """Deterministic id factory: t1, t2, ..."""

    def __init__(self, prefix: str = "t") -> None:
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}{self.count}"


class ScriptedIds:
    """Id factory that replays a fixed list of ids."""

    def __init__(self, ids: List[str]) -> None:
        self.ids = list(ids)

    def __call__(self) -> str:
        return self.ids.pop(0)


class FailingStore:
    """
    Key-value store whose reads and/or writes blow up,
    e.g. quota exceeded or storage disabled.
    """

    def __init__(self, fail_get: bool = True, fail_set: bool = True, fail_remove: bool = True) -> None:
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.fail_remove = fail_remove
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise OSError("storage unavailable")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise OSError("quota exceeded")
        self.data[key] = value

    def remove(self, key: str) -> None:
        if self.fail_remove:
            raise OSError("storage unavailable")
        self.data.pop(key, None)


@dataclass
class RecordingNotifier:
    announced: List[Tuple[str, NotificationKind]] = field(default_factory=list)

    def announce(self, message: str, kind: NotificationKind = NotificationKind.INFO) -> None:
        self.announced.append((message, kind))
