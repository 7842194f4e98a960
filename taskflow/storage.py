"""
TASKFLOW - Persistence Gateway
==============================
Mirrors the task collection and the display name into a key-value store.

The store is untrusted: it may be missing, hand-edited or failing. Reads
degrade to the seed collection, writes are logged and dropped, and the
in-memory collection stays authoritative for the session either way.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from pydantic import ValidationError

from .errors import StorageError
from .ports import KeyValueStore
from .schema import TASKS_KEY, USER_KEY, Task

logger = logging.getLogger("taskflow.storage")

_KEY_RE = re.compile(r"[A-Za-z0-9_.-]+")


# ========================================
# STORE IMPLEMENTATIONS
# ========================================

class MemoryStore:
    """Dict-backed store for tests and embedding"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileStore:
    """
    File-backed store: one file per key under ``data_dir``.

    Layout: {data_dir}/{key}
    """

    def __init__(self, data_dir: str = ".taskflow"):
        self.data_dir = Path(data_dir)

    def _get_file(self, key: str) -> Path:
        """Get path to the file holding ``key``"""
        if not _KEY_RE.fullmatch(key):
            raise StorageError(f"Invalid store key: {key!r}")
        return self.data_dir / key

    def get(self, key: str) -> Optional[str]:
        file_path = self._get_file(key)
        if not file_path.exists():
            return None
        try:
            return file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read {file_path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        file_path = self._get_file(key)
        tmp_path = file_path.with_name(f"{key}.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, file_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Cannot write {file_path}: {e}") from e

    def remove(self, key: str) -> None:
        file_path = self._get_file(key)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot remove {file_path}: {e}") from e


# ========================================
# GATEWAY
# ========================================

class TaskStorage:
    """
    Load/save the task collection under ``taskTrackerTasks`` and the display
    name under ``taskTrackerUser``.

    ``seed_tasks`` is the collection returned (and written) on first use or
    when the stored value cannot be used. It defaults to empty.
    """

    def __init__(self, store: KeyValueStore, seed_tasks: Iterable[Task] = ()):
        self.store = store
        self.seed_tasks: Tuple[Task, ...] = tuple(seed_tasks)

    # ---- tasks ----

    def load_tasks(self) -> Tuple[Task, ...]:
        """Read the stored collection; never raises."""
        try:
            raw = self.store.get(TASKS_KEY)
        except Exception as e:
            logger.error(f"Error loading tasks from store: {e}")
            return self.seed_tasks

        if raw is None:
            logger.info(f"🌱 No stored tasks, seeding {len(self.seed_tasks)} task(s)")
            self.save_tasks(self.seed_tasks)
            return self.seed_tasks

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored tasks are not valid JSON, starting fresh: {e}")
            return self.seed_tasks

        if not isinstance(data, list):
            logger.warning(f"Stored tasks are not a list ({type(data).__name__}), starting fresh")
            return self.seed_tasks

        tasks = []
        for index, record in enumerate(data):
            try:
                tasks.append(Task.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping malformed stored task #{index}: {e.error_count()} error(s)")

        logger.info(f"📂 Loaded {len(tasks)} task(s)")
        return tuple(tasks)

    def save_tasks(self, tasks: Iterable[Task]) -> bool:
        """Overwrite the stored collection; returns False if the write failed."""
        records = [task.to_record() for task in tasks]
        try:
            self.store.set(TASKS_KEY, json.dumps(records, ensure_ascii=False))
        except Exception as e:
            logger.error(f"Error saving tasks to store: {e}")
            return False
        logger.debug(f"💾 Saved {len(records)} task(s)")
        return True

    def clear_tasks(self) -> bool:
        try:
            self.store.remove(TASKS_KEY)
        except Exception as e:
            logger.error(f"Error clearing tasks from store: {e}")
            return False
        logger.info("🧹 Cleared stored tasks")
        return True

    # ---- display name ----

    def load_user(self) -> Optional[str]:
        try:
            name = self.store.get(USER_KEY)
        except Exception as e:
            logger.error(f"Error loading user from store: {e}")
            return None
        return name or None

    def save_user(self, name: str) -> bool:
        try:
            self.store.set(USER_KEY, name)
        except Exception as e:
            logger.error(f"Error saving user to store: {e}")
            return False
        return True

    def clear_user(self) -> bool:
        try:
            self.store.remove(USER_KEY)
        except Exception as e:
            logger.error(f"Error clearing user from store: {e}")
            return False
        return True
