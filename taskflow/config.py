"""
TASKFLOW - Settings
===================
Settings resolved from TASKFLOW_* environment variables. CLI flags
override whatever is resolved here.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "TASKFLOW"
DEFAULT_DATA_DIR = ".taskflow"


def _env(suffix: str) -> Optional[str]:
    value = os.getenv(f"{ENV_PREFIX}_{suffix}")
    if value is None or not value.strip():
        return None
    return value.strip()


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        overrides = {}
        data_dir = _env("DIR")
        if data_dir:
            overrides["data_dir"] = Path(data_dir).expanduser()
        log_level = _env("LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level
        return cls(**overrides)
