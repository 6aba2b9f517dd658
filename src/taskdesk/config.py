# src/taskdesk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TypeVar

from dotenv import load_dotenv

from .tasks.task_models import SortDirection, SortKey, TaskFilter

ENV_PREFIX = "TASKDESK"

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StrEnum)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, enum_cls: type[E], default: E) -> E:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        logger.warning("Ignoring %s=%r (expected one of: %s)", name, raw, ", ".join(enum_cls))
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path
    storage_slot: str

    # ---- Initial view ----
    default_filter: TaskFilter
    default_sort: SortKey
    default_direction: SortDirection

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "taskdesk").strip() or "taskdesk"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdesk"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.sqlite3")
        storage_slot = _env(_k("STORAGE_SLOT"), "tasks").strip() or "tasks"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_slot=storage_slot,
            default_filter=_env_choice(_k("DEFAULT_FILTER"), TaskFilter, TaskFilter.ALL),
            default_sort=_env_choice(_k("DEFAULT_SORT"), SortKey, SortKey.DATE),
            default_direction=_env_choice(_k("DEFAULT_DIRECTION"), SortDirection, SortDirection.ASC),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (without overriding the real environment) and build Settings once."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
