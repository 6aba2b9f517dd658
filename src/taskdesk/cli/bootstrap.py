# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires LocalStorage -> TaskSlotRepo -> TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState, ViewState
from ..storage.local_storage import LocalStorage
from ..tasks.task_repo import TaskSlotRepo
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = LocalStorage(settings.storage_path)
    repo = TaskSlotRepo(storage, slot=settings.storage_slot)
    store = TaskStore(repo)

    view = ViewState(
        task_filter=settings.default_filter,
        sort_key=settings.default_sort,
        direction=settings.default_direction,
    )
    logger.debug("State wired storage=%s slot=%s", settings.storage_path, settings.storage_slot)
    return AppState(settings=settings, store=store, view=view)
