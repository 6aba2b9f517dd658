# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdesk.core.state import AppState, ViewState
from taskdesk.storage.local_storage import LocalStorage
from taskdesk.tasks.task_models import SortDirection, SortKey, TaskFilter
from taskdesk.tasks.task_repo import TaskSlotRepo
from taskdesk.tasks.task_store import TaskStore

from .fakes import FakeClock, InMemoryTaskRepo

NOW = datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdesk-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "storage.sqlite3",
        storage_slot="tasks",
        default_filter=TaskFilter.ALL,
        default_sort=SortKey.DATE,
        default_direction=SortDirection.ASC,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture()
def store(repo: InMemoryTaskRepo, clock: FakeClock) -> TaskStore:
    return TaskStore(repo, today=clock.today, now=clock.now)


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """
    AppState wired with a fixed clock.

    NOTE: We keep the real SQLite LocalStorage here because the
    persisted layout is part of what we want to test.
    """
    storage = LocalStorage(settings.storage_path)
    task_store = TaskStore(
        TaskSlotRepo(storage, slot=settings.storage_slot),
        today=clock.today,
        now=clock.now,
    )
    return AppState(settings=settings, store=task_store, view=ViewState())
