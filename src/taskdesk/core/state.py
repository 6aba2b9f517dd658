# src/taskdesk/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..tasks.task_models import SortDirection, SortKey, Task, TaskFilter, TaskStats
from ..tasks.task_store import TaskStore


@dataclass
class ViewState:
    """Current toolbar selection: what the listing shows and in which order."""

    task_filter: TaskFilter = TaskFilter.ALL
    search: str = ""
    sort_key: SortKey = SortKey.DATE
    direction: SortDirection = SortDirection.ASC

    def cycle_sort(self) -> None:
        """One press of the sort button: switch key date<->name and flip direction."""
        self.sort_key = SortKey.NAME if self.sort_key is SortKey.DATE else SortKey.DATE
        self.direction = self.direction.flipped()


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace).
    settings: Any
    store: TaskStore
    view: ViewState = field(default_factory=ViewState)

    def visible_tasks(self) -> list[Task]:
        v = self.view
        return self.store.query(v.task_filter, v.search, v.sort_key, v.direction)

    def stats(self) -> TaskStats:
        return self.store.stats()

    def today(self) -> date:
        return self.store.today()
