# src/taskdesk/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime, timezone

from ..core.ports import TaskRepo
from .task_models import (
    ISO_DATE_RE,
    NAME_MAX_LENGTH,
    SortDirection,
    SortKey,
    Task,
    TaskError,
    TaskFilter,
    TaskStats,
)
from .task_view import compute_stats, query_tasks

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_due_date(raw: date | str | None) -> date | TaskError:
    """Accept a date or a strict YYYY-MM-DD string."""
    if raw is None:
        return TaskError.MISSING_DATE
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = str(raw).strip()
    if not text:
        return TaskError.MISSING_DATE
    if not ISO_DATE_RE.match(text):
        return TaskError.INVALID_DATE
    try:
        return date.fromisoformat(text)
    except ValueError:
        return TaskError.INVALID_DATE


class TaskStore:
    """
    Owns the ordered task collection.

    - loaded once from the repo at construction
    - every successful mutation rewrites the whole collection via repo.save()
      before returning
    - user-facing failures are returned as TaskError members, never raised

    `today` and `now` are injectable for deterministic date validation.
    """

    def __init__(
        self,
        repo: TaskRepo,
        *,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repo = repo
        self._today = today
        self._now = now
        self._tasks: list[Task] = list(repo.load())
        logger.info("TaskStore ready total=%d", len(self._tasks))

    # ---- low-level helpers ----

    def _validate(self, name: str | None, due_date: date | str | None) -> tuple[str, date] | TaskError:
        clean = (name or "").strip()
        if not clean:
            return TaskError.EMPTY_NAME
        if len(clean) > NAME_MAX_LENGTH:
            return TaskError.NAME_TOO_LONG

        due = parse_due_date(due_date)
        if isinstance(due, TaskError):
            return due
        if due < self._today():
            return TaskError.PAST_DATE
        return clean, due

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _next_id(self, created_at: datetime) -> int:
        # Millisecond timestamp, bumped when the clock has not moved past existing ids.
        candidate = int(created_at.timestamp() * 1000)
        if self._tasks:
            candidate = max(candidate, max(t.id for t in self._tasks) + 1)
        return candidate

    def _commit(self, snapshot: list[Task]) -> None:
        # Save first; memory only follows once the write went through.
        self._repo.save(snapshot)
        self._tasks = snapshot

    # ---- read API ----

    @property
    def tasks(self) -> list[Task]:
        """Snapshot in insertion order."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Task | None:
        return self._find(task_id)

    def today(self) -> date:
        """The calendar date validation compares against."""
        return self._today()

    def query(
        self,
        task_filter: TaskFilter | str = TaskFilter.ALL,
        search: str = "",
        sort_key: SortKey | str = SortKey.DATE,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> list[Task]:
        return query_tasks(self._tasks, task_filter, search, sort_key, direction)

    def stats(self) -> TaskStats:
        return compute_stats(self._tasks)

    # ---- mutations ----

    def add(self, name: str | None, due_date: date | str | None) -> Task | TaskError:
        checked = self._validate(name, due_date)
        if isinstance(checked, TaskError):
            logger.debug("Add rejected: %s", checked.value)
            return checked

        clean, due = checked
        created_at = self._now()
        task = Task(
            id=self._next_id(created_at),
            name=clean,
            due_date=due,
            completed=False,
            created_at=created_at,
        )
        self._commit([*self._tasks, task])
        logger.debug("Task added id=%s due=%s", task.id, task.due_date)
        return task

    def edit(self, task_id: int, name: str | None, due_date: date | str | None) -> Task | TaskError:
        task = self._find(task_id)
        if task is None:
            return TaskError.NOT_FOUND

        checked = self._validate(name, due_date)
        if isinstance(checked, TaskError):
            logger.debug("Edit rejected id=%s: %s", task_id, checked.value)
            return checked

        clean, due = checked
        self._repo.save([replace(t, name=clean, due_date=due) if t is task else t for t in self._tasks])
        task.name, task.due_date = clean, due
        logger.debug("Task edited id=%s due=%s", task.id, task.due_date)
        return task

    def toggle(self, task_id: int) -> Task | TaskError:
        task = self._find(task_id)
        if task is None:
            return TaskError.NOT_FOUND

        flipped = not task.completed
        self._repo.save([replace(t, completed=flipped) if t is task else t for t in self._tasks])
        task.completed = flipped
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        return task

    def delete(self, task_id: int) -> TaskError | None:
        task = self._find(task_id)
        if task is None:
            return TaskError.NOT_FOUND

        self._commit([t for t in self._tasks if t is not task])
        logger.debug("Task deleted id=%s", task_id)
        return None

    def clear_all(self) -> int | TaskError:
        if not self._tasks:
            return TaskError.NOTHING_TO_DELETE

        removed = len(self._tasks)
        self._commit([])
        logger.info("Cleared %d tasks", removed)
        return removed
