# src/taskdesk/tasks/task_view.py

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from datetime import date, timedelta

from .task_models import SortDirection, SortKey, Task, TaskFilter, TaskStats


def collation_key(text: str) -> tuple[str, str]:
    """
    Locale-friendly ordering for task names.

    Primary key ignores case and accents ("eclair" sorts with "Éclair"),
    the raw text breaks remaining ties deterministically.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _matches_filter(task: Task, task_filter: TaskFilter) -> bool:
    if task_filter is TaskFilter.COMPLETED:
        return task.completed
    if task_filter is TaskFilter.PENDING:
        return not task.completed
    return True


def query_tasks(
    tasks: Iterable[Task],
    task_filter: TaskFilter | str = TaskFilter.ALL,
    search: str = "",
    sort_key: SortKey | str = SortKey.DATE,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Task]:
    """
    Derive the displayed list: status filter, then search, then a stable sort.

    Returns a new list; the input order is never modified. Equal sort keys
    keep input order in both directions.
    """
    task_filter = TaskFilter(task_filter)
    sort_key = SortKey(sort_key)
    direction = SortDirection(direction)

    out = [t for t in tasks if _matches_filter(t, task_filter)]

    needle = (search or "").casefold()
    if needle:
        out = [t for t in out if needle in t.name.casefold()]

    reverse = direction is SortDirection.DESC
    if sort_key is SortKey.NAME:
        out.sort(key=lambda t: collation_key(t.name), reverse=reverse)
    else:
        out.sort(key=lambda t: t.due_date, reverse=reverse)
    return out


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    total = 0
    completed = 0
    for t in tasks:
        total += 1
        if t.completed:
            completed += 1

    # round-half-up of completed / total * 100, in integers
    progress = 0 if total == 0 else (completed * 200 + total) // (2 * total)
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        progress_percent=progress,
    )


def format_due_date(due: date, today: date) -> str:
    if due == today:
        return "Today"
    if due == today + timedelta(days=1):
        return "Tomorrow"
    return due.strftime("%m/%d/%y")
