# src/taskdesk/tasks/task_repo.py

"""
JSON codec for the task collection and the slot-backed TaskRepo.

Persisted layout: one JSON array under a single LocalStorage key, records
shaped as {"id", "name", "dueDate", "completed", "createdAt"}.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone
from typing import Any

from ..core.ports import KeyValueStorage
from .task_models import ISO_DATE_RE, Task

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "tasks"


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-01-01T09:30:00.000Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1000:03d}Z"


def parse_timestamp(raw: str) -> datetime:
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "dueDate": task.due_date.isoformat(),
        "completed": task.completed,
        "createdAt": format_timestamp(task.created_at),
    }


def task_from_record(raw: Any) -> Task:
    """Decode one record; raises ValueError/TypeError/KeyError on malformed input."""
    if not isinstance(raw, dict):
        raise TypeError(f"task record must be an object, got {type(raw).__name__}")

    task_id = raw["id"]
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise TypeError(f"task id must be an integer, got {task_id!r}")

    name = raw["name"]
    if not isinstance(name, str):
        raise TypeError("task name must be a string")

    due = raw["dueDate"]
    if not isinstance(due, str) or not ISO_DATE_RE.match(due):
        raise ValueError(f"task dueDate must be YYYY-MM-DD, got {due!r}")

    completed = raw.get("completed", False)
    if not isinstance(completed, bool):
        raise TypeError(f"task completed must be a boolean, got {completed!r}")

    return Task(
        id=task_id,
        name=name,
        due_date=date.fromisoformat(due),
        completed=completed,
        created_at=parse_timestamp(str(raw["createdAt"])),
    )


def encode_tasks(tasks: Sequence[Task]) -> str:
    return json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)


def decode_tasks(payload: str) -> list[Task]:
    """
    Decode a persisted collection.

    - unparsable JSON or a non-array top level raises ValueError
    - malformed records and duplicate ids are skipped (logged)
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError("persisted tasks must be a JSON array")

    out: list[Task] = []
    seen: set[int] = set()
    for i, raw in enumerate(data):
        try:
            task = task_from_record(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed task record #%d: %s", i, e)
            continue
        if task.id in seen:
            logger.warning("Skipping duplicate task id=%s (record #%d)", task.id, i)
            continue
        seen.add(task.id)
        out.append(task)
    return out


class TaskSlotRepo:
    """TaskRepo that keeps the whole collection in one KeyValueStorage slot."""

    def __init__(self, storage: KeyValueStorage, slot: str = DEFAULT_SLOT) -> None:
        self._storage = storage
        self._slot = slot

    def load(self) -> list[Task]:
        """Missing or corrupt state is treated as a fresh start."""
        try:
            payload = self._storage.get_item(self._slot)
        except Exception:
            logger.exception("Failed to read slot=%s; starting empty.", self._slot)
            return []

        if payload is None:
            logger.info("No persisted tasks in slot=%s; starting empty.", self._slot)
            return []

        try:
            tasks = decode_tasks(payload)
        except ValueError as e:
            logger.warning("Persisted tasks in slot=%s are unreadable (%s); starting empty.", self._slot, e)
            return []

        logger.info("Loaded %d tasks from slot=%s", len(tasks), self._slot)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        self._storage.set_item(self._slot, encode_tasks(tasks))
        logger.debug("Saved %d tasks to slot=%s", len(tasks), self._slot)
