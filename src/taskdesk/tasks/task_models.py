# src/taskdesk/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

NAME_MAX_LENGTH = 100
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TaskFilter(StrEnum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


class SortKey(StrEnum):
    DATE = "date"
    NAME = "name"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class TaskError(StrEnum):
    """
    Recoverable failures returned (not raised) by TaskStore operations.

    The presentation layer shows `.message` to the user and lets them retry.
    """

    EMPTY_NAME = "empty_name"
    NAME_TOO_LONG = "name_too_long"
    MISSING_DATE = "missing_date"
    INVALID_DATE = "invalid_date"
    PAST_DATE = "past_date"
    NOT_FOUND = "not_found"
    NOTHING_TO_DELETE = "nothing_to_delete"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES: dict[TaskError, str] = {
    TaskError.EMPTY_NAME: "Please enter a task name",
    TaskError.NAME_TOO_LONG: f"Task name cannot exceed {NAME_MAX_LENGTH} characters",
    TaskError.MISSING_DATE: "Please select a due date",
    TaskError.INVALID_DATE: "Please enter the due date as YYYY-MM-DD",
    TaskError.PAST_DATE: "Due date cannot be in the past",
    TaskError.NOT_FOUND: "Task not found (it may have been deleted)",
    TaskError.NOTHING_TO_DELETE: "No tasks to delete",
}


@dataclass(slots=True)
class Task:
    id: int
    name: str
    due_date: date
    completed: bool
    created_at: datetime  # UTC, aware


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    pending: int
    progress_percent: int
