# tests/fakes.py

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta

from taskdesk.tasks.task_models import Task


class FakeClock:
    """Mutable clock for TaskStore(today=..., now=...)."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


class InMemoryTaskRepo:
    """
    TaskRepo that records every save as a snapshot.

    Snapshots are copies, so later in-place mutations in the store
    do not rewrite history.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._initial = [replace(t) for t in tasks]
        self.saves: list[list[Task]] = []

    def load(self) -> list[Task]:
        source = self.saves[-1] if self.saves else self._initial
        return [replace(t) for t in source]

    def save(self, tasks: Sequence[Task]) -> None:
        self.saves.append([replace(t) for t in tasks])


class DictStorage:
    """KeyValueStorage backed by a dict."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes += 1
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@dataclass(slots=True)
class ScriptedUI:
    """ConsoleUI that answers confirmations from a script and captures output."""

    answers: list[bool] = field(default_factory=list)
    emitted: list[str] = field(default_factory=list)
    questions: list[str] = field(default_factory=list)

    def emit(self, text: str) -> None:
        self.emitted.append(text)

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else False


class FailingTaskRepo(InMemoryTaskRepo):
    """InMemoryTaskRepo whose saves fail once `broken` is set."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        super().__init__(tasks)
        self.broken = False

    def save(self, tasks: Sequence[Task]) -> None:
        if self.broken:
            raise sqlite3.OperationalError("database is locked")
        super().save(tasks)


class UnreadableStorage(DictStorage):
    def get_item(self, key: str) -> str | None:
        raise sqlite3.OperationalError("unable to open database file")


class ReadOnlyStorage(DictStorage):
    def set_item(self, key: str, value: str) -> None:
        raise sqlite3.OperationalError("attempt to write a readonly database")
