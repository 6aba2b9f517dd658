# src/taskdesk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskStore depends on Protocols instead of concrete implementations.
This keeps storage and presentation swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class KeyValueStorage(Protocol):
    """String slots addressed by key (local analogue of browser localStorage)."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TaskRepo(Protocol):
    """Whole-collection persistence: no partial or delta writes."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: Sequence[Task]) -> None: ...


class ConsoleUI(Protocol):
    """
    Presentation-side port used by command handlers.

    - emit: show a line to the user immediately
    - confirm: ask a yes/no question before a destructive action
    """

    def emit(self, text: str) -> None: ...
    def confirm(self, question: str) -> bool: ...
