# src/taskdesk/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import cast

from ..core.ports import ConsoleUI
from ..core.state import AppState
from ..tasks.task_models import SortDirection, SortKey, Task, TaskError, TaskFilter
from ..tasks.task_view import format_due_date


class CommandArgs(list[str]):
    """Whitespace-split arguments that also keep the raw text they came from."""

    def __init__(self, raw: str = "") -> None:
        super().__init__(raw.split())
        self.raw = raw

    def tail(self, skip: int) -> str:
        """Raw text after the first `skip` arguments, inner whitespace kept as typed."""
        parts = self.raw.split(maxsplit=skip)
        return parts[skip] if len(parts) > skip else ""


CommandHandler2 = Callable[[AppState, CommandArgs], str]
CommandHandler3 = Callable[[AppState, CommandArgs, ConsoleUI | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        ui: ConsoleUI | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = CommandArgs(parts[1] if len(parts) > 1 else "")

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, ui)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def render_stats(state: AppState) -> str:
    s = state.stats()
    return (
        f"Total: {s.total} | Completed: {s.completed} | "
        f"Pending: {s.pending} | Progress: {s.progress_percent}%"
    )


def render_tasks(state: AppState) -> str:
    v = state.view
    header = f"Tasks (filter: {v.task_filter}, sort: {v.sort_key} {v.direction}"
    if v.search:
        header += f', search: "{v.search}"'
    header += ")"

    tasks = state.visible_tasks()
    if not tasks:
        return f"{header}\n  No tasks found."

    today = state.today()
    id_width = max(len("ID"), *(len(str(t.id)) for t in tasks))
    lines = [header, f"  {'ID':<{id_width}}  {'Due':<8}  {'Status':<9}  Name"]
    for t in tasks:
        status = "Completed" if t.completed else "Pending"
        due = format_due_date(t.due_date, today)
        lines.append(f"  {t.id:<{id_width}}  {due:<8}  {status:<9}  {t.name}")
    return "\n".join(lines)


def render_board(state: AppState) -> str:
    return f"{render_tasks(state)}\n{render_stats(state)}"


# ---- argument helpers ----


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _resolve_date_word(raw: str, today: date) -> str:
    word = raw.lower()
    if word == "today":
        return today.isoformat()
    if word == "tomorrow":
        return (today + timedelta(days=1)).isoformat()
    return raw


def _describe(task: Task) -> str:
    return f'"{task.name}" (id {task.id}, due {task.due_date.isoformat()})'


# ---- handlers ----


def cmd_help(state: AppState, args: CommandArgs) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: CommandArgs) -> str:
    return render_board(state)


def cmd_stats(state: AppState, args: CommandArgs) -> str:
    return render_stats(state)


def cmd_add(state: AppState, args: CommandArgs) -> str:
    """
    /add <YYYY-MM-DD|today|tomorrow> <name...>
    """
    if len(args) < 2:
        return "Usage: /add <YYYY-MM-DD|today|tomorrow> <task name>"

    due = _resolve_date_word(args[0], state.today())
    result = state.store.add(args.tail(1), due)
    if isinstance(result, TaskError):
        return result.message
    return f"Added {_describe(result)}.\n\n{render_board(state)}"


def cmd_edit(state: AppState, args: CommandArgs) -> str:
    """
    /edit <id> <YYYY-MM-DD|today|tomorrow> <name...>
    """
    if len(args) < 3:
        return "Usage: /edit <id> <YYYY-MM-DD|today|tomorrow> <task name>"

    task_id = _parse_id(args[0])
    if task_id is None:
        return f"Invalid task id: {args[0]}"

    due = _resolve_date_word(args[1], state.today())
    result = state.store.edit(task_id, args.tail(2), due)
    if isinstance(result, TaskError):
        return result.message
    return f"Updated {_describe(result)}.\n\n{render_board(state)}"


def cmd_toggle(state: AppState, args: CommandArgs) -> str:
    if len(args) != 1:
        return "Usage: /toggle <id>"

    task_id = _parse_id(args[0])
    if task_id is None:
        return f"Invalid task id: {args[0]}"

    result = state.store.toggle(task_id)
    if isinstance(result, TaskError):
        return result.message
    status = "completed" if result.completed else "pending"
    return f'Marked "{result.name}" as {status}.\n\n{render_board(state)}'


def cmd_delete(state: AppState, args: CommandArgs, ui: ConsoleUI | None = None) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"

    task_id = _parse_id(args[0])
    if task_id is None:
        return f"Invalid task id: {args[0]}"

    task = state.store.get(task_id)
    if task is None:
        return TaskError.NOT_FOUND.message

    if ui is None or not ui.confirm(f'Delete "{task.name}"?'):
        return "Cancelled."

    result = state.store.delete(task_id)
    if isinstance(result, TaskError):
        return result.message
    return f'Deleted "{task.name}".\n\n{render_board(state)}'


def cmd_clear(state: AppState, args: CommandArgs, ui: ConsoleUI | None = None) -> str:
    if len(state.store) == 0:
        return TaskError.NOTHING_TO_DELETE.message

    question = "Are you sure you want to delete all tasks? This action cannot be undone."
    if ui is None or not ui.confirm(question):
        return "Cancelled."

    result = state.store.clear_all()
    if isinstance(result, TaskError):
        return result.message
    noun = "task" if result == 1 else "tasks"
    return f"Deleted {result} {noun}.\n\n{render_board(state)}"


def cmd_filter(state: AppState, args: CommandArgs) -> str:
    """
    /filter                       -> show current filter
    /filter all|completed|pending -> set filter
    """
    if not args:
        return f"Filter is {state.view.task_filter}. Use /filter all|completed|pending."

    try:
        state.view.task_filter = TaskFilter(args[0].lower())
    except ValueError:
        return "Usage: /filter all|completed|pending"
    return render_board(state)


def cmd_search(state: AppState, args: CommandArgs) -> str:
    """
    /search <term> -> case-insensitive name search
    /search        -> clear search
    """
    state.view.search = args.raw.strip()
    return render_board(state)


def cmd_sort(state: AppState, args: CommandArgs) -> str:
    """
    /sort                     -> cycle (date asc -> name desc -> date asc ...)
    /sort date|name [asc|desc]
    """
    view = state.view
    if not args:
        view.cycle_sort()
        return render_board(state)

    try:
        key = SortKey(args[0].lower())
        direction = SortDirection(args[1].lower()) if len(args) > 1 else view.direction
    except ValueError:
        return "Usage: /sort [date|name] [asc|desc]"

    view.sort_key = key
    view.direction = direction
    return render_board(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks and progress.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <YYYY-MM-DD|today|tomorrow> <name>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> <YYYY-MM-DD> <name>.")
registry.register("toggle", cmd_toggle, help_text="Toggle completed: /toggle <id>.", aliases=["done"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks (asks for confirmation).")
registry.register("filter", cmd_filter, help_text="Filter by status: /filter all|completed|pending.")
registry.register("search", cmd_search, help_text="Search by name: /search <term> (no term clears).")
registry.register("sort", cmd_sort, help_text="Sort: /sort [date|name] [asc|desc]; no args cycles.")
registry.register("stats", cmd_stats, help_text="Show totals and progress.")
