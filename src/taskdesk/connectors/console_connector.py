# src/taskdesk/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import CommandRegistry, render_board
from ..cli.commands import registry as command_registry
from ..core.ports import ConsoleUI
from ..core.state import AppState

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}


class StdioUI:
    """ConsoleUI over input()/print()."""

    def __init__(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._read = read
        self._write = write

    def emit(self, text: str) -> None:
        self._write(text)

    def confirm(self, question: str) -> bool:
        try:
            answer = self._read(f"{question} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            self._write("")
            return False
        return answer.strip().lower() in _YES


def run_console_loop(
    state: AppState,
    *,
    ui: ConsoleUI | None = None,
    commands: CommandRegistry | None = None,
    read: Callable[[str], str] = input,
) -> None:
    if ui is None:
        ui = StdioUI(read=read)
    if commands is None:
        commands = command_registry
    app_name = str(getattr(state.settings, "app_name", "taskdesk"))

    logger.info("Console connector started (tasks=%d).", len(state.store))
    ui.emit(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")
    ui.emit(render_board(state))

    while True:
        try:
            line = read("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            ui.emit("")
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not line.startswith("/"):
            # Bare text is shorthand for "add a task due today".
            line = f"/add today {line}"

        try:
            response = commands.handle(state, line, ui=ui)
        except Exception:
            logger.exception("Command handler crashed: %s", line)
            response = "Internal error while handling a command."

        if response is not None:
            ui.emit(response)

    logger.info("Console connector finished.")
