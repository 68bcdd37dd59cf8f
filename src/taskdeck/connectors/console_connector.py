# src/taskdeck/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import ControllerState, TaskListView

logger = logging.getLogger(__name__)

LOGIN_HINT = "[SESSION] Please log in: /login <email> <password> (no account? /signup <email> <password>)"


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def print_login_hint() -> None:
    """Redirect hook: the console's "authentication entry point"."""
    _print_ts(LOGIN_HINT)


def format_view(view: TaskListView) -> str:
    lines: list[str] = []
    if view.state is ControllerState.READY:
        if view.tasks:
            lines.append(f"Tasks ({len(view.tasks)}):")
            for t in view.tasks:
                lines.append(f"  #{t.id} [{t.status}] {t.title}")
        else:
            lines.append("No tasks.")
    if view.error:
        lines.append(f"[ERROR] {view.error}")
    return "\n".join(lines)


class ConsoleRenderer:
    """
    Controller subscriber for the console.

    Keeps only the latest snapshot; flush() prints it once after a command finished,
    so intermediate transitions (loading -> ready) don't spam the terminal.
    """

    def __init__(self) -> None:
        self._pending: TaskListView | None = None

    def __call__(self, view: TaskListView) -> None:
        self._pending = view

    def flush(self) -> None:
        view, self._pending = self._pending, None
        if view is None:
            return
        text = format_view(view)
        if text:
            _print_ts(text)


async def run_console_loop(state: AppState, renderer: ConsoleRenderer) -> None:
    logger.info("Console connector started (api=%s).", state.api.base_url)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        # Immediate user-visible feedback before a long operation finishes.
        print(f"[{_ts_local()}] {text}", flush=True)

    # Entering the task list view: guard on the stored credential, then load.
    await state.controller.initialize()
    renderer.flush()

    while True:
        try:
            # input() blocks: keep it off the event loop.
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            _print_ts("Commands start with '/'. Try /add <title> or /help.")
            continue

        try:
            cmd_response = await command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response:
            _print_ts(cmd_response)
        renderer.flush()

    logger.info("Console connector finished.")
