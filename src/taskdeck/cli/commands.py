# src/taskdeck/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..api.errors import AuthenticationError, TransportFailure
from ..core.state import AppState
from ..session.auth import login, signup
from ..tasks.task_models import ControllerState

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "Not logged in. Use /login <email> <password> (or /signup first)."


class CommandRegistry:
    """Slash-command registry used by the console connector (/login, /add, ...)."""

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

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string ("" when the handler has nothing to add) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


async def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    session = "logged in" if state.session.is_authenticated else "logged out"
    view = state.controller.view
    timeout = getattr(state.settings, "request_timeout_seconds", None)
    return (
        "Status:\n"
        f"  API: {state.api.base_url}\n"
        f"  Session: {session}\n"
        f"  Task list: {view.state} ({len(view.tasks)} task(s))\n"
        f"  Request timeout: {'none' if timeout is None else f'{timeout:g}s'}"
    )


async def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /login <email> <password>
    """
    if len(args) != 2:
        return "Usage: /login <email> <password>"

    email, password = args
    try:
        await login(state.session, state.api, email, password)
    except (AuthenticationError, TransportFailure) as e:
        return f"Login failed: {e.message}"

    if emit:
        emit(f"Logged in as {email}.")
    # New entry into the task list: guard + first fetch.
    await state.controller.initialize()
    return ""


async def cmd_signup(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /signup <email> <password>
    """
    if len(args) != 2:
        return "Usage: /signup <email> <password>"

    email, password = args
    try:
        await signup(state.api, email, password)
    except (AuthenticationError, TransportFailure) as e:
        return f"Signup failed: {e.message}"
    return "Registration successful! Please /login."


async def cmd_tasks(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.controller.state is ControllerState.UNAUTHENTICATED:
        return NOT_LOGGED_IN
    await state.controller.refresh()
    return ""


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <title...>   (status comes from TASKDECK_DEFAULT_STATUS)
    """
    if state.controller.state is ControllerState.UNAUTHENTICATED:
        return NOT_LOGGED_IN
    title = " ".join(args)
    if not title:
        return "Usage: /add <title>"
    status = str(getattr(state.settings, "default_status", "pending"))
    await state.controller.create_task(title, status)
    return ""


async def cmd_del(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /del <id>
    """
    if state.controller.state is ControllerState.UNAUTHENTICATED:
        return NOT_LOGGED_IN
    if len(args) != 1:
        return "Usage: /del <id>"
    try:
        task_id = int(args[0].lstrip("#"))
    except ValueError:
        return f"Not a task id: {args[0]}"
    await state.controller.delete_task(task_id)
    return ""


async def cmd_logout(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.controller.logout()
    return "Logged out."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show API URL, session and list state.")
registry.register("login", cmd_login, help_text="Log in: /login <email> <password>.")
registry.register("signup", cmd_signup, help_text="Create an account: /signup <email> <password>.")
registry.register("tasks", cmd_tasks, help_text="Reload the task list from the server.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Create a task: /add <title>.")
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("logout", cmd_logout, help_text="Forget the stored credential.")
