# src/taskdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session manager and the controller depend on Protocols instead of concrete
implementations. This keeps storage backends and front-ends swappable and makes
testing possible without a disk or a terminal.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import TaskListView


class CredentialStorage(Protocol):
    """
    Synchronous key/value storage holding at most one credential.

    Absence of a value means "not authenticated".
    """

    def get(self) -> str | None: ...
    def set(self, value: str) -> None: ...
    def clear(self) -> None: ...


class RedirectHook(Protocol):
    """Front-end side: send the user to the authentication entry point (login/signup)."""

    def __call__(self) -> None: ...


class TaskListListener(Protocol):
    """Subscriber notified with a fresh snapshot after every controller change."""

    def __call__(self, view: TaskListView) -> None: ...
