# src/taskdeck/tasks/task_models.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class ControllerState(StrEnum):
    """
    Task list controller lifecycle.

    Notes:
    - "unauthenticated" is terminal for the current entry; only a new
      initialize() (after login) leaves it.
    """

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    # Free-form label ("pending", "Pending", "done", ...): no client-side vocabulary.
    status: str

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a server JSON object.

        The server serialises the identifier as "ID" (ORM default); "id" is accepted too.
        Raises ValueError if the identifier is missing or not an integer.
        """
        raw_id = raw.get("ID", raw.get("id"))
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"task without integer id: {raw_id!r}")
        title = raw.get("title")
        status = raw.get("status")
        return cls(
            id=raw_id,
            title="" if title is None else str(title),
            status="" if status is None else str(status),
        )


def parse_task_list(data: Any) -> list[Task]:
    """
    Convert a GET /tasks body into Tasks.

    - None (server sent `null` or nothing) -> []
    - entries that are not objects or lack an integer id are skipped (logged)
    """
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning("Unexpected task list payload type=%s; treating as empty", type(data).__name__)
        return []

    out: list[Task] = []
    for item in data:
        if not isinstance(item, dict):
            logger.warning("Skipping non-object task entry: %r", item)
            continue
        try:
            out.append(Task.from_api(item))
        except ValueError:
            logger.warning("Skipping malformed task entry: %r", item)
    return out


@dataclass(frozen=True, slots=True)
class TaskListView:
    """Immutable snapshot handed to subscribers."""

    state: ControllerState
    tasks: tuple[Task, ...]
    error: str | None = None

    @classmethod
    def of(cls, state: ControllerState, tasks: Iterable[Task], error: str | None) -> TaskListView:
        return cls(state=state, tasks=tuple(tasks), error=error)
