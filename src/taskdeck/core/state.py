# src/taskdeck/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..api.client import ApiClient
from ..session.manager import SessionManager
from ..tasks.controller import TaskListController


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    session: SessionManager
    api: ApiClient
    controller: TaskListController
