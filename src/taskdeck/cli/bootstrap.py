# src/taskdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage -> session -> API client -> controller into AppState,
- closes network resources on shutdown.
"""

from __future__ import annotations

import logging

import httpx

from ..api.client import ApiClient
from ..config import get_settings
from ..core.ports import CredentialStorage, RedirectHook
from ..core.state import AppState
from ..session.manager import SessionManager
from ..session.storage import MemoryCredentialStorage, SqliteCredentialStorage
from ..tasks.controller import TaskListController

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.credentials_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_storage(settings) -> CredentialStorage:
    if getattr(settings, "ephemeral_session", False):
        logger.info("Ephemeral session: credential kept in memory only.")
        return MemoryCredentialStorage()
    return SqliteCredentialStorage(settings.credentials_db_path, origin=settings.api_url)


def create_initial_state(
    *,
    settings=None,
    storage: CredentialStorage | None = None,
    on_redirect: RedirectHook | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/storage/transport injectable makes the app easy to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = build_storage(settings)

    session = SessionManager(storage, on_redirect=on_redirect)
    api = ApiClient.from_settings(settings, transport=transport)
    controller = TaskListController(session, api)

    return AppState(settings=settings, session=session, api=api, controller=controller)


async def shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.api.aclose()
    except Exception:
        logger.debug("API client close failed.", exc_info=True)
