# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdeck.api.client import ApiClient
from taskdeck.cli.bootstrap import create_initial_state
from taskdeck.core.state import AppState
from taskdeck.session.manager import SessionManager
from taskdeck.session.storage import MemoryCredentialStorage
from taskdeck.tasks.controller import TaskListController

from .fakes import API_URL, FakeTaskServer, RecordingRedirect


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and command handlers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="taskdeck-test",
        log_level="DEBUG",
        api_url=API_URL,
        request_timeout_seconds=None,
        default_status="pending",
        ephemeral_session=False,
        data_dir=tmp_path,
        credentials_db_path=tmp_path / "credentials.sqlite3",
    )


@pytest.fixture()
def server() -> FakeTaskServer:
    return FakeTaskServer(token="T1")


@pytest.fixture()
def redirects() -> RecordingRedirect:
    return RecordingRedirect()


@pytest.fixture()
def storage() -> MemoryCredentialStorage:
    return MemoryCredentialStorage()


@pytest.fixture()
def session(storage: MemoryCredentialStorage, redirects: RecordingRedirect) -> SessionManager:
    return SessionManager(storage, on_redirect=redirects)


@pytest.fixture()
def api(server: FakeTaskServer) -> ApiClient:
    # MockTransport holds no sockets; nothing to close between tests.
    return ApiClient(API_URL, transport=server.transport())


@pytest.fixture()
def controller(session: SessionManager, api: ApiClient) -> TaskListController:
    return TaskListController(session, api)


@pytest.fixture()
def logged_in(server: FakeTaskServer, session: SessionManager) -> str:
    """A credential the fake server accepts, already held by the session."""
    token = server.grant("T1")
    session.set_credential(token)
    return token


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    storage: MemoryCredentialStorage,
    redirects: RecordingRedirect,
    server: FakeTaskServer,
) -> AppState:
    """AppState wired through the real composition root, with fakes at the edges."""
    return create_initial_state(
        settings=settings,
        storage=storage,
        on_redirect=redirects,
        transport=server.transport(),
    )
