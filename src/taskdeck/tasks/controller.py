# src/taskdeck/tasks/controller.py

"""
Task list controller.

Keeps an observable task collection in sync with the task service:
- every mutation is followed by a full refetch (never a local patch),
- a 401 anywhere clears the credential and ends the current entry,
- other failures are surfaced as `error` and leave session + collection intact.

Concurrency notes (single asyncio loop, no locks):
- create/delete await their own request before issuing the refresh.
- a mutation that completes after the entry ended (logout) issues no refresh.
- Independent operations are not ordered against each other; when refreshes
  overlap, the last one to resolve determines the collection.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..api.client import ApiClient
from ..api.errors import RequestFailed, TransportFailure, Unauthorized
from ..core.ports import TaskListListener
from ..session.manager import SessionManager
from .task_models import ControllerState, Task, TaskListView

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "pending"
SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."


class TaskListController:
    def __init__(self, session: SessionManager, api: ApiClient) -> None:
        self._session = session
        self._api = api
        self._state = ControllerState.UNINITIALIZED
        self._tasks: tuple[Task, ...] = ()
        self._error: str | None = None
        self._listeners: list[TaskListListener] = []

    # ---- observable state ----

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def view(self) -> TaskListView:
        return TaskListView.of(self._state, self._tasks, self._error)

    def subscribe(self, listener: TaskListListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        view = self.view
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception("Task list listener failed.")

    # ---- transitions ----

    def _enter_unauthenticated(self) -> None:
        self._state = ControllerState.UNAUTHENTICATED
        self._notify()

    def _handle_unauthorized(self, op: str) -> None:
        logger.info("%s: credential rejected by server, clearing session.", op)
        self._session.clear_credential()
        self._error = SESSION_EXPIRED_MESSAGE
        self._enter_unauthenticated()
        self._session.redirect_to_login()

    def _record_failure(self, op: str, exc: RequestFailed | TransportFailure) -> None:
        logger.info("%s failed (%s): %s", op, exc.__class__.__name__, exc.message)
        self._error = exc.message
        self._notify()

    def _ended(self, op: str) -> bool:
        if self._state is ControllerState.UNAUTHENTICATED:
            logger.debug("%s ignored: not authenticated.", op)
            return True
        return False

    # ---- operations ----

    async def initialize(self) -> None:
        """Entry point: guard on the credential, then load the list."""
        self._error = None
        self._tasks = ()
        if not self._session.require_credential_or_redirect():
            self._enter_unauthenticated()
            return

        self._state = ControllerState.LOADING
        self._notify()
        await self._refresh()

    async def refresh(self) -> None:
        if self._ended("refresh"):
            return
        self._error = None
        await self._refresh()

    async def _refresh(self) -> None:
        # Read at call time: a credential stored after construction is picked up.
        credential = self._session.get_credential()
        try:
            tasks = await self._api.list_tasks(credential)
        except Unauthorized:
            self._handle_unauthorized("refresh")
            return
        except (RequestFailed, TransportFailure) as e:
            if self._state is ControllerState.LOADING:
                # The first load finished without a list.
                self._state = ControllerState.READY
            self._record_failure("refresh", e)
            return

        if self._state is ControllerState.UNAUTHENTICATED:
            # Logged out (or rejected) while this refresh was in flight.
            logger.debug("Dropping refresh result that resolved after the session ended.")
            return

        self._tasks = tuple(tasks)
        self._state = ControllerState.READY
        logger.debug("Task list refreshed: %d task(s).", len(self._tasks))
        self._notify()

    async def create_task(self, title: str, status: str = DEFAULT_STATUS) -> None:
        """
        Create a task, then refetch the whole list.

        Only the empty string is rejected: whitespace-only titles are sent as-is.
        """
        if not title:
            logger.debug("create_task ignored: empty title.")
            return
        if self._ended("create_task"):
            return

        self._error = None
        try:
            await self._api.create_task(self._session.get_credential(), title, status)
        except Unauthorized:
            self._handle_unauthorized("create_task")
            return
        except (RequestFailed, TransportFailure) as e:
            self._record_failure("create_task", e)

        if self._ended("create_task refresh"):
            return
        await self._refresh()

    async def delete_task(self, task_id: int) -> None:
        """Delete a task by id, then refetch the whole list."""
        if self._ended("delete_task"):
            return

        self._error = None
        try:
            await self._api.delete_task(self._session.get_credential(), task_id)
        except Unauthorized:
            self._handle_unauthorized("delete_task")
            return
        except (RequestFailed, TransportFailure) as e:
            self._record_failure("delete_task", e)

        if self._ended("delete_task refresh"):
            return
        await self._refresh()

    def logout(self) -> None:
        """Purely local: destroy the credential and leave the list."""
        self._session.clear_credential()
        self._tasks = ()
        self._error = None
        self._enter_unauthenticated()
        self._session.redirect_to_login()
