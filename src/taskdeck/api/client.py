# src/taskdeck/api/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..tasks.task_models import Task, parse_task_list
from .errors import AuthenticationError, RequestFailed, TransportFailure, Unauthorized

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
TASKS_PATH = "/tasks"


def _make_timeout(timeout_s: float | None) -> httpx.Timeout:
    """
    None -> no timeout at all (a hung request waits forever).

    httpx defaults to 5s, so the "no timeout" case must be spelled out.
    """
    if timeout_s is None or timeout_s <= 0:
        return httpx.Timeout(None)
    return httpx.Timeout(timeout_s)


def _json_or_none(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        logger.debug("Non-JSON body from %s %s (status=%s)", resp.request.method, resp.request.url, resp.status_code)
        return None


def _server_message(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    for field in ("error", "message"):
        value = data.get(field)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _transport_message(exc: httpx.TransportError) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "The server did not respond in time."
    return f"Could not reach the server ({exc.__class__.__name__})."


class ApiClient:
    """
    Async client for the authentication and task services.

    - Never reads or writes session state: the credential is passed in per call.
    - Classifies every outcome into a return value or one of the errors in api.errors.
    - A custom httpx transport can be injected (httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("base_url is required")
        self._base_url = base_url.strip().rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=_make_timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings, *, transport: httpx.AsyncBaseTransport | None = None) -> ApiClient:
        return cls(
            settings.api_url,
            timeout=getattr(settings, "request_timeout_seconds", None),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ---- low-level ----

    async def _send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        credential: str | None = None,
    ) -> httpx.Response:
        headers: dict[str, str] = {}
        if credential:
            headers["Authorization"] = f"Bearer {credential}"

        try:
            if body is None:
                return await self._http.request(method, path, headers=headers)
            # json= sets Content-Type: application/json
            return await self._http.request(method, path, headers=headers, json=body)
        except httpx.TransportError as e:
            logger.info("Transport failure on %s %s: %s", method, path, e.__class__.__name__)
            raise TransportFailure(_transport_message(e)) from e

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        credential: str | None = None,
    ) -> Any:
        """
        Perform a JSON request and classify the response.

        Returns the parsed body (None for an empty/non-JSON body).
        Raises Unauthorized on 401, RequestFailed on any other non-2xx,
        TransportFailure if no response was received.
        """
        method = method.upper()
        resp = await self._send(method, path, body=body, credential=credential)
        data = _json_or_none(resp)

        if resp.status_code == httpx.codes.UNAUTHORIZED:
            logger.info("%s %s -> 401 (credential rejected)", method, path)
            raise Unauthorized(_server_message(data) or "Unauthorized")

        if not resp.is_success:
            msg = _server_message(data) or f"Request failed with status {resp.status_code}"
            logger.info("%s %s -> %s: %s", method, path, resp.status_code, msg)
            raise RequestFailed(msg, resp.status_code, data)

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        return data

    # ---- authentication service ----

    async def _post_credentials(self, path: str, identifier: str, secret: str, fallback: str) -> Any:
        resp = await self._send("POST", path, body={"email": identifier, "password": secret})
        data = _json_or_none(resp)
        if not resp.is_success:
            msg = _server_message(data) or fallback
            logger.info("POST %s rejected (status=%s): %s", path, resp.status_code, msg)
            raise AuthenticationError(msg)
        return data

    async def authenticate(self, identifier: str, secret: str) -> str:
        """POST /login and return the issued credential. Does not store it."""
        data = await self._post_credentials(LOGIN_PATH, identifier, secret, "Login failed")
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            logger.warning("Login succeeded but response carried no token.")
            raise AuthenticationError("Login failed")
        return token

    async def register(self, identifier: str, secret: str) -> bool:
        """POST /signup. Produces no credential: the caller must log in afterwards."""
        await self._post_credentials(SIGNUP_PATH, identifier, secret, "Signup failed")
        return True

    # ---- task service ----

    async def list_tasks(self, credential: str | None) -> list[Task]:
        data = await self.request("GET", TASKS_PATH, credential=credential)
        return parse_task_list(data)

    async def create_task(self, credential: str | None, title: str, status: str) -> Any:
        return await self.request("POST", TASKS_PATH, {"title": title, "status": status}, credential)

    async def delete_task(self, credential: str | None, task_id: int) -> Any:
        return await self.request("DELETE", f"{TASKS_PATH}/{int(task_id)}", credential=credential)
