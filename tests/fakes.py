# tests/fakes.py

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

from taskdeck.tasks.task_models import TaskListView

API_URL = "http://tasks.test"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeTaskServer:
    """
    In-memory auth + task service behind httpx.MockTransport.

    Mirrors the real server's wire format:
    - POST /login -> {"token": ...} or 401 {"error": ...}
    - POST /signup -> 201 {"message": ...} or 400 {"error": ...}
    - /tasks* require "Authorization: Bearer <token>", else 401
    - tasks are serialised with an upper-case "ID" key

    Captures every request for assertions; single routes can be overridden.
    """

    def __init__(self, *, token: str = "T1") -> None:
        self.token = token
        self.users: dict[str, str] = {}
        self.valid_tokens: set[str] = set()
        self.tasks: list[dict[str, Any]] = []
        self.null_when_empty = False
        self.requests: list[httpx.Request] = []
        self._overrides: dict[tuple[str, str], Responder] = {}
        self._next_id = 1

    # ---- setup helpers ----

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def add_user(self, email: str, password: str) -> None:
        self.users[email] = password

    def grant(self, token: str) -> str:
        self.valid_tokens.add(token)
        return token

    def seed(self, title: str, status: str = "pending", *, task_id: int | None = None) -> int:
        if task_id is None:
            task_id = self._next_id
        self._next_id = max(self._next_id, task_id) + 1
        self.tasks.append({"ID": task_id, "title": title, "status": status, "user_id": 1})
        return task_id

    def respond(self, method: str, path: str, status: int, json: Any = None) -> None:
        """Force a fixed response for one route (a fresh Response per request)."""
        self._overrides[(method, path)] = lambda _req: httpx.Response(status, json=json)

    def respond_with(self, method: str, path: str, responder: Responder) -> None:
        self._overrides[(method, path)] = responder

    # ---- introspection ----

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def task_calls(self) -> list[tuple[str, str]]:
        return [c for c in self.calls() if c[1].startswith("/tasks")]

    # ---- routing ----

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        override = self._overrides.get(key)
        if override is not None:
            return override(request)

        path = request.url.path
        if key == ("POST", "/login"):
            return self._login(request)
        if key == ("POST", "/signup"):
            return self._signup(request)
        if path == "/tasks" or path.startswith("/tasks/"):
            denied = self._check_auth(request)
            if denied is not None:
                return denied
            return self._tasks(request)
        return httpx.Response(404, json={"error": "not found"})

    def _login(self, request: httpx.Request) -> httpx.Response:
        body = _json(request)
        email, password = body.get("email"), body.get("password")
        if email not in self.users or self.users[email] != password:
            return httpx.Response(401, json={"error": "Invalid email or password"})
        return httpx.Response(200, json={"token": self.grant(self.token)})

    def _signup(self, request: httpx.Request) -> httpx.Response:
        body = _json(request)
        email, password = body.get("email"), body.get("password")
        if not email or not password:
            return httpx.Response(400, json={"error": "email and password are required"})
        if email in self.users:
            return httpx.Response(400, json={"error": "Email already exists or DB error"})
        self.users[email] = password
        return httpx.Response(201, json={"message": "User created successfully"})

    def _check_auth(self, request: httpx.Request) -> httpx.Response | None:
        header = request.headers.get("Authorization", "")
        if not header:
            return httpx.Response(401, json={"error": "Authorization header required"})
        token = header.removeprefix("Bearer ")
        if token not in self.valid_tokens:
            return httpx.Response(401, json={"error": "Invalid token"})
        return None

    def _tasks(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "GET" and path == "/tasks":
            if not self.tasks and self.null_when_empty:
                return httpx.Response(200, content=b"null", headers={"Content-Type": "application/json"})
            return httpx.Response(200, json=list(self.tasks))

        if request.method == "POST" and path == "/tasks":
            body = _json(request)
            if not body.get("title"):
                return httpx.Response(400, json={"error": "title is required"})
            self.seed(body["title"], body.get("status", ""))
            return httpx.Response(201, json=dict(self.tasks[-1]))

        if request.method == "DELETE" and path.startswith("/tasks/"):
            raw_id = path.rsplit("/", 1)[-1]
            for t in self.tasks:
                if str(t["ID"]) == raw_id:
                    self.tasks.remove(t)
                    return httpx.Response(200, json={"message": "Deleted successfully"})
            return httpx.Response(404, json={"error": "Task not found or permission denied"})

        return httpx.Response(405, json={"error": "method not allowed"})


def _json(request: httpx.Request) -> dict[str, Any]:
    try:
        data = json.loads(request.content or b"{}")
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class RecordingRedirect:
    """Redirect hook that only counts how often it was invoked."""

    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


class RecordingListener:
    def __init__(self) -> None:
        self.views: list[TaskListView] = []

    def __call__(self, view: TaskListView) -> None:
        self.views.append(view)
