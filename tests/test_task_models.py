# tests/test_task_models.py

from __future__ import annotations

import pytest

from taskdeck.tasks.task_models import ControllerState, Task, TaskListView, parse_task_list


def test_task_from_server_payload() -> None:
    raw = {
        "ID": 3,
        "CreatedAt": "2025-01-01T00:00:00Z",
        "UpdatedAt": "2025-01-01T00:00:00Z",
        "DeletedAt": None,
        "title": "write docs",
        "status": "pending",
        "user_id": 1,
    }
    assert Task.from_api(raw) == Task(id=3, title="write docs", status="pending")
    assert Task.from_api({"id": 4, "title": "t", "status": None}) == Task(4, "t", "")


@pytest.mark.parametrize("raw_id", [None, "3", 1.5, True])
def test_task_requires_integer_id(raw_id) -> None:
    with pytest.raises(ValueError):
        Task.from_api({"ID": raw_id, "title": "t"})


def test_parse_task_list_tolerates_bad_payloads() -> None:
    assert parse_task_list(None) == []
    assert parse_task_list({"tasks": []}) == []
    assert parse_task_list([{"ID": 1, "title": "a", "status": "x"}, "junk", {"title": "no id"}]) == [
        Task(1, "a", "x")
    ]


def test_view_snapshot_is_immutable() -> None:
    tasks = [Task(1, "a", "pending")]
    view = TaskListView.of(ControllerState.READY, tasks, None)
    tasks.append(Task(2, "b", "pending"))
    assert view.tasks == (Task(1, "a", "pending"),)
    assert str(view.state) == "ready"
