# tests/test_task_api.py

from __future__ import annotations

import pytest

from tw_bridge.tasks.task_api import list_tasks
from tw_bridge.tasks.task_store import TaskWarrior

from .fakes import UUID_A, UUID_B, FakeCommandRunner, export_obj


def _many(n: int) -> list[dict]:
    return [export_obj(f"u{i:02d}", f"task {i}") for i in range(n)]


@pytest.mark.asyncio
async def test_default_filter_is_active(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    runner.push_export(_many(2))

    resp = await list_tasks(tw, {})

    assert resp.status == 200
    assert runner.command_args() == ["export", "+PENDING"]
    assert [t["uuid"] for t in resp.body] == ["u00", "u01"]
    # timestamps go back out as compact stamps
    assert resp.body[0]["entry"] == "20190824T205920Z"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("flt", "tokens"),
    [
        ("completed", [["export", "+COMPLETED"]]),
        ("blocking", [["export", "+BLOCKING"]]),
        ("blocked", [["export", "+BLOCKED"]]),
        ("ready", [["export", "+READY"]]),
        ("unblocked", [["export", "+UNBLOCKED"]]),
        ("all", [["export", "+PENDING"], ["export", "+COMPLETED"]]),
    ],
)
async def test_filters_route_to_queries(
    tw: TaskWarrior, runner: FakeCommandRunner, flt: str, tokens: list[list[str]]
) -> None:
    resp = await list_tasks(tw, {"filter": flt})
    assert resp.status == 200
    assert resp.body == []
    assert [runner.command_args(i) for i in range(len(runner.calls))] == tokens


@pytest.mark.asyncio
async def test_latest_returns_one_element_list(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    runner.push_export([export_obj("abc-123", "Spam")])
    resp = await list_tasks(tw, {"filter": "latest"})
    assert resp.status == 200
    assert [t["uuid"] for t in resp.body] == ["abc-123"]


@pytest.mark.asyncio
async def test_some_requires_uuids(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    for params in ({"filter": "some"}, {"filter": "some", "uuids": " , "}):
        resp = await list_tasks(tw, params)
        assert resp.status == 400
        assert "uuids" in resp.body["message"]
    assert runner.calls == []


@pytest.mark.asyncio
async def test_some_trims_uuid_list(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    runner.push_export([export_obj(UUID_A, "x")])
    resp = await list_tasks(tw, {"filter": "some", "uuids": f" {UUID_A} , {UUID_B}"})
    assert resp.status == 200
    assert runner.command_args() == ["export", UUID_A, UUID_B]


@pytest.mark.asyncio
@pytest.mark.parametrize("uuids", ["rc.data.location=/tmp/other", f"{UUID_A},+PENDING", "1,2,3"])
async def test_some_rejects_non_uuid_entries(
    tw: TaskWarrior, runner: FakeCommandRunner, uuids: str
) -> None:
    resp = await list_tasks(tw, {"filter": "some", "uuids": uuids})
    assert resp.status == 400
    assert "Not a task UUID" in resp.body["message"]
    assert runner.calls == []


@pytest.mark.asyncio
async def test_unknown_filter(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    resp = await list_tasks(tw, {"filter": "overdue"})
    assert resp.status == 400
    assert resp.body == {"message": "Unknown filter: overdue"}
    assert runner.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("page", ["abc", "-1", "1.5"])
async def test_bad_page(tw: TaskWarrior, runner: FakeCommandRunner, page: str) -> None:
    resp = await list_tasks(tw, {"page": page})
    assert resp.status == 400
    assert "page parameter" in resp.body["message"]
    assert runner.calls == []


@pytest.mark.asyncio
async def test_pagination_slices_ten(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    runner.push_export(_many(25)).push_export(_many(25)).push_export(_many(25)).push_export(_many(25))

    first = await list_tasks(tw, {"page": "0"})
    third = await list_tasks(tw, {"page": 2})
    past_end = await list_tasks(tw, {"page": "7"})
    everything = await list_tasks(tw, {})

    assert [t["uuid"] for t in first.body] == [f"u{i:02d}" for i in range(10)]
    assert [t["uuid"] for t in third.body] == [f"u{i:02d}" for i in range(20, 25)]
    assert past_end.status == 200 and past_end.body == []
    assert len(everything.body) == 25


@pytest.mark.asyncio
async def test_short_list_ignores_page(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    runner.push_export(_many(4))
    resp = await list_tasks(tw, {"page": "3"})
    assert len(resp.body) == 4


@pytest.mark.asyncio
async def test_page_size_is_configurable(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    runner.push_export(_many(5))
    resp = await list_tasks(tw, {"page": "1"}, page_size=2)
    assert [t["uuid"] for t in resp.body] == ["u02", "u03"]


@pytest.mark.asyncio
async def test_store_failures_become_500(tw: TaskWarrior, runner: FakeCommandRunner) -> None:
    runner.push(returncode=2, stderr="task: no matches")
    resp = await list_tasks(tw, {"filter": "ready"})
    assert resp.status == 500
    assert "task: no matches" in resp.body["message"]

    runner.push_export(_many(2))
    resp = await list_tasks(tw, {"filter": "latest"})
    assert resp.status == 500
    assert not resp.ok
