# tests/test_commands.py

from __future__ import annotations

import pytest

from tw_bridge.cli.commands import CommandRegistry, parse_tasks_args, registry
from tw_bridge.core.state import AppState

from .fakes import UUID_A, UUID_B, FakeCommandRunner, export_obj


@pytest.mark.asyncio
async def test_command_registry_routes_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    async def h(state, args):
        called.append(args)
        return "h"

    reg.register("a", h, "a", aliases=["alpha"])

    assert await reg.handle(state, "/a x y") == "h"
    assert await reg.handle(state, "/ALPHA") == "h"
    assert called == [["x", "y"], []]


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


def test_parse_tasks_args() -> None:
    assert parse_tasks_args([]) == {}
    assert parse_tasks_args(["ready", "page=2"]) == {"filter": "ready", "page": "2"}
    assert parse_tasks_args(["some", "a,b"]) == {"filter": "some", "uuids": "a,b"}
    assert parse_tasks_args(["some", "uuids=c"]) == {"filter": "some", "uuids": "c"}


@pytest.mark.asyncio
async def test_tasks_command_lists(state: AppState, runner: FakeCommandRunner) -> None:
    runner.push_export([export_obj("abcdef12-0000", "Spam", project="home", tags=["x"])])

    reply = await registry.handle(state, "/tasks active")

    assert reply == "abcdef12 [pending] Spam project:home +x"


@pytest.mark.asyncio
async def test_tasks_command_reports_client_errors(state: AppState) -> None:
    reply = await registry.handle(state, "/tasks nonsense")
    assert reply is not None and reply.startswith("Error (400)")


@pytest.mark.asyncio
async def test_add_and_done_commands(state: AppState, runner: FakeCommandRunner) -> None:
    runner.push(stdout="").push_export([export_obj(UUID_A, "Buy milk")])

    assert await registry.handle(state, "/add Buy milk") == f"Created {UUID_A}: Buy milk"
    assert runner.command_args(0) == ["add", 'description:"Buy milk"']

    assert await registry.handle(state, f"/done {UUID_A}") == f"Completed {UUID_A}"
    assert runner.command_args() == ["done", UUID_A]


@pytest.mark.asyncio
async def test_store_errors_are_replied_not_raised(state: AppState, runner: FakeCommandRunner) -> None:
    runner.push(returncode=1, stderr="No tasks specified.")
    reply = await registry.handle(state, f"/delete {UUID_B}")
    assert reply is not None
    assert reply.startswith("Error:")
    assert "No tasks specified." in reply


@pytest.mark.asyncio
async def test_usage_messages(state: AppState, runner: FakeCommandRunner) -> None:
    assert (await registry.handle(state, "/add")).startswith("Usage")
    assert (await registry.handle(state, "/annotate u1")).startswith("Usage")
    assert runner.calls == []
    assert "/tasks" in (await registry.handle(state, "/help"))


@pytest.mark.asyncio
async def test_targets_that_are_not_uuids_are_refused(state: AppState, runner: FakeCommandRunner) -> None:
    for line in ("/done 3", "/delete +PENDING", "/annotate rc.data.location=/tmp note"):
        reply = await registry.handle(state, line)
        assert reply is not None and reply.startswith("Error: Not a task UUID")
    assert runner.calls == []
