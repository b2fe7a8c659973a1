# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tw_bridge.core.state import AppState
from tw_bridge.tasks.task_store import TaskWarrior

from .fakes import FakeCommandRunner


@pytest.fixture()
def runner() -> FakeCommandRunner:
    return FakeCommandRunner()


@pytest.fixture()
def tw(runner: FakeCommandRunner) -> TaskWarrior:
    """Gateway wired to the scripted runner; no taskrc."""
    return TaskWarrior(runner)


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tw-bridge-test",
        log_level="DEBUG",
        task_bin="task",
        taskrc_path=None,
        page_size=10,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, tw: TaskWarrior) -> AppState:
    return AppState(settings=settings, store=tw)
