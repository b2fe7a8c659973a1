# src/tw_bridge/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- checks the configured taskrc exists,
- wires the subprocess runner into the Taskwarrior gateway,
- returns an AppState that is passed to every handler.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.ports import CommandRunner
from ..core.state import AppState
from ..tasks.task_runner import SubprocessCommandRunner
from ..tasks.task_store import TaskWarrior

logger = logging.getLogger(__name__)


def _check_taskrc(path: Path | None) -> None:
    if path is not None and not path.exists():
        raise FileNotFoundError(f"taskrc not found: {path}")


def create_initial_state(*, settings=None, runner: CommandRunner | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Both settings and runner are injectable so the wiring can be tested without a
    real task binary. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    taskrc = getattr(settings, "taskrc_path", None)
    _check_taskrc(taskrc)

    store = TaskWarrior(
        runner or SubprocessCommandRunner(),
        config=taskrc,
        task_bin=getattr(settings, "task_bin", "task"),
    )
    logger.debug("AppState created taskrc=%s", taskrc)
    return AppState(settings=settings, store=store)
