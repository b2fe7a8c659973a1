# tests/test_task_runner.py

from __future__ import annotations

import sys

import pytest

from tw_bridge.tasks.task_errors import ExecutionError
from tw_bridge.tasks.task_runner import EXIT_NOT_LAUNCHED, SubprocessCommandRunner
from tw_bridge.tasks.task_store import TaskWarrior


@pytest.mark.asyncio
async def test_runner_drains_both_streams() -> None:
    runner = SubprocessCommandRunner()
    code = "import sys; print('[]'); print('oops', file=sys.stderr); sys.exit(3)"

    result = await runner.run([sys.executable, "-c", code])

    assert result.returncode == 3
    assert result.stdout.strip() == "[]"
    assert result.stderr.strip() == "oops"
    assert not result.ok


@pytest.mark.asyncio
async def test_runner_reports_missing_binary() -> None:
    result = await SubprocessCommandRunner().run(["/definitely/not/a/task-binary"])
    assert result.returncode == EXIT_NOT_LAUNCHED
    assert result.stderr


@pytest.mark.asyncio
async def test_gateway_surfaces_missing_binary_as_execution_error() -> None:
    tw = TaskWarrior(SubprocessCommandRunner(), task_bin="/definitely/not/a/task-binary")
    with pytest.raises(ExecutionError) as ei:
        await tw.get_active_tasks()
    assert ei.value.returncode == EXIT_NOT_LAUNCHED
