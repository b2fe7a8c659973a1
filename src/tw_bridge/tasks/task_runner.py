# src/tw_bridge/tasks/task_runner.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ..core.ports import CommandResult

logger = logging.getLogger(__name__)

# What a shell reports for "command not found".
EXIT_NOT_LAUNCHED = 127


class SubprocessCommandRunner:
    """
    CommandRunner backed by asyncio subprocesses.

    Notes:
    - stdin is closed, so the tool can never block on a prompt
    - once launched, the process always runs to completion; cancelling the awaiting
      coroutine does not kill it
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    async def run(self, argv: Sequence[str]) -> CommandResult:
        if not argv:
            raise ValueError("argv must not be empty")

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Failed to launch %s: %s", argv[0], e)
            return CommandResult(returncode=EXIT_NOT_LAUNCHED, stdout="", stderr=str(e))

        stdout_b, stderr_b = await asyncio.shield(proc.communicate())
        returncode = proc.returncode if proc.returncode is not None else -1

        logger.debug("Process %s exited rc=%s", argv[0], returncode)
        return CommandResult(
            returncode=returncode,
            stdout=stdout_b.decode(self._encoding, errors="replace"),
            stderr=stderr_b.decode(self._encoding, errors="replace"),
        )
