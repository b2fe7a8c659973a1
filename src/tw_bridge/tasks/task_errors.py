# src/tw_bridge/tasks/task_errors.py

from __future__ import annotations

from collections.abc import Sequence


class TaskBridgeError(Exception):
    """Base class for everything the task layer raises."""


class PreconditionError(TaskBridgeError):
    """
    Task identity invariant violated.

    - create/log called with a task that already has a uuid
    - complete/delete/update/annotate called without one, or with something that
      is not a uuid (an id, a filter, an rc override)
    - a draft whose annotations can't be attached
    """


class ExecutionError(TaskBridgeError):
    """The external tool exited with a non-zero status."""

    def __init__(
        self,
        argv: Sequence[str],
        stdout: str,
        stderr: str,
        returncode: int | None = None,
    ) -> None:
        self.argv = list(argv)
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(
            f"*** Command execution [{' '.join(self.argv)}] failed (exit={returncode}) ***\n\n"
            f"Standard Output -----\n\n{stdout}\n\n"
            f"Standard Error -----\n\n{stderr}"
        )


class FormatError(TaskBridgeError):
    """Malformed timestamp or malformed export JSON."""

    def __init__(self, message: str, *, field: str | None = None, raw: object = None) -> None:
        self.field = field
        self.raw = raw
        super().__init__(message)


class ProtocolError(TaskBridgeError):
    """A single-result query returned zero or several records."""

    def __init__(self, message: str, *, count: int) -> None:
        self.count = count
        super().__init__(message)


class UnsupportedFieldWarning(UserWarning):
    """A property could not be formatted for the command line and was skipped."""
