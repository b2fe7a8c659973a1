# src/tw_bridge/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The gateway depends on a CommandRunner Protocol instead of spawning processes itself,
and callers depend on the TaskGateway Protocol instead of the concrete Taskwarrior
implementation. Tests swap in a fake runner.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..tasks.task_models import Task


@dataclass(slots=True, frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """
    Runs an argument vector to completion.

    Returns once the process has exited and both output streams are fully drained.
    """

    async def run(self, argv: Sequence[str]) -> CommandResult: ...


class TaskGateway(Protocol):
    """
    Typed access to the external task store.

    Every call queries the store fresh; nothing is cached between calls.

    Update policy: merge. update_task() sends only the properties present on the
    given task; anything absent is left as the store has it. A property set to
    None clears it.

    Search policy: search_for() encodes the template exactly like create_task()
    and hands it to `export` as a filter, so matching is whatever the tool's
    attribute filters do. No client-side filtering.

    Uuid arguments are full uuids or the 8-hex-digit short form; anything else
    raises PreconditionError before the store is touched.
    """

    # Writes
    async def create_task(self, task: Task) -> Task: ...
    async def log_task(self, task: Task) -> None: ...
    async def update_task(self, task: Task) -> Task: ...
    async def annotate_task(self, uuid: str, text: str) -> None: ...
    async def complete_task(self, uuid: str) -> None: ...
    async def delete_task(self, uuid: str) -> None: ...

    # Reads
    async def search_for(self, task: Task) -> list[Task]: ...
    async def get_active_tasks(self) -> list[Task]: ...
    async def get_completed_tasks(self) -> list[Task]: ...
    async def get_all_tasks(self) -> list[Task]: ...
    async def get_blocking_tasks(self) -> list[Task]: ...
    async def get_blocked_tasks(self) -> list[Task]: ...
    async def get_ready_tasks(self) -> list[Task]: ...
    async def get_unblocked_tasks(self) -> list[Task]: ...
    async def get_multiple_tasks(self, uuids: Sequence[str]) -> list[Task]: ...
    async def get_task_by_uuid(self, uuid: str) -> Task: ...
    async def get_latest_task(self) -> Task: ...
