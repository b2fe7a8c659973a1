# src/tw_bridge/tasks/task_store.py

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from ..core.ports import CommandRunner
from .task_errors import ExecutionError, PreconditionError, ProtocolError
from .task_models import Task, decode_export

logger = logging.getLogger(__name__)

# Always prepended. Prompts are off, so a failed call is a real error, never a hung prompt.
CONFIG_OVERRIDES: tuple[str, ...] = (
    "rc.json.array=TRUE",
    "rc.verbose=nothing",
    "rc.confirmation=no",
    "rc.dependency.confirmation=no",
    "rc.recurrence.confirmation=no",
)

# Export filters (Taskwarrior virtual tags).
FILTER_PENDING = "+PENDING"
FILTER_COMPLETED = "+COMPLETED"
FILTER_BLOCKING = "+BLOCKING"
FILTER_BLOCKED = "+BLOCKED"
FILTER_READY = "+READY"
FILTER_UNBLOCKED = "+UNBLOCKED"
FILTER_LATEST = "+LATEST"

# A full uuid, or the 8-hex-digit short form the tool also resolves.
_UUID_RE = re.compile(
    r"[0-9a-f]{8}(?:-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})?",
    re.ASCII | re.IGNORECASE,
)


class TaskWarrior:
    """
    TaskGateway backed by the Taskwarrior CLI.

    Stateless per call: every read runs a fresh `export`. The only state held is
    immutable configuration (binary, optional taskrc, override flags).

    Build one at startup and pass it around; don't create one per request.
    """

    def __init__(
        self,
        runner: CommandRunner,
        *,
        config: str | Path | None = None,
        task_bin: str = "task",
    ) -> None:
        self._runner = runner
        self._config = Path(config) if config else None
        self._task_bin = task_bin
        logger.info("TaskWarrior gateway ready bin=%s taskrc=%s", task_bin, self._config)

    @property
    def config(self) -> Path | None:
        """Path to the taskrc, if one was given."""
        return self._config

    # ---- low-level helpers ----

    def build_argv(self, cmd_args: Sequence[str]) -> list[str]:
        argv = [self._task_bin]
        if self._config is not None:
            argv.append(f"rc:{self._config}")
        argv.extend(CONFIG_OVERRIDES)
        argv.extend(cmd_args)
        return argv

    async def _execute(self, cmd_args: Sequence[str]) -> str:
        """Run a command; return stdout on success, raise ExecutionError otherwise."""
        argv = self.build_argv(cmd_args)
        logger.debug("Executing %s", argv)

        result = await self._runner.run(argv)
        if result.returncode != 0:
            logger.warning(
                "Command failed rc=%s argv=%s stderr=%s",
                result.returncode,
                argv,
                result.stderr.strip(),
            )
            raise ExecutionError(argv, result.stdout, result.stderr, result.returncode)
        return result.stdout

    async def _export(self, filter_args: Sequence[str]) -> list[Task]:
        stdout = await self._execute(["export", *filter_args])
        tasks = decode_export(stdout)
        logger.debug("Export %s -> %d task(s)", list(filter_args), len(tasks))
        return tasks

    async def _export_single(self, filter_args: Sequence[str]) -> Task:
        tasks = await self._export(filter_args)
        if len(tasks) != 1:
            raise ProtocolError(
                f"Asked for a single task with {list(filter_args)} but got {len(tasks)}: "
                f"{[str(t) for t in tasks]}",
                count=len(tasks),
            )
        return tasks[0]

    @staticmethod
    def _check_not_created(task: Task) -> None:
        if task.uuid:
            raise PreconditionError(f"Task that is to be created already contains a UUID - {task}")

    @staticmethod
    def _check_created(task: Task) -> None:
        if not task.uuid:
            raise PreconditionError(f"Task that has already been created must contain a UUID - {task}")

    @staticmethod
    def _check_uuid(uuid: str | None) -> str:
        """
        Return the trimmed uuid, or raise PreconditionError.

        Only full or 8-digit short uuids pass; ids, filters and rc overrides are rejected.
        """
        uuid = (uuid or "").strip()
        if not uuid:
            raise PreconditionError("A task UUID is required")
        if _UUID_RE.fullmatch(uuid) is None:
            raise PreconditionError(f"Not a task UUID: {uuid!r}")
        return uuid

    # ---- writes ----

    async def create_task(self, task: Task) -> Task:
        self._check_not_created(task)
        annotations = task.annotations
        if any(not ann.description.strip() for ann in annotations):
            raise PreconditionError(f"Empty annotation on task that is to be created - {task}")

        await self._execute(["add", *task.format_for_cli()])
        created = await self.get_latest_task()
        if not annotations:
            return created

        if not created.uuid:
            raise ProtocolError(f"Latest task has no UUID - {created}", count=1)

        # Annotations can't ride along on `add`; attach them one by one.
        for ann in annotations:
            await self.annotate_task(created.uuid, ann.description)
        return await self.get_task_by_uuid(created.uuid)

    async def log_task(self, task: Task) -> None:
        self._check_not_created(task)
        await self._execute(["log", *task.format_for_cli()])

    async def update_task(self, task: Task) -> Task:
        self._check_created(task)
        uuid = self._check_uuid(task.uuid)

        cli_args = task.format_for_cli()
        if cli_args:
            await self._execute([uuid, "modify", *cli_args])
        else:
            logger.debug("Nothing to modify for %s", uuid)
        return await self.get_task_by_uuid(uuid)

    async def annotate_task(self, uuid: str, text: str) -> None:
        uuid = self._check_uuid(uuid)
        text = (text or "").strip()
        if not text:
            raise PreconditionError(f"Empty annotation for task {uuid}")
        await self._execute([uuid, "annotate", text])

    async def complete_task(self, uuid: str) -> None:
        await self._execute(["done", self._check_uuid(uuid)])

    async def delete_task(self, uuid: str) -> None:
        await self._execute(["delete", self._check_uuid(uuid)])

    # ---- reads ----

    async def search_for(self, task: Task) -> list[Task]:
        """
        Find tasks matching an incomplete template (e.g. only a description).

        The template goes through the same formatting as create_task(); the tool's
        attribute filters do the matching.
        """
        filter_args = task.format_for_cli()
        if task.uuid:
            filter_args = [self._check_uuid(task.uuid), *filter_args]
        return await self._export(filter_args)

    async def get_active_tasks(self) -> list[Task]:
        return await self._export([FILTER_PENDING])

    async def get_completed_tasks(self) -> list[Task]:
        return await self._export([FILTER_COMPLETED])

    async def get_all_tasks(self) -> list[Task]:
        """Active tasks followed by completed ones (two separate queries)."""
        active = await self.get_active_tasks()
        completed = await self.get_completed_tasks()
        return [*active, *completed]

    async def get_blocking_tasks(self) -> list[Task]:
        return await self._export([FILTER_BLOCKING])

    async def get_blocked_tasks(self) -> list[Task]:
        return await self._export([FILTER_BLOCKED])

    async def get_ready_tasks(self) -> list[Task]:
        return await self._export([FILTER_READY])

    async def get_unblocked_tasks(self) -> list[Task]:
        return await self._export([FILTER_UNBLOCKED])

    async def get_multiple_tasks(self, uuids: Sequence[str]) -> list[Task]:
        """
        Tasks for the given uuids; unknown uuids are simply missing from the result.

        Blank entries are skipped; anything that is not a uuid raises PreconditionError
        before the tool is invoked.
        """
        wanted = [self._check_uuid(u) for u in uuids if u and u.strip()]
        if not wanted:
            return []
        return await self._export(wanted)

    async def get_task_by_uuid(self, uuid: str) -> Task:
        return await self._export_single([self._check_uuid(uuid)])

    async def get_latest_task(self) -> Task:
        return await self._export_single([FILTER_LATEST])
