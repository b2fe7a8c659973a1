# src/tw_bridge/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..core.state import AppState
from ..tasks.task_api import KNOWN_FILTERS, list_tasks
from ..tasks.task_errors import TaskBridgeError
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Store errors are turned into a reply; they never escape.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return await handler(state, args)
        except TaskBridgeError as e:
            logger.warning("/%s failed: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task_line(obj: dict[str, Any]) -> str:
    uuid = str(obj.get("uuid") or "")[:8] or "--------"
    status = obj.get("status") or "?"
    line = f"{uuid} [{status}] {obj.get('description') or ''}"
    if obj.get("project"):
        line += f" project:{obj['project']}"
    if obj.get("tags"):
        line += " " + " ".join(f"+{t}" for t in obj["tags"])
    if obj.get("due"):
        line += f" due:{obj['due']}"
    return line


def parse_tasks_args(args: list[str]) -> dict[str, str]:
    """
    /tasks [filter] [uuids] [page=N] [uuids=a,b]

    For `some`, the second positional argument is the uuid list.
    """
    params: dict[str, str] = {}
    positional: list[str] = []
    for a in args:
        key, sep, value = a.partition("=")
        if sep:
            params[key.strip().lower()] = value.strip()
        else:
            positional.append(a)

    if positional:
        params.setdefault("filter", positional[0])
    if len(positional) > 1 and params.get("filter") == "some":
        params.setdefault("uuids", positional[1])
    return params


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_tasks(state: AppState, args: list[str]) -> str:
    resp = await list_tasks(state.store, parse_tasks_args(args), page_size=state.page_size)
    if not resp.ok:
        return f"Error ({resp.status}): {resp.body.get('message', '')}"
    if not resp.body:
        return "No tasks."
    return "\n".join(format_task_line(obj) for obj in resp.body)


async def cmd_add(state: AppState, args: list[str]) -> str:
    description = " ".join(args).strip()
    if not description:
        return "Usage: /add <description>"
    task = await state.store.create_task(Task.draft(description=description))
    return f"Created {task.uuid}: {task.description}"


async def cmd_log(state: AppState, args: list[str]) -> str:
    description = " ".join(args).strip()
    if not description:
        return "Usage: /log <description>"
    await state.store.log_task(Task.draft(description=description))
    return f"Logged: {description}"


async def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <uuid>"
    await state.store.complete_task(args[0])
    return f"Completed {args[0]}"


async def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <uuid>"
    await state.store.delete_task(args[0])
    return f"Deleted {args[0]}"


async def cmd_annotate(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /annotate <uuid> <text>"
    await state.store.annotate_task(args[0], " ".join(args[1:]))
    return f"Annotated {args[0]}"


registry.register("help", cmd_help, "show this help", aliases=["h", "?"])
registry.register(
    "tasks",
    cmd_tasks,
    f"list tasks: /tasks [{'|'.join(sorted(KNOWN_FILTERS))}] [uuids] [page=N]",
    aliases=["ls"],
)
registry.register("add", cmd_add, "create a task: /add <description>")
registry.register("log", cmd_log, "record an already completed task: /log <description>")
registry.register("done", cmd_done, "complete a task: /done <uuid>")
registry.register("delete", cmd_delete, "delete a task: /delete <uuid>", aliases=["rm"])
registry.register("annotate", cmd_annotate, "annotate a task: /annotate <uuid> <text>")
