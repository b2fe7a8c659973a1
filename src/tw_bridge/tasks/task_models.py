# src/tw_bridge/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, TypedDict, Unpack, cast

from .task_errors import FormatError
from .task_fields import (
    decode_task_json,
    encode_properties,
    encode_task_json,
    format_stamp,
    parse_export,
    parse_stamp,
)


class TaskStatus(StrEnum):
    """
    Task status as Taskwarrior reports it.

    PENDING is what the rest of the app calls "active".
    """

    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"
    WAITING = "waiting"
    RECURRING = "recurring"


class TaskPriority(StrEnum):
    LOW = "L"
    MEDIUM = "M"
    HIGH = "H"


@dataclass(slots=True, frozen=True)
class TaskAnnotation:
    entry: datetime | None
    description: str

    @classmethod
    def from_json(cls, raw: Any) -> TaskAnnotation:
        if isinstance(raw, TaskAnnotation):
            return raw
        if isinstance(raw, str):
            return cls(entry=None, description=raw)
        if not isinstance(raw, dict):
            raise FormatError(f"Malformed annotation: {raw!r}", field="annotations", raw=raw)
        entry_raw = raw.get("entry")
        entry = parse_stamp(entry_raw, "annotations.entry") if entry_raw is not None else None
        return cls(entry=entry, description=str(raw.get("description", "")))

    def to_json(self) -> dict[str, str]:
        out = {"description": self.description}
        if self.entry is not None:
            out["entry"] = format_stamp(self.entry)
        return out


class TaskProperties(TypedDict, total=False):
    """Fields a caller may set and send to the store."""

    description: str
    status: TaskStatus
    priority: TaskPriority
    project: str
    tags: list[str]
    depends: list[str]
    recur: str
    due: datetime
    end: datetime
    entry: datetime
    modified: datetime
    scheduled: datetime
    start: datetime
    until: datetime
    wait: datetime
    # Not a command-line field; create_task attaches these one by one.
    annotations: list[str | dict[str, str]]


class ExportedTaskProperties(TaskProperties, total=False):
    """What an export yields on top of the writable fields. Read-only."""

    id: int
    urgency: float
    mask: str
    imask: int


@dataclass(slots=True)
class Task:
    """
    A Taskwarrior task.

    uuid is the only durable key. A task without one is a draft that has not been
    handed to the store yet. `id` (if any) lives in props and may be reassigned by
    the store between calls, so never use it to address a task.
    """

    props: TaskProperties | ExportedTaskProperties = field(default_factory=lambda: TaskProperties())
    uuid: str | None = None

    @classmethod
    def draft(cls, **props: Unpack[TaskProperties]) -> Task:
        """A new task that has not been handed to the store yet."""
        return cls(props=props)

    @property
    def is_draft(self) -> bool:
        return not self.uuid

    @property
    def description(self) -> str:
        return str(self.props.get("description") or "")

    @property
    def status(self) -> str | None:
        return self.props.get("status")

    @property
    def tags(self) -> list[str]:
        return list(self.props.get("tags") or [])

    @property
    def annotations(self) -> list[TaskAnnotation]:
        # Annotations can't go on the command line; this is the only way to read them.
        return [TaskAnnotation.from_json(a) for a in self.props.get("annotations") or []]

    def format_for_cli(self) -> list[str]:
        """Format this task for the Taskwarrior command line. Does not mutate the task."""
        return encode_properties(self.props)

    @classmethod
    def from_json(cls, obj: dict[str, Any]) -> Task:
        uuid, props = decode_task_json(obj)
        return cls(props=cast(ExportedTaskProperties, props), uuid=uuid)

    def to_json(self) -> dict[str, Any]:
        return encode_task_json(self.uuid, self.props)

    def __str__(self) -> str:
        ident = self.uuid or "<draft>"
        return f"Task({ident}: {self.description!r})"


def decode_export(text: str) -> list[Task]:
    """Decode raw `export` output. Any malformed element fails the whole batch."""
    return [Task.from_json(obj) for obj in parse_export(text)]
