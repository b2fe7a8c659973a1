# src/tw_bridge/tasks/task_fields.py

"""
Field codec between typed task properties and Taskwarrior's two wire forms.

Directions:
- property -> command-line token (`name:"value"`), used by add/log/modify/export filters
- export JSON object -> (uuid, properties), used by every read

Timestamps travel as compact UTC stamps (YYYYMMDDTHHMMSSZ) in both wire forms.
"""

from __future__ import annotations

import copy
import json
import logging
import re
import warnings
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from .task_errors import FormatError, UnsupportedFieldWarning

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS: frozenset[str] = frozenset(
    {"due", "end", "entry", "modified", "scheduled", "start", "until", "wait"}
)

# Never emitted on the command line, even when present.
# uuid is identity, not a property.
CLI_EXCLUDED_FIELDS: frozenset[str] = frozenset(
    {"annotations", "id", "imask", "mask", "urgency", "uuid"}
)

_STAMP_RE = re.compile(r"(\d{4})(\d{2})(\d{2})T(\d{2})(\d{2})(\d{2})Z", re.ASCII)

FieldFormatter = Callable[[str, Any], str]


# ---- timestamps ----


def format_stamp(value: datetime) -> str:
    """
    Format a datetime as a compact UTC stamp.

    Naive datetimes are taken as UTC. Sub-second precision is truncated.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return (
        f"{value.year:04d}{value.month:02d}{value.day:02d}"
        f"T{value.hour:02d}{value.minute:02d}{value.second:02d}Z"
    )


def parse_stamp(raw: object, field: str | None = None) -> datetime:
    """Parse a compact UTC stamp into an aware datetime. Raises FormatError."""
    where = f" for field {field!r}" if field else ""
    if not isinstance(raw, str):
        raise FormatError(f"Expected a timestamp string{where}, got {raw!r}", field=field, raw=raw)

    m = _STAMP_RE.fullmatch(raw)
    if m is None:
        raise FormatError(f"Malformed timestamp{where}: {raw!r}", field=field, raw=raw)

    year, month, day, hour, minute, second = (int(g) for g in m.groups())
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=UTC)
    except ValueError as e:
        raise FormatError(f"Invalid timestamp{where}: {raw!r} ({e})", field=field, raw=raw) from e


# ---- command line ----


def _scalar(value: Any) -> str:
    # Enums (TaskStatus/TaskPriority) format as their wire value.
    return str(getattr(value, "value", value))


def _escape(text: str) -> str:
    # Embedded quotes and backslashes are escaped so the value stays one token.
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _quoted(name: str, value: Any) -> str:
    return f'{name}:"{_escape(_scalar(value))}"'


def _stamp(name: str, value: Any) -> str:
    if isinstance(value, datetime):
        return f'{name}:"{format_stamp(value)}"'
    # Already a stamp (e.g. copied from an export); validate it before passing it on.
    return f'{name}:"{format_stamp(parse_stamp(value, name))}"'


def _joined(name: str, value: Any) -> str:
    if isinstance(value, str):
        items = [p.strip() for p in value.split(",") if p.strip()]
    else:
        items = [_scalar(v) for v in value]
    return f'{name}:"{_escape(",".join(items))}"'


_FORMATTERS: dict[str, FieldFormatter] = {
    "description": _quoted,
    "project": _quoted,
    "recur": _quoted,
    "status": _quoted,
    "priority": _quoted,
    "tags": _joined,
    "depends": _joined,
    **{name: _stamp for name in TIMESTAMP_FIELDS},
}


def format_field(name: str, value: Any) -> str | None:
    """
    Format a single property as a command-line token.

    Returns None if the field cannot be passed on the command line:
    - excluded (read-only / structural) fields, silently
    - unknown fields, with an UnsupportedFieldWarning

    A None value formats as `name:` which clears the attribute in the store.
    """
    if name in CLI_EXCLUDED_FIELDS:
        return None

    formatter = _FORMATTERS.get(name)
    if formatter is None:
        warnings.warn(
            f"Unsupported field {name!r} skipped on the command line",
            UnsupportedFieldWarning,
            stacklevel=3,
        )
        return None

    if value is None:
        return f"{name}:"
    return formatter(name, value)


def encode_properties(props: Mapping[str, Any]) -> list[str]:
    """
    Format a property mapping as an ordered list of command-line tokens.

    Works on a deep copy; the caller's mapping is never touched.
    """
    cpy = copy.deepcopy(dict(props))
    for name in CLI_EXCLUDED_FIELDS:
        cpy.pop(name, None)

    cli_args: list[str] = []
    for name, value in cpy.items():
        token = format_field(name, value)
        if token:
            cli_args.append(token)

    logger.debug("Encoded properties for CLI: %s", cli_args)
    return cli_args


# ---- export JSON ----


def decode_task_json(obj: Mapping[str, Any]) -> tuple[str | None, dict[str, Any]]:
    """
    Split one export object into (uuid, properties).

    Timestamp fields are reparsed into datetimes; everything else is copied as-is.
    """
    props = dict(obj)
    for name in TIMESTAMP_FIELDS:
        if name in props:
            props[name] = parse_stamp(props[name], name)

    uuid = props.pop("uuid", None)
    return (str(uuid) if uuid is not None else None), props


def _json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_stamp(value)
    if hasattr(value, "to_json"):
        return value.to_json()
    if isinstance(value, Mapping):
        return {k: _json_value(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_json_value(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


def encode_task_json(uuid: str | None, props: Mapping[str, Any]) -> dict[str, Any]:
    """Inverse of decode_task_json: build an export-shaped JSON object."""
    out: dict[str, Any] = {}
    if uuid:
        out["uuid"] = uuid
    for name, value in props.items():
        out[name] = _json_value(value)
    return out


def parse_export(text: str) -> list[dict[str, Any]]:
    """Parse raw `export` output into a list of JSON objects. Raises FormatError."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(f"Export output is not valid JSON: {e}", raw=text) from e

    if not isinstance(data, list):
        raise FormatError(
            f"Export output must be a JSON array, got {type(data).__name__}", raw=text
        )

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise FormatError(
                f"Export element #{i} is not a JSON object: {item!r}", raw=item
            )
    return data


def split_csv(raw: str | None) -> list[str]:
    """Split a comma-separated list, trimming blanks."""
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]
