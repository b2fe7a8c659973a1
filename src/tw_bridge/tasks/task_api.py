# src/tw_bridge/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.ports import TaskGateway
from .task_errors import PreconditionError, TaskBridgeError
from .task_fields import split_csv
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_FILTER = "active"
DEFAULT_PAGE_SIZE = 10

_LISTERS: dict[str, Callable[[TaskGateway], Awaitable[list[Task]]]] = {
    "active": lambda gw: gw.get_active_tasks(),
    "all": lambda gw: gw.get_all_tasks(),
    "completed": lambda gw: gw.get_completed_tasks(),
    "blocking": lambda gw: gw.get_blocking_tasks(),
    "blocked": lambda gw: gw.get_blocked_tasks(),
    "ready": lambda gw: gw.get_ready_tasks(),
    "unblocked": lambda gw: gw.get_unblocked_tasks(),
}

KNOWN_FILTERS: frozenset[str] = frozenset({*_LISTERS, "latest", "some"})


@dataclass(slots=True, frozen=True)
class ApiResponse:
    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def _bad_request(message: str) -> ApiResponse:
    return ApiResponse(status=400, body={"message": message})


def _parse_page(raw: Any) -> int | str:
    """Return the page number, or an error message."""
    try:
        page = int(str(raw).strip())
    except ValueError:
        return f"page parameter should be an unsigned int, got: {raw}"
    if page < 0:
        return (
            "page parameter should be an unsigned integer. "
            "You can use page: 0 for the first page of tasks"
        )
    return page


async def list_tasks(
    gateway: TaskGateway,
    params: Mapping[str, Any],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ApiResponse:
    """
    Handle a "list tasks" request.

    params:
    - filter: one of KNOWN_FILTERS (default "active")
    - uuids:  comma-separated list, required when filter == "some"
    - page:   optional zero-based page number

    Without `page`, or when everything fits on one page, the whole list is returned.
    Rejected arguments (e.g. a malformed uuid) are a 400; other store errors become
    a 500 with the error text.
    """
    flt = str(params.get("filter") or DEFAULT_FILTER).strip().lower()
    if flt not in KNOWN_FILTERS:
        return _bad_request(f"Unknown filter: {flt}")

    uuids: list[str] = []
    if flt == "some":
        uuids = split_csv(params.get("uuids"))
        if not uuids:
            return _bad_request(
                "No tasks could be read. Make sure you add them as part of the query parameters "
                'in a field called uuids in a comma-separated list, e.g., {... "filter": "some", '
                '"uuids": "<uuid>,<uuid>"}'
            )

    page: int | None = None
    if params.get("page") is not None:
        parsed = _parse_page(params["page"])
        if isinstance(parsed, str):
            return _bad_request(parsed)
        page = parsed

    try:
        if flt == "latest":
            tasks = [await gateway.get_latest_task()]
        elif flt == "some":
            tasks = await gateway.get_multiple_tasks(uuids)
        else:
            tasks = await _LISTERS[flt](gateway)
    except PreconditionError as e:
        return _bad_request(str(e))
    except TaskBridgeError as e:
        logger.warning("list_tasks filter=%s failed: %s", flt, e)
        return ApiResponse(status=500, body={"message": str(e)})

    body = [t.to_json() for t in tasks]

    size = max(1, int(page_size))
    if page is None or len(body) <= size:
        return ApiResponse(status=200, body=body)

    # Pages are sliced locally; a task added while a client pages through may shift entries.
    return ApiResponse(status=200, body=body[size * page : size * (page + 1)])
