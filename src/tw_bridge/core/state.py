# src/tw_bridge/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskGateway


@dataclass(slots=True)
class AppState:
    """
    Everything a handler needs, built once by the composition root.

    settings is typed loosely so tests can pass a SimpleNamespace.
    """

    settings: object
    store: TaskGateway

    @property
    def page_size(self) -> int:
        return int(getattr(self.settings, "page_size", 10) or 10)
