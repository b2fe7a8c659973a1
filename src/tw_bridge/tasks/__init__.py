"""
Task subsystem.

Components:
- task_fields.py: field codec (CLI tokens, compact stamps, export JSON)
- task_models.py: data structures (Task, TaskStatus, TaskPriority, TaskAnnotation,
  TaskProperties for drafts, ExportedTaskProperties for decoded tasks)
- task_errors.py: error taxonomy raised by the gateway
- task_runner.py: asyncio subprocess CommandRunner
- task_store.py: TaskWarrior gateway (create/update/complete/delete/query)
- task_api.py: request handler (filter + pagination) on top of the gateway
"""

from .task_errors import (
    ExecutionError,
    FormatError,
    PreconditionError,
    ProtocolError,
    TaskBridgeError,
    UnsupportedFieldWarning,
)
from .task_models import (
    ExportedTaskProperties,
    Task,
    TaskAnnotation,
    TaskPriority,
    TaskProperties,
    TaskStatus,
)
from .task_store import TaskWarrior

__all__ = [
    "ExecutionError",
    "ExportedTaskProperties",
    "FormatError",
    "PreconditionError",
    "ProtocolError",
    "Task",
    "TaskAnnotation",
    "TaskBridgeError",
    "TaskPriority",
    "TaskProperties",
    "TaskStatus",
    "TaskWarrior",
    "UnsupportedFieldWarning",
]
