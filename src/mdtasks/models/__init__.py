"""Data models."""

from .mdtasks_config import GitConfig, MdtasksConfig
from .task import (
    DEFAULT_PRIORITY,
    FIELD_ORDER,
    STATUS_ACTIVE,
    STATUS_DONE,
    STATUS_PENDING,
    ChecklistItem,
    Task,
    TaskFile,
)

__all__ = [
    "DEFAULT_PRIORITY",
    "FIELD_ORDER",
    "STATUS_ACTIVE",
    "STATUS_DONE",
    "STATUS_PENDING",
    "ChecklistItem",
    "GitConfig",
    "MdtasksConfig",
    "Task",
    "TaskFile",
]
