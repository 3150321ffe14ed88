"""Repository layer for data access."""

from .filesystem import TaskStore

__all__ = [
    "TaskStore",
]
