"""Task domain model."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

# Status constants for the built-in workflow states
STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_DONE = "done"

DEFAULT_PRIORITY = "medium"

# Fixed serialization order of the metadata block
FIELD_ORDER = (
    "id",
    "title",
    "status",
    "priority",
    "tags",
    "project",
    "created",
    "due",
    "completed",
    "started",
)


class Task(BaseModel):
    """Represents the metadata of a single task file."""

    id: str = Field(..., min_length=1)  # Zero-padded, e.g. "007"
    title: str = Field(..., min_length=1)

    # Optional fields are kept as None when absent so a rewrite only emits
    # what the file had
    status: str | None = None  # String to support custom states
    priority: str | None = None
    tags: list[str] | None = None
    project: str | None = None

    # Date strings are passed through untouched
    created: str | None = None
    due: str | None = None
    completed: str | None = None
    started: str | None = None

    @property
    def display_status(self) -> str:
        return self.status or "unknown"

    @property
    def display_priority(self) -> str:
        return self.priority or DEFAULT_PRIORITY

    def has_tag_matching(self, needle: str) -> bool:
        """Case-insensitive substring match against any tag."""
        if not self.tags:
            return False
        needle = needle.lower()
        return any(needle in tag.lower() for tag in self.tags)


@dataclass
class TaskFile:
    """A task record together with its storage path and markdown body."""

    task: Task
    path: Path
    body: str = ""

    @property
    def id(self) -> str:
        return self.task.id


@dataclass(frozen=True)
class ChecklistItem:
    """A single checkbox line from a task's Checklist section."""

    done: bool
    text: str
