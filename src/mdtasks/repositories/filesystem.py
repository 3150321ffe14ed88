"""Filesystem-backed store for task files."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from ..errors import (
    FileIoError,
    InvalidFieldValueError,
    InvalidTaskRecordError,
    TaskNotFoundError,
    UnknownFieldError,
)
from ..markdown import FrontMatterCodec
from ..models import Task, TaskFile
from ..utils import generate_filename

logger = logging.getLogger(__name__)

ID_WIDTH = 3

SETTABLE_FIELDS = ("title", "priority", "tags", "due")


class TaskStore:
    """
    Store for task files on the filesystem.

    Each task lives in its own ``<id>-<slug>.md`` file below ``task_root``
    (subdirectories are scanned too). Every mutation rewrites the whole
    file from the in-memory record and body.
    """

    TASK_EXTENSION = ".md"

    def __init__(self, task_root: Path, codec: FrontMatterCodec | None = None) -> None:
        """
        Initialize the store.

        Args:
            task_root: Directory containing task files (e.g., tasks/)
            codec: Metadata block codec, a default one is created if omitted
        """
        self.task_root = task_root
        self.codec = codec or FrontMatterCodec()

    def ensure_directory(self) -> None:
        """Create the task directory if it doesn't exist."""
        try:
            self.task_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileIoError(self.task_root, str(e)) from e

    # --- Queries ---

    def load_all(self) -> list[TaskFile]:
        """Load every valid task file, sorted by ID (string order).

        Files whose metadata can't be decoded are skipped.
        """
        task_files: list[TaskFile] = []

        if not self.task_root.exists():
            return task_files

        for filepath in self._iter_task_files():
            task_file = self._load_task_file(filepath)
            if task_file is not None:
                task_files.append(task_file)

        task_files.sort(key=lambda tf: tf.task.id)
        return task_files

    def find(self, task_id: str) -> TaskFile:
        """Look up a task by ID.

        Raises:
            TaskNotFoundError: If no task has this ID.
        """
        for task_file in self.load_all():
            if task_file.task.id == task_id:
                return task_file
        raise TaskNotFoundError(task_id)

    def filter(
        self,
        status: str | None = None,
        tag: str | None = None,
        priority: str | None = None,
    ) -> list[TaskFile]:
        """Return tasks matching every supplied filter.

        Filters are case-insensitive substring matches. A task that lacks
        a filtered field never matches.
        """
        results = []
        for task_file in self.load_all():
            task = task_file.task
            if status is not None and not _contains(task.status, status):
                continue
            if tag is not None and not task.has_tag_matching(tag):
                continue
            if priority is not None and not _contains(task.priority, priority):
                continue
            results.append(task_file)
        return results

    def next_id(self) -> str:
        """Return the next free ID: max numeric ID + 1, zero-padded.

        Non-numeric IDs are ignored.
        """
        max_id = 0
        for task_file in self.load_all():
            task_id = task_file.task.id
            if task_id.isascii() and task_id.isdigit():
                max_id = max(max_id, int(task_id))
        return f"{max_id + 1:0{ID_WIDTH}d}"

    # --- Mutations ---

    def create(self, task: Task, body: str) -> TaskFile:
        """Write a new task file named after the task's ID and title."""
        self.ensure_directory()
        path = self.task_root / generate_filename(task.id, task.title)
        task_file = TaskFile(task=task, path=path, body=body)
        self.persist(task_file)
        return task_file

    def persist(self, task_file: TaskFile) -> None:
        """Overwrite the task's file with its re-rendered content."""
        content = self.codec.render(task_file.task, task_file.body)
        try:
            task_file.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileIoError(task_file.path, str(e)) from e
        logger.info("Task %s written to %s", task_file.task.id, task_file.path)

    def set_field(self, task_id: str, field: str, value: str) -> TaskFile:
        """Set a single named field and persist.

        Supported fields are title, priority, tags (comma-separated) and due.

        Raises:
            UnknownFieldError: If the field can't be set; nothing is written.
            InvalidFieldValueError: If the title would be empty; nothing is written.
            TaskNotFoundError: If no task has this ID.
        """
        if field not in SETTABLE_FIELDS:
            raise UnknownFieldError(field)

        task_file = self.find(task_id)
        task = task_file.task

        if field == "title":
            if not value.strip():
                raise InvalidFieldValueError("title", "cannot be empty")
            task.title = value
        elif field == "priority":
            task.priority = value
        elif field == "tags":
            task.tags = [tag.strip() for tag in value.split(",") if tag.strip()]
        elif field == "due":
            task.due = value

        self.persist(task_file)
        logger.info("Task %s: %s set to %r", task_id, field, value)
        return task_file

    def delete(self, task_file: TaskFile) -> None:
        """Delete a task's file."""
        try:
            task_file.path.unlink()
        except OSError as e:
            raise FileIoError(task_file.path, str(e)) from e
        logger.info("Task %s deleted (%s)", task_file.task.id, task_file.path)

    # --- Private Methods ---

    def _iter_task_files(self) -> Iterator[Path]:
        """Iterate over all task files below the task root."""
        for filepath in sorted(self.task_root.rglob(f"*{self.TASK_EXTENSION}")):
            if filepath.is_file():
                yield filepath

    def _load_task_file(self, filepath: Path) -> TaskFile | None:
        """Read and decode one file, returning None if it isn't a valid task."""
        try:
            raw = filepath.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.debug("Skipping %s: not valid UTF-8 (%s)", filepath, e)
            return None
        except OSError as e:
            raise FileIoError(filepath, str(e)) from e

        try:
            task, body = self.codec.decode(raw)
        except InvalidTaskRecordError as e:
            logger.debug("Skipping %s: %s", filepath, e.reason)
            return None

        return TaskFile(task=task, path=filepath, body=body)


def _contains(value: str | None, needle: str) -> bool:
    if value is None:
        return False
    return needle.lower() in value.lower()
