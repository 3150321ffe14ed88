"""Service for task creation, status changes and housekeeping."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import FileIoError, InvalidFieldValueError
from ..markdown import CHECKLIST, NOTES, insert_into_section
from ..models import (
    DEFAULT_PRIORITY,
    STATUS_ACTIVE,
    STATUS_DONE,
    STATUS_PENDING,
    Task,
    TaskFile,
)
from ..repositories import TaskStore
from ..utils import today
from .checklist_service import complete_checklist

logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """Outcome of deleting done tasks."""

    deleted: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)


class TaskService:
    """Service for task operations built on the store."""

    def __init__(self, store: TaskStore) -> None:
        self.store = store

    def add_task(
        self,
        title: str,
        priority: str | None = None,
        status: str | None = None,
        tags: list[str] | None = None,
        project: str | None = None,
        due: str | None = None,
        notes: str | None = None,
    ) -> TaskFile:
        """
        Create a new task with the next free ID.

        Status defaults to pending and priority to medium. The body gets a
        Checklist section, preceded by a Notes section if notes are given.
        """
        if not title.strip():
            raise InvalidFieldValueError("title", "cannot be empty")

        task = Task(
            id=self.store.next_id(),
            title=title,
            status=status or STATUS_PENDING,
            priority=priority or DEFAULT_PRIORITY,
            tags=tags,
            project=project,
            created=today(),
            due=due,
        )

        task_file = self.store.create(task, _initial_body(notes))
        logger.info("Task created: %s (%s)", task.id, task_file.path)
        return task_file

    def start_task(self, task_id: str) -> TaskFile:
        """Mark a task active and record its start date."""
        task_file = self.store.find(task_id)
        task_file.task.status = STATUS_ACTIVE
        task_file.task.started = today()
        self.store.persist(task_file)
        logger.info("Task %s started", task_id)
        return task_file

    def complete_task(self, task_id: str) -> TaskFile:
        """Mark a task done, record the completion date and tick its checklist."""
        task_file = self.store.find(task_id)
        task_file.task.status = STATUS_DONE
        task_file.task.completed = today()
        task_file.body = complete_checklist(task_file.body)
        self.store.persist(task_file)
        logger.info("Task %s completed", task_id)
        return task_file

    def add_note(self, task_id: str, note: str) -> TaskFile:
        """Add a note to the Notes section, creating it if needed."""
        task_file = self.store.find(task_id)
        task_file.body = insert_into_section(task_file.body, NOTES, note)
        self.store.persist(task_file)
        logger.info("Note added to task %s", task_id)
        return task_file

    def find_done(self) -> list[TaskFile]:
        """Tasks whose status is exactly done."""
        return [tf for tf in self.store.load_all() if tf.task.status == STATUS_DONE]

    def cleanup_done(self, task_files: list[TaskFile] | None = None) -> CleanupResult:
        """Delete done task files.

        A failed deletion is recorded and the remaining files are still
        processed.
        """
        if task_files is None:
            task_files = self.find_done()

        result = CleanupResult()
        for task_file in task_files:
            try:
                self.store.delete(task_file)
            except FileIoError as e:
                logger.warning("Failed to delete %s: %s", e.path, e.reason)
                result.failed.append((e.path, e.reason))
            else:
                result.deleted.append(task_file.path)
        return result


def _initial_body(notes: str | None) -> str:
    lines = ["# Task Details", ""]
    if notes:
        lines.extend([f"## {NOTES}", notes, ""])
    lines.append(f"## {CHECKLIST}")
    return "\n".join(lines) + "\n"
