"""Exception hierarchy for mdtasks."""

from __future__ import annotations

from pathlib import Path


class MdtasksError(Exception):
    """Base exception for all mdtasks errors."""

    pass


class TaskNotFoundError(MdtasksError):
    """No task with the requested ID exists in the store."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task with ID '{task_id}' not found")


class InvalidTaskRecordError(MdtasksError):
    """A task file could not be decoded into a valid task record."""

    def __init__(self, reason: str, path: Path | None = None) -> None:
        self.reason = reason
        self.path = path
        if path is not None:
            super().__init__(f"Invalid task file {path}: {reason}")
        else:
            super().__init__(f"Invalid task record: {reason}")


class InvalidFieldValueError(MdtasksError):
    """A field mutation supplied a value the field cannot hold."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {reason}")


class UnknownFieldError(MdtasksError):
    """A field mutation named a field that cannot be set."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unknown field: {field}")


class FileIoError(MdtasksError):
    """Reading, writing or deleting a task file failed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"File operation failed for {path}: {reason}")
