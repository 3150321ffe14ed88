"""Service layer for business logic."""

from .checklist_service import ChecklistService, complete_checklist, parse_checklist
from .config_service import ConfigService
from .task_service import CleanupResult, TaskService

__all__ = [
    "ChecklistService",
    "CleanupResult",
    "ConfigService",
    "TaskService",
    "complete_checklist",
    "parse_checklist",
]
