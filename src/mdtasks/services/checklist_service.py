"""Service for checklist operations on a task's body."""

from __future__ import annotations

import logging
import re

from ..markdown import CHECKLIST, insert_into_section, section_lines, transform_section
from ..models import ChecklistItem
from ..repositories import TaskStore

logger = logging.getLogger(__name__)

_CHECKBOX = re.compile(r"^\s*- \[(?P<mark>[ xX])\](?P<text>.*)$")
_INCOMPLETE = re.compile(r"^(?P<indent>[ \t]*)- \[ \]")


def parse_checklist(body: str) -> list[ChecklistItem]:
    """Parse the checkbox lines of the Checklist section.

    Lines that aren't checkboxes are ignored.
    """
    items = []
    for line in section_lines(body, CHECKLIST):
        match = _CHECKBOX.match(line)
        if match:
            items.append(
                ChecklistItem(done=match["mark"] != " ", text=match["text"].strip())
            )
    return items


def complete_checklist(body: str) -> str:
    """Return the body with every Checklist checkbox marked complete."""
    return transform_section(body, CHECKLIST, _complete_line)


def _complete_line(line: str) -> str:
    return _INCOMPLETE.sub(r"\g<indent>- [x]", line, count=1)


class ChecklistService:
    """Adds, lists and completes checklist entries of stored tasks."""

    def __init__(self, store: TaskStore) -> None:
        self.store = store

    def add_item(self, task_id: str, text: str) -> None:
        """Append an incomplete entry, creating the section if needed."""
        task_file = self.store.find(task_id)
        task_file.body = insert_into_section(task_file.body, CHECKLIST, f"- [ ] {text}")
        self.store.persist(task_file)
        logger.info("Checklist item added to task %s: %s", task_id, text)

    def list_items(self, task_id: str) -> list[ChecklistItem]:
        """List the task's checklist entries in file order."""
        return parse_checklist(self.store.find(task_id).body)

    def mark_all_complete(self, task_id: str) -> None:
        """Mark every entry of the task's checklist complete."""
        task_file = self.store.find(task_id)
        task_file.body = complete_checklist(task_file.body)
        self.store.persist(task_file)
