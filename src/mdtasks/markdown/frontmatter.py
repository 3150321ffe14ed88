"""Codec for the metadata block at the top of a task file.

A task file looks like:

    ---
    id: 007
    title: "Fix login bug"
    status: pending
    priority: high
    tags: ["bug", "auth"]
    created: 2024-05-01
    ---

    # Task Details
    ...

The block is read with python-frontmatter. All scalars are loaded as strings
so zero-padded ids and dates come back exactly as written.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import frontmatter
import yaml
from pydantic import ValidationError

from ..errors import InvalidTaskRecordError
from ..models.task import FIELD_ORDER, Task

logger = logging.getLogger(__name__)

DELIMITER = "---"

# Values matching this are emitted bare; anything else is double-quoted
_PLAIN_SCALAR = re.compile(r"[A-Za-z0-9][A-Za-z0-9_./+-]*(?: [A-Za-z0-9_./+-]+)*")

# Characters YAML either rejects or reads as line breaks inside a quoted scalar
_UNSAFE_CHARS = re.compile("[\x7f-\x9f\u2028\u2029\ud800-\udfff\ufffe\uffff]")

_SCALAR_FIELDS = tuple(name for name in FIELD_ORDER if name not in ("id", "title", "tags"))


class _StringYAMLHandler(frontmatter.YAMLHandler):
    """YAML handler that keeps every scalar as a string."""

    def load(self, fm: str, **kwargs: Any) -> Any:
        kwargs.setdefault("Loader", yaml.BaseLoader)
        return super().load(fm, **kwargs)


class FrontMatterCodec:
    """Encodes and decodes task metadata blocks."""

    def __init__(self) -> None:
        self._handler = _StringYAMLHandler()

    def split(self, raw: str) -> tuple[dict[str, Any] | None, str]:
        """Split raw file text into (metadata mapping or None, body)."""
        if not self._handler.detect(raw.strip()):
            return None, raw.strip()
        try:
            metadata, body = frontmatter.parse(raw, handler=self._handler)
        except yaml.YAMLError as e:
            raise InvalidTaskRecordError(f"malformed metadata block: {e}") from e
        return metadata, body

    def decode(self, raw: str) -> tuple[Task, str]:
        """Decode raw file text into a Task and the remaining body.

        Raises:
            InvalidTaskRecordError: If there is no metadata block or it lacks
                an id or title.
        """
        metadata, body = self.split(raw)
        if not metadata:
            raise InvalidTaskRecordError("missing metadata block")
        return self.task_from_metadata(metadata), body

    def task_from_metadata(self, metadata: dict[str, Any]) -> Task:
        """Build a Task from a decoded mapping, ignoring unknown keys."""
        fields: dict[str, Any] = {}

        for name in ("id", "title", *_SCALAR_FIELDS):
            value = _as_string(metadata.get(name))
            if value is not None:
                fields[name] = value

        tags = metadata.get("tags")
        if isinstance(tags, list):
            fields["tags"] = [tag for tag in (_as_string(t) for t in tags) if tag is not None]

        if not fields.get("id") or not fields.get("title"):
            raise InvalidTaskRecordError("missing required fields: id or title")

        try:
            return Task(**fields)
        except ValidationError as e:
            raise InvalidTaskRecordError(str(e)) from e

    def encode(self, task: Task) -> str:
        """Serialize a task to its metadata block, delimiters included.

        Fields are written in a fixed order and only when present.
        """
        lines = [DELIMITER]
        for name in FIELD_ORDER:
            value = getattr(task, name)
            if value is None:
                continue
            if name == "title":
                lines.append(f"title: {_quote(value)}")
            elif name == "tags":
                lines.append(f"tags: {_format_tags(value)}")
            else:
                lines.append(f"{name}: {_scalar(value)}")
        lines.append(DELIMITER)
        return "\n".join(lines) + "\n"

    def render(self, task: Task, body: str) -> str:
        """Render full file content: metadata block, blank line, body."""
        content = self.encode(task) + "\n"
        body = body.strip("\n")
        if body:
            content += body + "\n"
        return content


def _as_string(value: Any) -> str | None:
    """Coerce a loaded scalar to a string, rejecting nested structures."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _quote(value: str) -> str:
    # JSON string syntax is valid YAML double-quoted scalar syntax
    quoted = json.dumps(value, ensure_ascii=False)
    return _UNSAFE_CHARS.sub(lambda m: f"\\u{ord(m.group()):04x}", quoted)


def _scalar(value: str) -> str:
    if _PLAIN_SCALAR.fullmatch(value):
        return value
    return _quote(value)


def _format_tags(tags: list[str]) -> str:
    return "[" + ", ".join(_quote(tag) for tag in tags) + "]"
