"""Editing of second-level sections inside a task body.

A section starts at a line whose stripped text begins with ``## <heading>``
and runs until the next ``##`` heading or the end of the body. Third-level
(``###``) and deeper headings stay inside the section.
"""

from collections.abc import Callable
from dataclasses import dataclass

NOTES = "Notes"
CHECKLIST = "Checklist"


@dataclass(frozen=True)
class Section:
    """Line range of a section within a body.

    ``start`` is the index of the heading line and ``end`` is the exclusive
    index of the line that closes the section (or the line count).
    """

    start: int
    end: int

    @property
    def content_start(self) -> int:
        return self.start + 1


def is_section_boundary(line: str) -> bool:
    """Return True if the line is a ``##`` heading that closes a section."""
    stripped = line.strip()
    return stripped.startswith("##") and not stripped.startswith("###")


def _opens_section(line: str, heading: str) -> bool:
    return line.strip().startswith(f"## {heading}")


def find_section(body: str | list[str], heading: str) -> Section | None:
    """Locate the first section with the given heading."""
    lines = _split(body) if isinstance(body, str) else body

    for index, line in enumerate(lines):
        if not _opens_section(line, heading):
            continue
        end = index + 1
        while end < len(lines) and not is_section_boundary(lines[end]):
            end += 1
        return Section(start=index, end=end)

    return None


def section_lines(body: str, heading: str) -> list[str]:
    """Return the lines strictly inside a section (empty if absent)."""
    lines = _split(body)
    section = find_section(lines, heading)
    if section is None:
        return []
    return lines[section.content_start : section.end]


def insert_into_section(body: str, heading: str, line: str) -> str:
    """Insert a line into a section, creating the section if needed.

    The line goes at the first blank line inside the section, or just
    before the section's end when it has no blank line. A missing section
    is appended to the end of the body.
    """
    lines = _split(body)
    section = find_section(lines, heading)

    if section is None:
        while lines and not lines[-1].strip():
            lines.pop()
        if lines:
            lines.append("")
        lines.extend([f"## {heading}", line])
        return _join(lines, body)

    position = section.end
    for index in range(section.content_start, section.end):
        if not lines[index].strip():
            position = index
            break

    lines.insert(position, line)
    return _join(lines, body)


def transform_section(body: str, heading: str, mapper: Callable[[str], str]) -> str:
    """Apply ``mapper`` to every line inside a section.

    Lines outside the section, and the heading itself, are left untouched.
    """
    lines = _split(body)
    section = find_section(lines, heading)
    if section is None:
        return body

    for index in range(section.content_start, section.end):
        lines[index] = mapper(lines[index])

    return _join(lines, body)


def _split(body: str) -> list[str]:
    """Split a body on newlines only, ignoring one trailing newline."""
    if not body:
        return []
    lines = body.split("\n")
    if body.endswith("\n"):
        lines.pop()
    return lines


def _join(lines: list[str], original: str) -> str:
    """Join lines, keeping the original body's trailing newline."""
    result = "\n".join(lines)
    if original.endswith("\n"):
        result += "\n"
    return result
