"""Task file format: metadata block codec and section editing."""

from .frontmatter import FrontMatterCodec
from .sections import (
    CHECKLIST,
    NOTES,
    Section,
    find_section,
    insert_into_section,
    section_lines,
    transform_section,
)

__all__ = [
    "CHECKLIST",
    "NOTES",
    "FrontMatterCodec",
    "Section",
    "find_section",
    "insert_into_section",
    "section_lines",
    "transform_section",
]
