"""Shared helpers."""

from .datetime import now_utc, today
from .slug import generate_branch_name, generate_filename, slugify

__all__ = [
    "generate_branch_name",
    "generate_filename",
    "now_utc",
    "slugify",
    "today",
]
