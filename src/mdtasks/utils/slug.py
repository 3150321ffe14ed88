"""Utilities for generating filesystem- and branch-safe slugs."""

import re
import unicodedata


def slugify(text: str) -> str:
    """
    Convert text to a slug usable in filenames and branch names.

    Example: "Fix Login Bug!" -> "fix-login-bug"
    """
    # Normalize unicode characters
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()

    # Replace spaces and underscores with hyphens
    text = re.sub(r"[\s_]+", "-", text)

    # Remove any character that isn't alphanumeric or hyphen
    text = re.sub(r"[^a-z0-9\-]", "", text)

    # Remove leading/trailing hyphens and collapse multiple hyphens
    text = re.sub(r"-+", "-", text).strip("-")

    return text


def generate_filename(task_id: str, title: str) -> str:
    """Generate a task filename: ``<id>-<slug>.md``."""
    slug = slugify(title)
    if not slug:
        slug = "untitled"
    return f"{task_id}-{slug}.md"


def generate_branch_name(prefix: str, task_id: str, title: str) -> str:
    """Generate a task branch name: ``<prefix><id>-<slug>``."""
    slug = slugify(title)
    if not slug:
        slug = "untitled"
    return f"{prefix}{task_id}-{slug}"
