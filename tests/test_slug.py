"""Tests for slug generation utilities."""

import pytest

from mdtasks.utils.slug import generate_branch_name, generate_filename, slugify


class TestSlugify:
    """Tests for the slugify function."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Hello World", "hello-world"),
            ("Fix Login Bug!", "fix-login-bug"),
            ("What's up?", "whats-up"),
            ("feat: add, remove. done", "feat-add-remove-done"),
            ("snake_case_title", "snake-case-title"),
            ("hello - - world", "hello-world"),
            ("  ---padded---  ", "padded"),
            ("Caf\u00e9 na\u00efve", "cafe-naive"),
            ("version 2.0", "version-20"),
            ("@#$%", ""),
        ],
    )
    def test_slugify(self, title: str, expected: str):
        assert slugify(title) == expected


class TestGenerateFilename:
    """Tests for task filename generation."""

    def test_id_and_slug(self):
        assert generate_filename("007", "Fix Login Bug") == "007-fix-login-bug.md"

    def test_empty_slug_uses_untitled(self):
        assert generate_filename("001", "!!!") == "001-untitled.md"


class TestGenerateBranchName:
    """Tests for task branch name generation."""

    def test_prefix_id_and_slug(self):
        assert generate_branch_name("feature/", "012", "Add dark mode!") == (
            "feature/012-add-dark-mode"
        )

    def test_custom_prefix(self):
        assert generate_branch_name("task/", "3", "Docs") == "task/3-docs"
