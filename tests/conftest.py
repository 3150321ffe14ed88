"""Shared fixtures."""

from pathlib import Path

import pytest

from helpers import git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A work tree on ``main`` with one commit, tracking a bare ``origin``."""
    remote = tmp_path / "remote.git"
    repo = tmp_path / "repo"
    repo.mkdir()

    git(tmp_path, "init", "--bare", str(remote))
    git(remote, "symbolic-ref", "HEAD", "refs/heads/main")

    git(repo, "init")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("# Project\n")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "Initial commit")
    git(repo, "remote", "add", "origin", str(remote))
    git(repo, "push", "origin", "main")
    return repo
