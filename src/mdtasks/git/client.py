"""Thin wrapper around the git executable."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ..errors import MdtasksError

logger = logging.getLogger(__name__)


class GitError(MdtasksError):
    """Base exception for git workflow errors."""

    pass


class NotAGitRepositoryError(GitError):
    """The working directory is not inside a git work tree."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Not in a git repository: {path}")


class GitCommandError(GitError):
    """A git invocation exited non-zero or couldn't be started."""

    def __init__(self, args: list[str], stderr: str) -> None:
        self.command = args
        self.stderr = stderr
        super().__init__(f"Git command failed: git {' '.join(args)}: {stderr.strip()}")


class GitClient:
    """Runs git commands in a working directory.

    Every call blocks until git exits. A non-zero exit raises
    GitCommandError carrying git's stderr; success returns stdout.
    """

    def __init__(self, cwd: Path, executable: str = "git") -> None:
        """Initialize the client.

        Args:
            cwd: Directory git is run in
            executable: Name or path of the git executable
        """
        self.cwd = cwd
        self.executable = executable

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its stdout."""
        cmd = [self.executable, *args]
        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise GitCommandError(list(args), f"failed to run {self.executable}: {e}") from e

        if result.returncode != 0:
            logger.debug("git exited with %d: %s", result.returncode, result.stderr.strip())
            raise GitCommandError(list(args), result.stderr)
        return result.stdout

    # --- Queries ---

    def is_repository(self) -> bool:
        """Check whether cwd is inside a git work tree."""
        try:
            return self.run("rev-parse", "--is-inside-work-tree").strip() == "true"
        except GitCommandError:
            return False

    def ensure_repository(self) -> None:
        if not self.is_repository():
            raise NotAGitRepositoryError(self.cwd)

    def current_branch(self) -> str:
        return self.run("branch", "--show-current").strip()

    def branch_exists(self, name: str) -> bool:
        return bool(self.run("branch", "--list", name).strip())

    def has_uncommitted_changes(self) -> bool:
        return bool(self.run("status", "--porcelain").strip())

    def short_status(self) -> str:
        return self.run("status", "--short")

    # --- Mutations ---

    def pull_rebase(self, remote: str, branch: str) -> None:
        """Pull with rebase, stashing and restoring local changes."""
        self.run("pull", "--rebase", "--autostash", remote, branch)

    def checkout(self, branch: str, create: bool = False) -> None:
        if create:
            self.run("checkout", "-b", branch)
        else:
            self.run("checkout", branch)

    def add_all(self) -> None:
        self.run("add", ".")

    def commit(self, message: str) -> None:
        self.run("commit", "-m", message)

    def merge_no_ff(self, branch: str) -> None:
        self.run("merge", "--no-ff", "--no-edit", branch)

    def delete_branch(self, branch: str) -> None:
        self.run("branch", "-d", branch)

    def push(self, remote: str, branch: str) -> None:
        self.run("push", remote, branch)
