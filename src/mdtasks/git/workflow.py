"""Branch-per-task git workflow.

A task is worked on in its own branch, ``<prefix><id>-<slug>``, created from
the trunk branch:

    trunk --start(id)--> <prefix><id>-<slug> --finish()--> trunk

``start`` syncs trunk, creates the branch and marks a pending task active.
``finish`` marks the task done, commits, merges the branch back with a merge
commit, deletes it and pushes trunk. Steps run strictly in order and the
first failing git command stops the sequence; steps that already ran are not
undone, git keeps enough state to resume by hand.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import TaskNotFoundError
from ..models import STATUS_PENDING, GitConfig, Task
from ..repositories import TaskStore
from ..services import TaskService
from ..utils import generate_branch_name
from .client import GitClient, GitError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class WrongBranchError(GitError):
    """The current branch is not the one the operation requires."""

    def __init__(self, expected: str, actual: str, message: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Must be on branch '{expected}'. Current branch: {actual}")


class NotOnTaskBranchError(WrongBranchError):
    """The current branch is not a task branch."""

    def __init__(self, prefix: str, actual: str) -> None:
        self.prefix = prefix
        super().__init__(f"{prefix}*", actual, f"Not on a task branch. Current branch: {actual}")


class BranchAlreadyExistsError(GitError):
    """A branch with the task's branch name already exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Branch '{name}' already exists")


@dataclass
class StartResult:
    """Outcome of starting work on a task."""

    task: Task
    branch: str
    activated: bool
    had_uncommitted_changes: bool


@dataclass
class FinishResult:
    """Outcome of finishing a task branch."""

    task: Task
    branch: str
    commit_message: str


@dataclass
class GitStatusReport:
    """Read-only snapshot of the workflow state."""

    branch: str
    task_id: str | None
    task: Task | None
    short_status: str

    @property
    def on_task_branch(self) -> bool:
        return self.task_id is not None


def task_id_from_branch(branch: str, prefix: str) -> str | None:
    """Recover the task ID from a task branch name.

    Example: ("feature/007-fix-bug", "feature/") -> "007"
    """
    if not branch.startswith(prefix):
        return None
    return branch[len(prefix) :].split("-", 1)[0]


class GitWorkflowController:
    """Binds task status changes to a branch-per-task git workflow."""

    def __init__(
        self,
        git: GitClient,
        store: TaskStore,
        task_service: TaskService,
        config: GitConfig | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.git = git
        self.store = store
        self.task_service = task_service
        self.config = config or GitConfig()
        self._progress = progress

    def _report(self, message: str) -> None:
        logger.info(message)
        if self._progress is not None:
            self._progress(message)

    def start(self, task_id: str) -> StartResult:
        """Create and switch to the task's branch from an up-to-date trunk.

        All preconditions are checked before anything is changed: a git
        repository, trunk checked out, the task exists and its branch
        doesn't.
        """
        trunk = self.config.trunk_branch

        self.git.ensure_repository()
        current = self.git.current_branch()
        if current != trunk:
            raise WrongBranchError(trunk, current)

        task = self.store.find(task_id).task
        branch = generate_branch_name(self.config.branch_prefix, task.id, task.title)
        if self.git.branch_exists(branch):
            raise BranchAlreadyExistsError(branch)

        dirty = self.git.has_uncommitted_changes()
        if dirty:
            self._report("Uncommitted changes will be auto-stashed and restored")

        self._report(f"Pulling latest changes from {self.config.remote}/{trunk}...")
        self.git.pull_rebase(self.config.remote, trunk)

        self._report(f"Creating branch: {branch}")
        self.git.checkout(branch, create=True)

        activated = False
        if task.status == STATUS_PENDING:
            self._report(f"Marking task {task.id} as active")
            task = self.task_service.start_task(task.id).task
            activated = True

        return StartResult(
            task=task,
            branch=branch,
            activated=activated,
            had_uncommitted_changes=dirty,
        )

    def finish(self, message: str | None = None) -> FinishResult:
        """Complete the current task branch and merge it into trunk.

        The task is marked done before committing so the updated task file
        is part of the commit.
        """
        prefix = self.config.branch_prefix
        trunk = self.config.trunk_branch
        remote = self.config.remote

        self.git.ensure_repository()
        branch = self.git.current_branch()
        task_id = task_id_from_branch(branch, prefix)
        if task_id is None:
            raise NotOnTaskBranchError(prefix, branch)

        task = self.store.find(task_id).task
        commit_message = message or f"feat: {task.title} (task #{task.id})"

        self._report(f"Marking task {task.id} as done")
        task = self.task_service.complete_task(task.id).task

        self._report("Committing changes...")
        self.git.add_all()
        self.git.commit(commit_message)

        self._report(f"Switching to {trunk}...")
        self.git.checkout(trunk)

        self._report(f"Merging branch '{branch}' into {trunk}...")
        self.git.merge_no_ff(branch)

        self._report(f"Deleting task branch '{branch}'...")
        self.git.delete_branch(branch)

        self._report(f"Pushing {trunk} to {remote}...")
        self.git.push(remote, trunk)

        return FinishResult(task=task, branch=branch, commit_message=commit_message)

    def status(self) -> GitStatusReport:
        """Report the current branch and the task it belongs to, if any."""
        self.git.ensure_repository()
        branch = self.git.current_branch()
        task_id = task_id_from_branch(branch, self.config.branch_prefix)

        task = None
        if task_id is not None:
            try:
                task = self.store.find(task_id).task
            except TaskNotFoundError:
                logger.debug("Task %s for branch %s not found", task_id, branch)

        return GitStatusReport(
            branch=branch,
            task_id=task_id,
            task=task,
            short_status=self.git.short_status(),
        )
