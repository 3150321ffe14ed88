"""Git integration: subprocess client and the branch-per-task workflow."""

from .client import GitClient, GitCommandError, GitError, NotAGitRepositoryError
from .workflow import (
    BranchAlreadyExistsError,
    FinishResult,
    GitStatusReport,
    GitWorkflowController,
    NotOnTaskBranchError,
    StartResult,
    WrongBranchError,
    task_id_from_branch,
)

__all__ = [
    "BranchAlreadyExistsError",
    "FinishResult",
    "GitClient",
    "GitCommandError",
    "GitError",
    "GitStatusReport",
    "GitWorkflowController",
    "NotAGitRepositoryError",
    "NotOnTaskBranchError",
    "StartResult",
    "WrongBranchError",
    "task_id_from_branch",
]
