"""Configuration models for mdtasks.yml."""

from pydantic import BaseModel, Field, field_validator


class GitConfig(BaseModel):
    """Configuration for the git branch workflow."""

    branch_prefix: str = Field(
        default="feature/",
        description="Prefix for task branch names",
    )
    trunk_branch: str = Field(
        default="main",
        description="Mainline branch that task branches start from and merge into",
    )
    remote: str = Field(default="origin", description="Remote used for pull and push")
    executable: str = Field(default="git", description="Git executable to invoke")

    @field_validator("branch_prefix")
    @classmethod
    def validate_branch_prefix(cls, v: str) -> str:
        """Branch prefix must be non-empty and contain no whitespace."""
        if not v:
            raise ValueError("branch_prefix cannot be empty")
        if any(c.isspace() for c in v):
            raise ValueError(f"branch_prefix '{v}' cannot contain whitespace")
        return v

    @field_validator("trunk_branch", "remote", "executable")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("value cannot be empty")
        return v


class MdtasksConfig(BaseModel):
    """Root configuration model for mdtasks.yml."""

    task_dir: str = Field(
        default="tasks",
        description="Directory containing task files, relative to the project root",
    )
    git: GitConfig = Field(default_factory=GitConfig)

    @field_validator("task_dir")
    @classmethod
    def validate_task_dir(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("task_dir cannot be empty")
        return v

    @classmethod
    def default(cls) -> "MdtasksConfig":
        """Return the built-in default configuration."""
        return cls()
