"""mdtasks - markdown task tracker with a branch-per-task git workflow."""

__version__ = "0.1.0"
