"""CLI entry point for mdtasks."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .cli import commands
from .cli.output import error
from .config import Settings
from .errors import MdtasksError
from .logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mdtasks",
        description="Markdown task manager with a branch-per-task git workflow",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Path to project root containing mdtasks.yml (default: current directory)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    p = sub.add_parser("list", help="List tasks")
    p.add_argument("-s", "--status", help="Filter by status (pending, active, done, ...)")
    p.add_argument("-t", "--tag", help="Filter by tag")
    p.add_argument("-p", "--priority", help="Filter by priority (low, medium, high)")
    p.set_defaults(handler=commands.run_list)

    p = sub.add_parser("show", help="Show task details")
    p.add_argument("id", help="Task ID to show")
    p.set_defaults(handler=commands.run_show)

    p = sub.add_parser("add", help="Add a new task")
    p.add_argument("title", help="Task title")
    p.add_argument("-r", "--priority", help="Task priority (low, medium, high)")
    p.add_argument("-s", "--status", help="Task status (pending, active, done)")
    p.add_argument("-g", "--tags", nargs="+", help="Tags for the task")
    p.add_argument("-j", "--project", help="Project name")
    p.add_argument("-d", "--due", help="Due date")
    p.add_argument("-n", "--notes", help="Initial notes")
    p.set_defaults(handler=commands.run_add)

    p = sub.add_parser("done", help="Mark a task as done")
    p.add_argument("id", help="Task ID to mark as done")
    p.set_defaults(handler=commands.run_done)

    p = sub.add_parser("start", help="Mark a task as started/active")
    p.add_argument("id", help="Task ID to mark as started")
    p.set_defaults(handler=commands.run_start)

    p = sub.add_parser("checklist", help="Add an item to a task's checklist")
    p.add_argument("id", help="Task ID")
    p.add_argument("item", help="Checklist item to add")
    p.set_defaults(handler=commands.run_checklist)

    p = sub.add_parser("subtasks", help="List checklist items of a task")
    p.add_argument("id", help="Task ID")
    p.set_defaults(handler=commands.run_subtasks)

    for field in ("title", "priority", "tags", "due"):
        p = sub.add_parser(f"set-{field}", help=f"Set task {field}")
        p.add_argument("id", help="Task ID to update")
        p.add_argument(
            "value",
            metavar=field.upper(),
            help="Comma-separated tags" if field == "tags" else f"New {field}",
        )
        p.set_defaults(handler=commands.run_set_field, field=field)

    p = sub.add_parser("add-note", help="Add a note to a task")
    p.add_argument("id", help="Task ID")
    p.add_argument("note", help="Note to add")
    p.set_defaults(handler=commands.run_add_note)

    p = sub.add_parser("git-start", help="Start a git branch for a task")
    p.add_argument("id", help="Task ID to create a branch for")
    p.set_defaults(handler=commands.run_git_start)

    p = sub.add_parser("git-finish", help="Finish the task branch and merge it into trunk")
    p.add_argument("message", nargs="?", default=None, help="Commit message")
    p.set_defaults(handler=commands.run_git_finish)

    p = sub.add_parser("git-status", help="Show git branch and current task")
    p.set_defaults(handler=commands.run_git_status)

    p = sub.add_parser("cleanup", help="Delete the files of done tasks")
    p.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompt")
    p.set_defaults(handler=commands.run_cleanup)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    setup_logging(settings.verbose, settings.log_file)

    try:
        app = commands.App.create(settings.project_root)
        exit_code = args.handler(app, args)
    except MdtasksError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        error(str(e))
        exit_code = 1

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
