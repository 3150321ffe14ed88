"""Command handlers: each maps one subcommand onto a core operation."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from ..git import GitClient, GitWorkflowController
from ..repositories import TaskStore
from ..services import ChecklistService, ConfigService, TaskService
from .output import error, header, info, success, warning


@dataclass
class App:
    """Wired-up services for one command invocation."""

    project_root: Path
    config_service: ConfigService
    store: TaskStore
    task_service: TaskService
    checklist_service: ChecklistService

    @classmethod
    def create(cls, project_root: Path) -> App:
        config_service = ConfigService(project_root)
        config_service.get_config()
        if config_service.has_config_error:
            warning(f"{config_service.config_error} (using defaults)")
        store = TaskStore(config_service.task_root)
        return cls(
            project_root=project_root,
            config_service=config_service,
            store=store,
            task_service=TaskService(store),
            checklist_service=ChecklistService(store),
        )

    def workflow(self) -> GitWorkflowController:
        git_config = self.config_service.get_git_config()
        return GitWorkflowController(
            git=GitClient(self.project_root, git_config.executable),
            store=self.store,
            task_service=self.task_service,
            config=git_config,
            progress=info,
        )


# --- Tasks ---


def run_list(app: App, args: argparse.Namespace) -> int:
    task_files = app.store.filter(status=args.status, tag=args.tag, priority=args.priority)
    if not task_files:
        info("No tasks found matching the criteria.")
        return 0

    print(f"{'ID':<4} {'STATUS':<12} {'PRIORITY':<8} {'TITLE':<50}")
    print("-" * 80)
    for task_file in task_files:
        task = task_file.task
        print(f"{task.id:<4} {task.display_status:<12} {task.display_priority:<8} {task.title:<50}")
    return 0


def run_show(app: App, args: argparse.Namespace) -> int:
    task_file = app.store.find(args.id)
    task = task_file.task

    header(f"Task: {task.title}")
    print(f"ID: {task.id}")
    print(f"Status: {task.display_status}")
    print(f"Priority: {task.display_priority}")
    if task.tags:
        print(f"Tags: {', '.join(task.tags)}")
    if task.project:
        print(f"Project: {task.project}")
    if task.created:
        print(f"Created: {task.created}")
    if task.due:
        print(f"Due: {task.due}")
    if task.started:
        print(f"Started: {task.started}")
    if task.completed:
        print(f"Completed: {task.completed}")
    print(f"File: {task_file.path}")
    print()
    print(task_file.body)
    return 0


def run_add(app: App, args: argparse.Namespace) -> int:
    task_file = app.task_service.add_task(
        args.title,
        priority=args.priority,
        status=args.status,
        tags=args.tags,
        project=args.project,
        due=args.due,
        notes=args.notes,
    )
    success(f"Created task {task_file.id}: {task_file.task.title}")
    info(f"File: {task_file.path}")
    return 0


def run_done(app: App, args: argparse.Namespace) -> int:
    task_file = app.task_service.complete_task(args.id)
    success(f"Marked task {task_file.id} as done: {task_file.task.title}")
    return 0


def run_start(app: App, args: argparse.Namespace) -> int:
    task_file = app.task_service.start_task(args.id)
    success(f"Started task {task_file.id}: {task_file.task.title}")
    return 0


def run_set_field(app: App, args: argparse.Namespace) -> int:
    app.store.set_field(args.id, args.field, args.value)
    success(f"Updated {args.field} for task {args.id}: {args.value}")
    return 0


def run_add_note(app: App, args: argparse.Namespace) -> int:
    app.task_service.add_note(args.id, args.note)
    success(f"Added note to task {args.id}: {args.note}")
    return 0


def run_cleanup(app: App, args: argparse.Namespace) -> int:
    done = app.task_service.find_done()
    if not done:
        success("No done tasks to clean up")
        return 0

    header(f"Found {len(done)} done task(s) to clean up:")
    for task_file in done:
        print(f"  - {task_file.id}: {task_file.task.title}")

    if not args.yes:
        try:
            response = input("Delete these task files? [y/N] ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            print()
            info("Cleanup cancelled")
            return 0
        if not response.startswith("y"):
            info("Cleanup cancelled")
            return 0

    result = app.task_service.cleanup_done(done)
    for path in result.deleted:
        info(f"Deleted: {path}")
    for path, reason in result.failed:
        error(f"Failed to delete {path}: {reason}")
    success(f"Cleaned up {len(result.deleted)} done task(s)")
    return 1 if result.failed else 0


# --- Checklist ---


def run_checklist(app: App, args: argparse.Namespace) -> int:
    app.checklist_service.add_item(args.id, args.item)
    success(f"Added checklist item to task {args.id}: {args.item}")
    return 0


def run_subtasks(app: App, args: argparse.Namespace) -> int:
    task = app.store.find(args.id).task
    items = app.checklist_service.list_items(args.id)

    header(f"Subtasks for task {task.id}: {task.title}")
    if not items:
        print("  No subtasks found.")
        return 0
    for item in items:
        mark = "[x]" if item.done else "[ ]"
        print(f"  {mark} {item.text}")
    return 0


# --- Git workflow ---


def run_git_start(app: App, args: argparse.Namespace) -> int:
    result = app.workflow().start(args.id)
    success(f"Started work on task {result.task.id} in branch '{result.branch}'")
    info(f"Task: {result.task.title}")
    return 0


def run_git_finish(app: App, args: argparse.Namespace) -> int:
    result = app.workflow().finish(args.message)
    success(f"Finished task {result.task.id}: {result.task.title}")
    info(f"Merged '{result.branch}' and pushed")
    return 0


def run_git_status(app: App, args: argparse.Namespace) -> int:  # noqa: ARG001
    report = app.workflow().status()
    info(f"Current branch: {report.branch}")

    if not report.on_task_branch:
        info("No active task branch")
    elif report.task is None:
        warning(f"Task {report.task_id} not found in task directory")
    else:
        task = report.task
        info(f"Current task: {task.id} - {task.title}")
        info(f"Status: {task.display_status}")
        info(f"Priority: {task.priority or 'none'}")

    header("\nGit status:")
    print(report.short_status.rstrip() or "  (clean)")
    return 0
