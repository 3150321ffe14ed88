"""Tests for the command-line interface."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mdtasks.__main__ import build_parser, main
from mdtasks.cli.commands import App
from mdtasks.git import GitStatusReport
from mdtasks.models import Task


def run(project: Path, *argv: str) -> int:
    """Run the CLI against a project directory and return the exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--project-root", str(project), *argv])
    return exc_info.value.code


@pytest.fixture
def project(tmp_path: Path) -> Path:
    return tmp_path


class TestParser:
    def test_set_commands_carry_field(self):
        args = build_parser().parse_args(["set-priority", "001", "high"])

        assert args.field == "priority"
        assert args.value == "high"

    def test_add_options(self):
        args = build_parser().parse_args(["add", "Title", "-r", "high", "-g", "a", "b", "-d", "2025-01-31"])

        assert args.priority == "high"
        assert args.tags == ["a", "b"]
        assert args.due == "2025-01-31"

    def test_git_finish_message_optional(self):
        assert build_parser().parse_args(["git-finish"]).message is None
        assert build_parser().parse_args(["git-finish", "fix: x"]).message == "fix: x"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestTaskCommands:
    def test_add_and_list(self, project: Path, capsys: pytest.CaptureFixture[str]):
        assert run(project, "add", "Write docs", "-r", "high", "-g", "docs") == 0
        assert (project / "tasks" / "001-write-docs.md").exists()
        assert "Created task 001: Write docs" in capsys.readouterr().out

        assert run(project, "list") == 0
        out = capsys.readouterr().out
        assert "001" in out
        assert "pending" in out
        assert "Write docs" in out

    def test_list_empty(self, project: Path, capsys: pytest.CaptureFixture[str]):
        assert run(project, "list", "-s", "done") == 0
        assert "No tasks found" in capsys.readouterr().out

    def test_list_filters(self, project: Path, capsys: pytest.CaptureFixture[str]):
        run(project, "add", "First", "-g", "backend")
        run(project, "add", "Second", "-g", "frontend")
        capsys.readouterr()

        run(project, "list", "-t", "BACK")
        out = capsys.readouterr().out

        assert "First" in out
        assert "Second" not in out

    def test_show(self, project: Path, capsys: pytest.CaptureFixture[str]):
        run(project, "add", "Write docs", "-g", "docs", "-n", "Start with the README")
        capsys.readouterr()

        assert run(project, "show", "001") == 0
        out = capsys.readouterr().out
        assert "Task: Write docs" in out
        assert "Tags: docs" in out
        assert "Start with the README" in out

    def test_unknown_task(self, project: Path, capsys: pytest.CaptureFixture[str]):
        assert run(project, "show", "404") == 1
        assert "Task with ID '404' not found" in capsys.readouterr().err

    def test_start_and_done(self, project: Path):
        run(project, "add", "Write docs")
        path = project / "tasks" / "001-write-docs.md"

        assert run(project, "start", "001") == 0
        assert "status: active" in path.read_text()

        assert run(project, "done", "001") == 0
        content = path.read_text()
        assert "status: done" in content
        assert "completed: " in content

    def test_set_fields(self, project: Path):
        run(project, "add", "Write docs")
        path = project / "tasks" / "001-write-docs.md"

        assert run(project, "set-tags", "001", "a, b,,c") == 0
        assert run(project, "set-due", "001", "2025-02-01") == 0

        content = path.read_text()
        assert 'tags: ["a", "b", "c"]' in content
        assert "due: 2025-02-01" in content

    def test_notes_and_checklist(self, project: Path, capsys: pytest.CaptureFixture[str]):
        run(project, "add", "Write docs")
        assert run(project, "add-note", "001", "Check the API section") == 0
        assert run(project, "checklist", "001", "Draft outline") == 0
        assert run(project, "checklist", "001", "Review") == 0
        run(project, "done", "001")
        capsys.readouterr()

        assert run(project, "subtasks", "001") == 0
        out = capsys.readouterr().out
        assert "[x] Draft outline" in out
        assert "[x] Review" in out

    def test_subtasks_empty(self, project: Path, capsys: pytest.CaptureFixture[str]):
        run(project, "add", "Write docs")
        capsys.readouterr()

        run(project, "subtasks", "001")

        assert "No subtasks found." in capsys.readouterr().out

    def test_uses_configured_task_dir(self, project: Path):
        (project / "mdtasks.yml").write_text("task_dir: work\n")

        run(project, "add", "Write docs")

        assert (project / "work" / "001-write-docs.md").exists()

    def test_invalid_config_warns(self, project: Path, capsys: pytest.CaptureFixture[str]):
        (project / "mdtasks.yml").write_text("git: [unclosed\n")

        assert run(project, "list") == 0
        assert "using defaults" in capsys.readouterr().out


class TestCleanup:
    def test_nothing_to_clean(self, project: Path, capsys: pytest.CaptureFixture[str]):
        assert run(project, "cleanup", "-y") == 0
        assert "No done tasks" in capsys.readouterr().out

    def test_deletes_done_tasks(self, project: Path):
        run(project, "add", "Keep me")
        run(project, "add", "Remove me")
        run(project, "done", "002")

        assert run(project, "cleanup", "--yes") == 0

        assert [p.name for p in (project / "tasks").iterdir()] == ["001-keep-me.md"]

    def test_prompt_declined(self, project: Path, monkeypatch: pytest.MonkeyPatch):
        run(project, "add", "Remove me")
        run(project, "done", "001")
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        assert run(project, "cleanup") == 0

        assert (project / "tasks" / "001-remove-me.md").exists()

    def test_prompt_interrupted(self, project: Path, monkeypatch: pytest.MonkeyPatch):
        run(project, "add", "Remove me")
        run(project, "done", "001")

        def interrupt(prompt: str) -> str:
            raise EOFError

        monkeypatch.setattr("builtins.input", interrupt)

        assert run(project, "cleanup") == 0
        assert (project / "tasks" / "001-remove-me.md").exists()


class TestGitCommands:
    def test_git_status_outside_repository(self, project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("mdtasks.git.client.GitClient.is_repository", lambda self: False)

        assert run(project, "git-status") == 1
        assert "Not in a git repository" in capsys.readouterr().err

    def test_git_status_shows_missing_priority_as_none(
        self, project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ):
        workflow = MagicMock()
        workflow.status.return_value = GitStatusReport(
            branch="feature/001-fix-bug",
            task_id="001",
            task=Task(id="001", title="Fix bug", status="active"),
            short_status="",
        )
        monkeypatch.setattr(App, "workflow", lambda self: workflow)

        assert run(project, "git-status") == 0

        out = capsys.readouterr().out
        assert "Current task: 001 - Fix bug" in out
        assert "Status: active" in out
        assert "Priority: none" in out
        assert "(clean)" in out
