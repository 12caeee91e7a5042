"""Tests for the task sub-commands, run through the top-level app."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from gittaskr_cli.main import app

runner = CliRunner()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json(output: str):
    return json.loads(output[output.index("{") :])


@pytest.fixture
def db_file(tmp_path):
    return str(tmp_path / "cli.db")


def _invoke(db_file, *args, **kwargs):
    return runner.invoke(app, ["--db", db_file, *args], **kwargs)


@pytest.fixture
def repository_id(db_file, repo_dir):
    result = _invoke(db_file, "repo", "add", "--name", "demo", "--path", str(repo_dir))
    assert result.exit_code == 0, result.output
    return "1"


def _add_task(db_file, repository_id, title, *extra):
    result = _invoke(db_file, "task", "add", repository_id, "--title", title, "-o", "json", *extra)
    assert result.exit_code == 0, result.output
    return _json(result.output)


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add_with_flags(self, db_file, repository_id):
        data = _add_task(
            db_file, repository_id, "Write docs", "--priority", "high", "--description", "README"
        )
        assert data["title"] == "Write docs"
        assert data["priority"] == "high"
        assert data["status"] == "pending"
        assert data["description"] == "README"
        assert data["repository_name"] == "demo"

    def test_add_prompts_when_title_missing(self, db_file, repository_id):
        text = AsyncMock(side_effect=["Prompted", ""])
        choice = AsyncMock(side_effect=["low", "in-progress"])
        with patch("gittaskr_cli.commands.tasks.ask_text", text), patch(
            "gittaskr_cli.commands.tasks.ask_choice", choice
        ):
            result = _invoke(db_file, "task", "add", repository_id, "-o", "json")
        assert result.exit_code == 0, result.output
        data = _json(result.output)
        assert (data["title"], data["priority"], data["status"]) == (
            "Prompted",
            "low",
            "in-progress",
        )
        assert data["description"] is None
        assert choice.await_args_list[0].kwargs["default"] == "medium"
        assert choice.await_args_list[1].kwargs["default"] == "pending"

    def test_add_to_missing_repository_does_not_prompt(self, db_file):
        text = AsyncMock()
        with patch("gittaskr_cli.commands.tasks.ask_text", text):
            result = _invoke(db_file, "task", "add", "99")
        assert result.exit_code == 5
        assert "Repository not found: 99" in result.output
        text.assert_not_awaited()

    def test_add_bad_priority(self, db_file, repository_id):
        result = _invoke(db_file, "task", "add", repository_id, "--title", "t", "-p", "urgent")
        assert result.exit_code == 2
        assert "Invalid priority" in result.output

    def test_add_empty_title(self, db_file, repository_id):
        result = _invoke(db_file, "task", "add", repository_id, "--title", "")
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# list / get
# ---------------------------------------------------------------------------


class TestListAndGet:
    def test_list_newest_first(self, db_file, repository_id):
        _add_task(db_file, repository_id, "first")
        _add_task(db_file, repository_id, "second")
        result = _invoke(db_file, "task", "list", repository_id, "-o", "json")
        assert result.exit_code == 0
        data = _json(result.output)
        assert data["repository_name"] == "demo"
        assert [t["title"] for t in data["tasks"]] == ["second", "first"]

    def test_list_status_filter(self, db_file, repository_id):
        _add_task(db_file, repository_id, "open")
        _add_task(db_file, repository_id, "done", "--status", "completed")
        result = _invoke(db_file, "task", "list", repository_id, "--status", "completed", "-o", "json")
        assert [t["title"] for t in _json(result.output)["tasks"]] == ["done"]

    def test_list_pretty(self, db_file, repository_id):
        _add_task(db_file, repository_id, "first")
        result = _invoke(db_file, "task", "list", repository_id, "-o", "pretty")
        assert "Tasks for repository: demo" in result.output
        assert "#1 first" in result.output

    def test_list_empty_pretty(self, db_file, repository_id):
        result = _invoke(db_file, "task", "list", repository_id, "-o", "pretty")
        assert result.exit_code == 0
        assert "No tasks found" in result.output

    def test_list_missing_repository(self, db_file):
        result = _invoke(db_file, "task", "list", "7")
        assert result.exit_code == 5

    def test_list_bad_status(self, db_file, repository_id):
        result = _invoke(db_file, "task", "list", repository_id, "--status", "done")
        assert result.exit_code == 2

    def test_get_missing(self, db_file):
        result = _invoke(db_file, "task", "get", "5")
        assert result.exit_code == 5
        assert "Task not found: 5" in result.output


# ---------------------------------------------------------------------------
# update / status
# ---------------------------------------------------------------------------


class TestUpdate:
    def test_status_command(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t")
        result = _invoke(db_file, "task", "status", "1", "completed")
        assert result.exit_code == 0, result.output
        assert "now completed" in result.output

    def test_status_invalid(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t")
        result = _invoke(db_file, "task", "status", "1", "done")
        assert result.exit_code == 2

    def test_status_missing_task(self, db_file):
        result = _invoke(db_file, "task", "status", "1", "completed")
        assert result.exit_code == 5

    def test_update_with_flags(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t", "--description", "d")
        result = _invoke(
            db_file, "task", "update", "1", "--title", "renamed", "--description", "", "-o", "json"
        )
        assert result.exit_code == 0, result.output
        data = _json(result.output)
        assert data["title"] == "renamed"
        assert data["description"] is None
        assert data["priority"] == "medium"

    def test_update_prompts_with_current_values(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t", "--priority", "low")
        text = AsyncMock(side_effect=["t2", "desc"])
        choice = AsyncMock(side_effect=["high", "completed"])
        with patch("gittaskr_cli.commands.tasks.ask_text", text), patch(
            "gittaskr_cli.commands.tasks.ask_choice", choice
        ):
            result = _invoke(db_file, "task", "update", "1", "-o", "json")
        assert result.exit_code == 0, result.output
        assert text.await_args_list[0].kwargs["default"] == "t"
        assert choice.await_args_list[0].kwargs["default"] == "low"
        data = _json(result.output)
        assert (data["title"], data["description"], data["priority"], data["status"]) == (
            "t2",
            "desc",
            "high",
            "completed",
        )


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    def test_delete_with_yes(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t")
        result = _invoke(db_file, "task", "delete", "1", "--yes")
        assert result.exit_code == 0
        assert _invoke(db_file, "task", "get", "1").exit_code == 5

    def test_delete_confirmed_interactively(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t")
        result = _invoke(db_file, "task", "delete", "1", input="y\n")
        assert result.exit_code == 0
        assert "Task deleted: 1" in result.output

    def test_delete_declined(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t")
        result = _invoke(db_file, "task", "delete", "1", input="n\n")
        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        assert "Error" not in result.output
        assert _invoke(db_file, "task", "get", "1").exit_code == 0

    def test_delete_missing(self, db_file):
        result = _invoke(db_file, "task", "delete", "1", "--yes")
        assert result.exit_code == 5

    def test_tasks_gone_after_repository_delete(self, db_file, repository_id):
        _add_task(db_file, repository_id, "t")
        assert _invoke(db_file, "repo", "delete", repository_id, "--yes").exit_code == 0
        assert _invoke(db_file, "task", "get", "1").exit_code == 5
