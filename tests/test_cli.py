# tests/test_cli.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskflow.cli import main


@pytest.fixture()
def run(tmp_path: Path, capsys):
    """Run the CLI against a temporary data directory, return (exit code, stdout)."""
    def _run(*args: str):
        code = main(["--dir", str(tmp_path), "--log-level", "WARNING", *args])
        return code, capsys.readouterr().out
    return _run


def test_requires_login(run) -> None:
    code, out = run("list")
    assert code == 1
    assert "Not logged in" in out


def test_login_and_whoami(run) -> None:
    assert run("login", "Ada")[0] == 0
    code, out = run("whoami")
    assert code == 0
    assert out.strip() == "Ada"

    assert run("logout")[0] == 0
    assert run("whoami")[0] == 1


def test_add_edit_toggle_delete_flow(run) -> None:
    run("login", "Ada")
    code, out = run("add", "Write report", "-p", "high", "-c", "Work", "--due", "2020-01-01T00:00:00Z")
    assert code == 0

    code, out = run("list", "--json")
    records = json.loads(out)
    assert len(records) == 1
    task_id = records[0]["id"]
    assert records[0]["priority"] == "high"
    assert records[0]["dueDate"].startswith("2020-01-01")

    code, out = run("list", "--filter", "overdue", "--json")
    assert [r["id"] for r in json.loads(out)] == [task_id]

    assert run("edit", task_id, "--title", "Write final report", "--clear-due")[0] == 0
    code, out = run("list", "--json")
    assert json.loads(out)[0]["title"] == "Write final report"
    assert "dueDate" not in json.loads(out)[0]

    code, out = run("toggle", task_id)
    assert code == 0
    assert "completed" in out

    code, out = run("stats", "--json")
    stats = json.loads(out)
    assert stats["completed"] == 1
    assert stats["completion_rate"] == 100

    assert run("delete", task_id)[0] == 0
    assert run("delete", task_id)[0] == 1


def test_blank_title_is_rejected(run) -> None:
    run("login", "Ada")
    code, out = run("add", "   ")
    assert code == 1
    assert "title" in out


def test_unknown_id(run) -> None:
    run("login", "Ada")
    assert run("toggle", "nope")[0] == 1
    assert run("edit", "nope", "--title", "x")[0] == 1


def test_reset(run) -> None:
    run("login", "Ada")
    run("add", "a")
    assert run("reset")[0] == 0
    code, out = run("list")
    assert "No tasks found" in out


def test_unknown_log_level_flag_is_a_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--dir", str(tmp_path), "--log-level", "bogus", "whoami"])
    assert exc.value.code == 2


def test_log_level_flag_is_case_insensitive(run) -> None:
    run("login", "Ada")
    code, out = run("--log-level", "debug", "whoami")
    assert code == 0


def test_bad_log_level_in_environment(tmp_path: Path, capsys, monkeypatch) -> None:
    monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "bogus")

    code = main(["--dir", str(tmp_path), "whoami"])

    assert code == 1
    assert "❌" in capsys.readouterr().out
