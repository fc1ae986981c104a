"""Tests for the command line entry points."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from flask import Flask

from tinyhabit.cli import main


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    # keep INFO log lines off the captured console output
    monkeypatch.setenv("TINYHABIT_DEV_MODE", "false")
    return CliRunner()


def test_status_offline_initialises_local_store(runner: CliRunner, isolated_env: Path):
    result = runner.invoke(main, ["--offline", "status"])

    assert result.exit_code == 0, result.output
    assert "Drink Water" in result.output
    assert "Streak: 0 days" in result.output
    assert "Sync: local" in result.output
    assert (isolated_env / "habit_tracker.db").exists()


def test_done_then_history(runner: CliRunner):
    done = runner.invoke(main, ["--offline", "done"])
    assert done.exit_code == 0, done.output
    assert "Streak: 1 day\n" in done.output
    assert "Done today: yes" in done.output

    again = runner.invoke(main, ["--offline", "done"])
    assert "Already completed today." in again.output
    assert "Streak: 1 day\n" in again.output

    history = runner.invoke(main, ["--offline", "history", "--json"])
    entries = json.loads(history.output)
    assert len(entries) == 7
    assert entries[-1]["completed"] is True


def test_reset_requires_confirmation(runner: CliRunner):
    runner.invoke(main, ["--offline", "done"])

    aborted = runner.invoke(main, ["--offline", "reset"], input="n\n")
    assert aborted.exit_code != 0
    assert "Done today: yes" in runner.invoke(main, ["--offline", "status"]).output

    confirmed = runner.invoke(main, ["--offline", "reset", "--yes"])
    assert confirmed.exit_code == 0, confirmed.output
    assert "Streak: 0 days" in confirmed.output


def test_unreachable_backend_falls_back(runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TINYHABIT_API_URL", "http://127.0.0.1:9/api")

    result = runner.invoke(main, ["status"])

    assert result.exit_code == 0, result.output
    assert "Sync: local" in result.output


def test_serve_runs_app_on_configured_port(runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
    calls = {}

    def fake_run(self, host=None, port=None, **kwargs):
        calls.update(host=host, port=port)

    monkeypatch.setattr(Flask, "run", fake_run)
    monkeypatch.setenv("PORT", "5055")

    result = runner.invoke(main, ["serve"])

    assert result.exit_code == 0, result.output
    assert calls == {"host": "127.0.0.1", "port": 5055}


def test_flask_habit_commands(app):
    cli_runner = app.test_cli_runner()

    app.extensions["tinyhabit"].complete_habit()
    shown = cli_runner.invoke(args=["habit-show"])
    assert json.loads(shown.output)["streak"] == 1

    reset = cli_runner.invoke(args=["habit-reset", "--yes"])
    assert "Habit data reset successfully" in reset.output
    assert app.extensions["tinyhabit"].get_habit()["records"] == {}


def test_status_offline_survives_unreadable_local_storage(
    runner: CliRunner, isolated_env: Path, monkeypatch: pytest.MonkeyPatch
):
    # a directory cannot be opened as a SQLite database
    monkeypatch.setenv("TINYHABIT_LOCAL_DB", str(isolated_env))
    (isolated_env / "local_storage.json").write_bytes(b"\xfa\xfb\x80 not utf-8")

    result = runner.invoke(main, ["--offline", "status"])

    assert result.exit_code == 0, result.output
    assert "Drink Water" in result.output
