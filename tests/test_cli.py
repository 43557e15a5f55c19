"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest

from followup_tracker.cli import build_parser, execute
from followup_tracker.core.config import AppSettings, MailboxSettings, StorageSettings


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(storage=StorageSettings(db_path=tmp_path / "cli.db"))


def _run(settings: AppSettings, *argv: str) -> int:
    return execute(build_parser().parse_args(list(argv)), settings)


def test_info_reports_configuration(
    settings: AppSettings, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(settings) == 0

    output = capsys.readouterr().out
    assert "Mailbox source: sample" in output
    assert "cli.db" in output


def test_list_when_nothing_tracked(
    settings: AppSettings, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(settings, "list") == 0

    assert "All caught up! No follow-ups needed." in capsys.readouterr().out


def test_refresh_then_list_persists_between_runs(
    settings: AppSettings, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(settings, "refresh") == 0
    assert "Tracked 2 message(s)." in capsys.readouterr().out

    assert _run(settings, "list", "--filter", "high") == 0
    output = capsys.readouterr().out
    assert "sample-meeting-notes" in output
    assert "sample-status-update" in output
    assert "Review the content and provide feedback" in output


def test_mark_records_action_and_updates_weights(
    settings: AppSettings, capsys: pytest.CaptureFixture[str]
) -> None:
    _run(settings, "refresh")
    capsys.readouterr()

    code = _run(settings, "mark", "--id", "sample-status-update", "--action", "completed")

    assert code == 0
    assert "Recorded completed for sample-status-update." in capsys.readouterr().out
    _run(settings, "weights")
    assert "+5.0  john doe" in capsys.readouterr().out


def test_mark_unknown_id_fails(
    settings: AppSettings, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(settings, "mark", "--id", "nope", "--action", "snooze") == 1

    assert "No tracked message with id nope." in capsys.readouterr().out


def test_mark_requires_id_and_action(settings: AppSettings) -> None:
    assert _run(settings, "mark", "--id", "only-id") == 2


def test_weights_empty(settings: AppSettings, capsys: pytest.CaptureFixture[str]) -> None:
    _run(settings, "weights")

    assert "No learned sender weights yet." in capsys.readouterr().out


def test_clear_with_yes_skips_prompt(
    settings: AppSettings, capsys: pytest.CaptureFixture[str]
) -> None:
    _run(settings, "refresh")

    assert _run(settings, "clear", "--yes") == 0
    assert "Data cleared. Refresh to start fresh." in capsys.readouterr().out
    _run(settings, "list")
    assert "All caught up!" in capsys.readouterr().out


def test_clear_declined_at_prompt(
    settings: AppSettings,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _run(settings, "refresh")
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    _run(settings, "clear")

    assert "Are you sure?" in capsys.readouterr().out
    _run(settings, "list")
    assert "sample-meeting-notes" in capsys.readouterr().out


def test_refresh_failure_returns_error_code(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    settings = AppSettings(
        storage=StorageSettings(db_path=tmp_path / "cli.db"),
        mailbox=MailboxSettings(source="file", path=tmp_path / "missing.json"),
    )

    assert _run(settings, "refresh") == 1
    assert "Unable to access inbox." in capsys.readouterr().out


def test_parser_rejects_unknown_action(settings: AppSettings) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["mark", "--id", "x", "--action", "archive"])


def test_list_does_not_touch_the_mailbox(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    settings = AppSettings(
        storage=StorageSettings(db_path=tmp_path / "cli.db"),
        mailbox=MailboxSettings(source="file", path=tmp_path / "missing.json"),
    )

    assert _run(settings, "list") == 0
    assert _run(settings, "weights") == 0
    assert "All caught up!" in capsys.readouterr().out
