"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from suite_digest.cli import main


def test_missing_required_option_returns_clean_click_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = main(["report", "--events", "/tmp/events.jsonl"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["report", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_report_run_errors_exit_with_status_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(
        [
            "report",
            "--config",
            str(tmp_path / "missing.yaml"),
            "--events",
            str(tmp_path / "events.jsonl"),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_undecodable_events_file_exits_with_status_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = tmp_path / "suite-digest.yaml"
    config_path.write_text(
        "smtp:\n  host: smtp.example.com\n  port: 25\n"
        "mail:\n  from_address: a@example.com\n  to_address: b@example.com\n",
        encoding="utf-8",
    )
    events_path = tmp_path / "events.jsonl"
    events_path.write_bytes(b'{"title": "\xff", "status": "passed"}\n')

    exit_code = main(
        [
            "report",
            "--config",
            str(config_path),
            "--events",
            str(events_path),
            "--skip-delivery",
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "not valid UTF-8" in captured.err
    assert "Traceback" not in captured.err
