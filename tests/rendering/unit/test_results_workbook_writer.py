"""Results workbook writer tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from suite_digest.report_model import build_report_model
from suite_digest.rendering import write_results_workbook
from suite_digest.rendering.results_workbook_writer import (
    BASE_COLUMNS,
    RESULTS_SHEET_NAME,
    SUMMARY_SHEET_NAME,
    TRAILING_COLUMNS,
)
from suite_digest.result_aggregation import SuiteGroup, TestRecord, build_test_record
from suite_digest.result_ingestion import TestEvent, TestStatus

GENERATED_AT = datetime(2024, 5, 17, 9, 30, 0)


def _record(**overrides: Any) -> TestRecord:
    values: dict[str, Any] = {
        "title": "test",
        "status": TestStatus.PASSED,
        "duration_ms": 100,
        "parent_suite_name": "Checkout",
        "tags": ("@local:fr", "@realm:eu"),
    }
    values.update(overrides)
    return build_test_record(TestEvent(**values))


def test_workbook_has_summary_and_results_sheets(tmp_path: Path) -> None:
    groups = (
        SuiteGroup(
            name="Checkout",
            records=(
                _record(title="card", tags=("@local:fr", "@realm:eu", "@team:pay")),
                _record(
                    title="wallet",
                    status=TestStatus.FAILED,
                    errors=("Expected: 1\nReceived: 2",),
                ),
            ),
        ),
    )
    model = build_report_model(groups)

    path = write_results_workbook(
        tmp_path / "out" / "results.xlsx", groups, model, generated_at=GENERATED_AT
    )

    workbook = load_workbook(path)
    assert workbook.sheetnames == [SUMMARY_SHEET_NAME, RESULTS_SHEET_NAME]

    summary = {
        row[0]: row[1] for row in workbook[SUMMARY_SHEET_NAME].iter_rows(values_only=True)
    }
    assert summary["generated_at"] == "2024-05-17 09:30:00"
    assert summary["total"] == 2
    assert summary["failed"] == 1

    rows = list(workbook[RESULTS_SHEET_NAME].iter_rows(values_only=True))
    assert rows[0] == BASE_COLUMNS + ("team",) + TRAILING_COLUMNS
    assert rows[1][:3] == ("Checkout", "card", "passed")
    assert rows[1][5] == "pay"
    assert rows[2][5] == "N/A"
    assert rows[2][-3:] == ("Expected: 1\nReceived: 2", "1", "2")


def test_control_characters_are_dropped_from_cells(tmp_path: Path) -> None:
    groups = (
        SuiteGroup(
            name="Check\x00out",
            records=(
                _record(
                    title="rings\x07 bell",
                    status=TestStatus.FAILED,
                    parent_suite_name="Check\x00out",
                    tags=("@local:f\x01r", "@realm:eu"),
                    errors=("Expected: 5\x07 bell\nReceived: 3\x1b[?25l",),
                ),
            ),
        ),
    )
    model = build_report_model(groups)

    path = write_results_workbook(
        tmp_path / "results.xlsx", groups, model, generated_at=GENERATED_AT
    )

    workbook = load_workbook(path)
    rows = list(workbook[RESULTS_SHEET_NAME].iter_rows(values_only=True))
    assert rows[1][:3] == ("Checkout", "rings bell", "failed")
    assert rows[1][-3:] == ("Expected: 5 bell\nReceived: 3[?25l", "5 bell", "3[?25l")
    summary = {
        row[0]: row[1] for row in workbook[SUMMARY_SHEET_NAME].iter_rows(values_only=True)
    }
    assert summary["locales"] == "fr"
