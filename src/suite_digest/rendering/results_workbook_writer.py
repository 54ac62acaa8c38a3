"""Tabular results workbook for spreadsheet users."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from suite_digest.report_model.summary_models import ReportModel
from suite_digest.result_aggregation.result_models import SuiteGroup, TestRecord
from suite_digest.result_ingestion.run_events import TestStatus

from .formatting import format_timestamp

SUMMARY_SHEET_NAME = "Summary"
RESULTS_SHEET_NAME = "Results"

BASE_COLUMNS: tuple[str, ...] = ("Suite", "Test", "Status", "Location", "Duration (ms)")
TRAILING_COLUMNS: tuple[str, ...] = ("Local", "Realm", "Tags", "Error", "Expected", "Actual")

_STATUS_FILLS = {
    TestStatus.PASSED: PatternFill(fill_type="solid", start_color="C6EFCE", end_color="C6EFCE"),
    TestStatus.FAILED: PatternFill(fill_type="solid", start_color="FFC7CE", end_color="FFC7CE"),
    TestStatus.SKIPPED: PatternFill(fill_type="solid", start_color="FFEB9C", end_color="FFEB9C"),
}


def write_results_workbook(
    output_path: Path | str,
    groups: Sequence[SuiteGroup],
    model: ReportModel,
    *,
    generated_at: datetime,
) -> Path:
    """Write a Summary sheet and a Results sheet with one row per record."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = RESULTS_SHEET_NAME

    tag_columns = model.all_custom_tag_keys
    columns = BASE_COLUMNS + tag_columns + TRAILING_COLUMNS
    _write_header(sheet, columns)
    row_number = 2
    for group in groups:
        for record in group.records:
            _write_record_row(sheet, row_number, record, tag_columns)
            row_number += 1
    sheet.freeze_panes = "A2"

    _write_summary_sheet(workbook, model, generated_at)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output


def _write_header(sheet: Worksheet, columns: Sequence[str]) -> None:
    for column_index, name in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=column_index, value=_cell_value(name))
        cell.font = Font(bold=True)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _write_record_row(
    sheet: Worksheet, row_number: int, record: TestRecord, tag_columns: Sequence[str]
) -> None:
    values: list[object] = [
        record.suite_name,
        record.title,
        record.status.value,
        record.location,
        record.duration_ms,
    ]
    values.extend(record.custom_tag_display(key) for key in tag_columns)
    values.extend(
        [
            record.local,
            record.realm,
            ", ".join(record.tags),
            record.error_message or "",
            "\n".join(record.expected),
            "\n".join(record.actual),
        ]
    )
    for column_index, value in enumerate(values, start=1):
        sheet.cell(row=row_number, column=column_index, value=_cell_value(value))
    sheet.cell(row=row_number, column=3).fill = _STATUS_FILLS[record.status]


def _write_summary_sheet(workbook: Workbook, model: ReportModel, generated_at: datetime) -> None:
    sheet = workbook.create_sheet(SUMMARY_SHEET_NAME, 0)
    entries = (
        ("generated_at", format_timestamp(generated_at)),
        ("total", model.total),
        ("passed", model.passed),
        ("failed", model.failed),
        ("skipped", model.skipped),
        ("suites", model.suite_count),
        ("total_duration_ms", model.total_duration_ms),
        ("locales", ", ".join(model.locales)),
        ("realms", ", ".join(model.realms)),
        ("payment_methods", ", ".join(model.payment_methods)),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=_cell_value(value))
    sheet.column_dimensions["A"].width = 20
    sheet.column_dimensions["B"].width = 40


def _cell_value(value: object) -> object:
    """Drop control characters openpyxl refuses to store."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value
