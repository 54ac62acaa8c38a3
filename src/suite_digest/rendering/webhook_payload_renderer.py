"""Chat webhook payload rendering (MessageCard format)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from suite_digest.report_model.summary_models import ReportModel
from suite_digest.result_aggregation.result_models import SuiteGroup, TestRecord
from suite_digest.result_ingestion.tag_grammar import PAYMENT_METHOD_KEY

from .formatting import format_duration_ms, format_timestamp, pluralize, single_line

FAILED_THEME_COLOR = "d63031"
PASSED_THEME_COLOR = "27ae60"


def render_webhook_payload(
    groups: Sequence[SuiteGroup],
    model: ReportModel,
    *,
    generated_at: datetime,
    title: str,
    failed_only: bool = True,
) -> dict[str, Any]:
    """Build the MessageCard: a summary section then one section per suite."""
    noun = "failed test" if failed_only else "test"
    listed = sum(len(group.records) for group in groups)
    duration_ms = sum(record.duration_ms for group in groups for record in group.records)
    card_title = f"{title} - Failed Tests" if failed_only else title
    summary_facts = [
        {"name": "Total Tests", "value": str(model.total)},
        {"name": "Passed", "value": str(model.passed)},
        {"name": "Failed", "value": str(model.failed)},
        {"name": "Skipped", "value": str(model.skipped)},
        {"name": "Suites", "value": str(len(groups))},
        {"name": "Total Execution Time", "value": format_duration_ms(duration_ms)},
    ]
    summary_section = {
        "activityTitle": card_title,
        "activitySubtitle": f"Generated on {format_timestamp(generated_at)}",
        "text": "<br>".join(
            [
                f"**Listed {noun}s:** {listed}",
                f"**Suites:** {len(groups)}",
                f"**Total Execution Time:** {format_duration_ms(duration_ms)}",
                "",
                "Check your email for the full HTML report.",
            ]
        ),
        "facts": summary_facts,
    }
    suite_sections = [
        {
            "title": f"**{group.name}** ({pluralize(len(group.records), noun)})",
            "facts": [
                {
                    "name": single_line(record.title),
                    "value": _fact_value(record, model.custom_tag_keys(group.name)),
                }
                for record in group.records
            ],
        }
        for group in groups
    ]
    return {
        "@type": "MessageCard",
        "@context": "http://schema.org/extensions",
        "themeColor": FAILED_THEME_COLOR if model.failed else PASSED_THEME_COLOR,
        "summary": card_title,
        "title": card_title,
        "sections": [summary_section, *suite_sections],
    }


def _fact_value(record: TestRecord, columns: Sequence[str]) -> str:
    parts = [
        f"**File:** {record.location}",
        f"**Time:** {format_duration_ms(record.duration_ms)}",
        f"**Status:** {record.status.value}",
        f"**Local:** {record.local}",
        f"**Realm:** {record.realm}",
    ]
    parts.extend(
        f"**{key}:** {record.custom_tag_display(key)}"
        for key in columns
        if key != PAYMENT_METHOD_KEY
    )
    if record.payment_methods:
        parts.append(f"**Payment Methods:** {', '.join(record.payment_methods)}")
    parts.append(f"**Tags:** {', '.join(record.tags)}")
    if record.error_message:
        parts.append(f"**Error:** {single_line(record.error_message)}")
    if record.expected:
        parts.append(f"Expected: {' | '.join(record.expected)}")
    if record.actual:
        parts.append(f"Actual: {' | '.join(record.actual)}")
    return " | ".join(single_line(part) for part in parts)
