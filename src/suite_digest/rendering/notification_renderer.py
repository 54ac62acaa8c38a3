"""Email body rendering: a table per suite plus a plain-text twin."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from suite_digest.report_model.summary_models import ReportModel
from suite_digest.result_aggregation.result_models import SuiteGroup, TestRecord

from .formatting import format_duration_ms, pluralize
from .template_environment import template_environment

EMAIL_TEMPLATE = "email_body.html.j2"


@dataclass(frozen=True)
class NotificationBody:
    """Rich and plain renderings of the same summary."""

    html: str
    text: str


def render_notification_body(
    groups: Sequence[SuiteGroup],
    model: ReportModel,
    *,
    generated_at: datetime,
    title: str,
    failed_only: bool = True,
) -> NotificationBody:
    """Render one row per test, with each suite's custom tag keys as extra columns."""
    noun = "failed test" if failed_only else "test"
    heading = f"{title} - Failed Tests" if failed_only else title
    duration_ms = sum(record.duration_ms for group in groups for record in group.records)
    html = template_environment().get_template(EMAIL_TEMPLATE).render(
        title=title,
        heading=heading,
        noun=noun,
        groups=tuple(groups),
        model=model,
        duration_ms=duration_ms,
        generated_at=generated_at,
    )
    text = render_text_summary(groups, model, noun=noun)
    return NotificationBody(html=html, text=text)


def render_text_summary(
    groups: Sequence[SuiteGroup], model: ReportModel, *, noun: str = "test"
) -> str:
    """Plain-text summary for clients that cannot show HTML."""
    blocks = []
    for group in groups:
        columns = model.custom_tag_keys(group.name)
        lines = [f"{group.name} ({pluralize(len(group.records), noun)})"]
        for record in group.records:
            lines.append(_text_line(record, columns))
            if record.error_message:
                lines.append(f"    Error: {record.error_message}")
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


def _text_line(record: TestRecord, columns: Sequence[str]) -> str:
    fields = [
        f"File: {record.location}",
        f"Time: {format_duration_ms(record.duration_ms)}",
        f"Status: {record.status.value}",
        f"Local: {record.local}",
        f"Realm: {record.realm}",
    ]
    fields.extend(f"{key}: {record.custom_tag_display(key)}" for key in columns)
    fields.append(f"Tags: {', '.join(record.tags)}")
    return f"  - {record.title} ({', '.join(fields)})"
