"""Browsable HTML report artifacts."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from suite_digest.report_model.summary_builder import select_failed_groups
from suite_digest.report_model.summary_models import ReportModel
from suite_digest.result_aggregation.result_models import SuiteGroup
from suite_digest.result_ingestion.tag_grammar import PAYMENT_METHOD_KEY

from .template_environment import template_environment

REPORT_TEMPLATE = "report.html.j2"


def render_full_report(
    groups: Sequence[SuiteGroup],
    model: ReportModel,
    *,
    generated_at: datetime,
    title: str,
    failed_only: bool = False,
) -> str:
    """Render the collapsible per-suite report.

    With ``failed_only`` the report lists failed records only and replaces the
    run statistics with the failed-test count and their total duration.
    """
    shown_groups = select_failed_groups(groups) if failed_only else tuple(groups)
    failed_duration_ms = sum(
        record.duration_ms for group in shown_groups for record in group.records
    )
    template = template_environment().get_template(REPORT_TEMPLATE)
    return template.render(
        title=title,
        groups=shown_groups,
        model=model,
        generated_at=generated_at,
        failed_only=failed_only,
        failed_duration_ms=failed_duration_ms,
        payment_method_key=PAYMENT_METHOD_KEY,
    )


def write_report_artifact(output_path: Path | str, content: str) -> Path:
    """Write a rendered artifact, replacing any previous file."""
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(content, encoding="utf-8")
    return destination
