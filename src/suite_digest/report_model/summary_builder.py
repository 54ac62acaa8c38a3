"""Report model construction from suite groups."""

from __future__ import annotations

from collections.abc import Sequence

from suite_digest.result_aggregation.result_models import SuiteGroup
from suite_digest.result_ingestion.run_events import TestStatus

from .summary_models import ReportModel


def build_report_model(groups: Sequence[SuiteGroup]) -> ReportModel:
    """Derive counts, distinct values and per-suite custom tag columns."""
    counts = {status: 0 for status in TestStatus}
    locales: dict[str, None] = {}
    realms: dict[str, None] = {}
    payment_methods: set[str] = set()
    keys_by_suite: dict[str, tuple[str, ...]] = {}
    total_duration: float = 0

    for group in groups:
        suite_keys: dict[str, None] = dict.fromkeys(keys_by_suite.get(group.name, ()))
        for record in group.records:
            counts[record.status] += 1
            locales.setdefault(record.local, None)
            realms.setdefault(record.realm, None)
            payment_methods.update(record.payment_methods)
            suite_keys.update(dict.fromkeys(record.custom_tags))
            total_duration += record.duration_ms
        keys_by_suite[group.name] = tuple(suite_keys)

    return ReportModel(
        total=sum(counts.values()),
        passed=counts[TestStatus.PASSED],
        failed=counts[TestStatus.FAILED],
        skipped=counts[TestStatus.SKIPPED],
        locales=tuple(locales),
        realms=tuple(realms),
        payment_methods=tuple(sorted(payment_methods)),
        custom_tag_keys_by_suite=keys_by_suite,
        total_duration_ms=total_duration,
        suite_count=len(keys_by_suite),
    )


def select_failed_groups(groups: Sequence[SuiteGroup]) -> tuple[SuiteGroup, ...]:
    """Restrict groups to failed records, dropping suites left empty."""
    selected = []
    for group in groups:
        failed = tuple(record for record in group.records if record.failed)
        if failed:
            selected.append(SuiteGroup(name=group.name, records=failed))
    return tuple(selected)
