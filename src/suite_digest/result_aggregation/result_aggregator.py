"""Run-scoped accumulator grouping test records by suite."""

from __future__ import annotations

import os
import threading

from suite_digest.result_ingestion.run_events import EventLocation, TestEvent, TestStatus
from suite_digest.result_ingestion.tag_grammar import parse_tags, resolve_tags

from .error_extraction import FailureDetails, extract_failure_details
from .result_models import UNGROUPED_SUITE_NAME, UNKNOWN_LOCATION, SuiteGroup, TestRecord


class ResultAggregator:
    """Accumulate one run's test events into suite groups.

    ``ingest`` is the only mutator. Suites keep the order in which they were
    first seen and each suite's records keep ingestion order. One instance
    serves exactly one run; there is no reset.
    """

    def __init__(self) -> None:
        self._groups: dict[str, list[TestRecord]] = {}
        self._lock = threading.Lock()

    def ingest(self, event: TestEvent) -> None:
        """Convert one completion event into a record and append it to its suite."""
        record = build_test_record(event)
        with self._lock:
            self._groups.setdefault(record.suite_name, []).append(record)

    def snapshot(self) -> tuple[SuiteGroup, ...]:
        """Return the suite-grouped view of everything ingested so far."""
        with self._lock:
            return tuple(
                SuiteGroup(name=name, records=tuple(records))
                for name, records in self._groups.items()
            )

    @property
    def record_count(self) -> int:
        with self._lock:
            return sum(len(records) for records in self._groups.values())


def build_test_record(event: TestEvent) -> TestRecord:
    """Create the immutable record for one event, including tag and failure parsing."""
    tags = resolve_tags(event.tags)
    metadata = parse_tags(tags, test_title=event.title)
    failure = _resolve_failure(event)
    return TestRecord(
        title=event.title,
        suite_name=event.parent_suite_name or UNGROUPED_SUITE_NAME,
        location=_format_location(event.location),
        duration_ms=event.duration_ms,
        status=event.status,
        tags=tags,
        local=metadata.local,
        realm=metadata.realm,
        custom_tags=metadata.custom_tags,
        error_message=failure.message if failure else None,
        expected=failure.expected if failure else (),
        actual=failure.actual if failure else (),
    )


def _resolve_failure(event: TestEvent) -> FailureDetails | None:
    if event.status != TestStatus.FAILED:
        return None
    details: FailureDetails | None = None
    # Each error overwrites the previous one; the last recorded error is kept.
    for raw_message in event.errors:
        details = extract_failure_details(raw_message)
    return details


def _format_location(location: EventLocation | None) -> str:
    if location is None:
        return UNKNOWN_LOCATION
    return f"{os.path.basename(location.file)}:{location.line}"
