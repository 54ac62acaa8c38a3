"""Aggregated result entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from suite_digest.result_ingestion.run_events import TestStatus
from suite_digest.result_ingestion.tag_grammar import (
    NOT_AVAILABLE,
    PAYMENT_METHOD_KEY,
    CustomTagValue,
)

UNKNOWN_LOCATION = "unknown"
UNGROUPED_SUITE_NAME = "Tests without describe"


@dataclass(frozen=True)
class TestRecord:  # pylint: disable=too-many-instance-attributes
    """Immutable result of one ingested test."""

    __test__ = False

    title: str
    suite_name: str
    location: str
    duration_ms: float
    status: TestStatus
    tags: tuple[str, ...]
    local: str
    realm: str
    custom_tags: Mapping[str, CustomTagValue]
    error_message: str | None = None
    expected: tuple[str, ...] = ()
    actual: tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        return self.status == TestStatus.FAILED

    @property
    def payment_methods(self) -> tuple[str, ...]:
        value = self.custom_tags.get(PAYMENT_METHOD_KEY)
        return value.as_list() if value is not None else ()

    def custom_tag_display(self, key: str) -> str:
        """Rendered value of one custom tag, ``N/A`` when this record lacks it."""
        value = self.custom_tags.get(key)
        return value.display() if value is not None else NOT_AVAILABLE


@dataclass(frozen=True)
class SuiteGroup:
    """Records of one suite in ingestion order."""

    name: str
    records: tuple[TestRecord, ...]

    def __len__(self) -> int:
        return len(self.records)
