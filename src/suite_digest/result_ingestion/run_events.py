"""Ingestion event entities delivered by the test host."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TestStatus(str, Enum):
    """Final outcome of one test."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EventLocation:
    """Source position of a test definition."""

    file: str
    line: int


@dataclass(frozen=True)
class TestEvent:  # pylint: disable=too-many-instance-attributes
    """One completed test as reported by the execution engine."""

    __test__ = False

    title: str
    status: TestStatus
    duration_ms: float
    parent_suite_name: str | None = None
    location: EventLocation | None = None
    tags: tuple[str, ...] = ()
    errors: tuple[str, ...] = field(default=())
