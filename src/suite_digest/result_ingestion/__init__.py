"""Result ingestion exports."""

from .event_intake import EventIntakeError, parse_event, parse_status, read_events
from .run_events import EventLocation, TestEvent, TestStatus
from .tag_grammar import (
    NO_TAGS_PLACEHOLDER,
    NOT_AVAILABLE,
    PAYMENT_METHOD_KEY,
    CustomTagValue,
    MultiTagValue,
    ScalarTagValue,
    TagMetadata,
    parse_tags,
    resolve_tags,
)

__all__ = [
    "EventIntakeError",
    "EventLocation",
    "TestEvent",
    "TestStatus",
    "CustomTagValue",
    "MultiTagValue",
    "ScalarTagValue",
    "TagMetadata",
    "NO_TAGS_PLACEHOLDER",
    "NOT_AVAILABLE",
    "PAYMENT_METHOD_KEY",
    "parse_event",
    "parse_status",
    "parse_tags",
    "read_events",
    "resolve_tags",
]
