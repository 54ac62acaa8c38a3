"""Event file intake for hosts that export results as JSON."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from .run_events import EventLocation, TestEvent, TestStatus

# Playwright reports these for tests that did not finish normally.
_FAILED_ALIASES = frozenset({"timedout", "interrupted", "error"})


class EventIntakeError(Exception):
    """Raised when an ingestion event cannot be interpreted."""


def read_events(events_path: Path | str) -> list[TestEvent]:
    """Read events from a JSON Lines file or a file holding one JSON array."""
    path = Path(events_path)
    if not path.exists():
        raise EventIntakeError(f"Events file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise EventIntakeError(f"Events file is not valid UTF-8: {exc}") from exc
    if text.lstrip().startswith("["):
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise EventIntakeError(f"Events file is not valid JSON: {exc}") from exc
        return [parse_event(item, position=index) for index, item in enumerate(payload, start=1)]
    return list(_iter_json_lines(text))


def _iter_json_lines(text: str) -> Iterator[TestEvent]:
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as exc:
            raise EventIntakeError(f"Line {line_number}: invalid JSON: {exc.msg}") from exc
        yield parse_event(payload, position=line_number)


def parse_event(payload: Any, *, position: int | None = None) -> TestEvent:
    """Convert one decoded JSON event into a ``TestEvent``."""
    prefix = f"Event {position}: " if position is not None else ""
    if not isinstance(payload, Mapping):
        raise EventIntakeError(f"{prefix}event must be a JSON object.")

    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        raise EventIntakeError(f"{prefix}title must be a non-empty string.")

    try:
        status = parse_status(payload.get("status"))
        duration_ms = _parse_duration(payload.get("durationMs", payload.get("duration", 0)))
        location = _parse_location(payload.get("location"))
        tags = _parse_string_list(payload.get("tags"), "tags")
        errors = _parse_errors(payload.get("errors"))
    except EventIntakeError as exc:
        raise EventIntakeError(f"{prefix}{exc}") from exc

    suite = payload.get("parentSuiteName")
    if suite is not None and not isinstance(suite, str):
        raise EventIntakeError(f"{prefix}parentSuiteName must be a string.")

    return TestEvent(
        title=title,
        status=status,
        duration_ms=duration_ms,
        parent_suite_name=suite or None,
        location=location,
        tags=tags,
        errors=errors,
    )


def parse_status(value: Any) -> TestStatus:
    """Normalize a host status string."""
    if not isinstance(value, str):
        raise EventIntakeError("status must be a string.")
    lowered = value.strip().lower()
    if lowered in _FAILED_ALIASES:
        return TestStatus.FAILED
    try:
        return TestStatus(lowered)
    except ValueError as exc:
        raise EventIntakeError(f"unsupported status {value!r}.") from exc


def _parse_duration(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise EventIntakeError("durationMs must be a number.")
    if value < 0:
        raise EventIntakeError("durationMs must not be negative.")
    return value


def _parse_location(value: Any) -> EventLocation | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise EventIntakeError("location must be an object.")
    file_name = value.get("file")
    line = value.get("line")
    if not isinstance(file_name, str) or not file_name:
        return None
    if isinstance(line, bool) or not isinstance(line, int):
        raise EventIntakeError("location.line must be an integer.")
    return EventLocation(file=file_name, line=line)


def _parse_string_list(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise EventIntakeError(f"{field_name} must be a list.")
    items = []
    for item in value:
        if not isinstance(item, str):
            raise EventIntakeError(f"{field_name} entries must be strings.")
        items.append(item)
    return tuple(items)


def _parse_errors(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise EventIntakeError("errors must be a list.")
    messages = []
    for item in value:
        if isinstance(item, str):
            messages.append(item)
        elif isinstance(item, Mapping):
            message = item.get("message")
            messages.append(message if isinstance(message, str) else "")
        else:
            raise EventIntakeError("errors entries must be strings or objects.")
    return tuple(messages)
