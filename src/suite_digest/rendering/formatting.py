"""Formatting helpers shared by the renderers."""

from __future__ import annotations

from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_duration_ms(value: float) -> str:
    """Render a millisecond duration without a trailing ``.0``."""
    if float(value).is_integer():
        return f"{int(value)} ms"
    return f"{value:.1f} ms"


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def pluralize(count: int, noun: str) -> str:
    """``1 test`` / ``2 tests``."""
    return f"{count} {noun}{'s' if count > 1 else ''}"


def single_line(text: str | None) -> str:
    """Collapse line breaks so multi-line text fits one line."""
    if not text:
        return ""
    return " ".join(text.splitlines()).strip()
