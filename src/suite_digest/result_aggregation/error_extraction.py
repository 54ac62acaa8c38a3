"""Failure message cleanup and expected/actual extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass

NO_ERROR_MESSAGE = "No error message"

_ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-9;]*[A-Za-z]")
_EXPECTED_PATTERN = re.compile(r"Expected(?: value)?:\s*([^\n]+)", re.IGNORECASE)
_ACTUAL_PATTERN = re.compile(r"(?:Received|Actual):\s*([^\n]+)", re.IGNORECASE)


@dataclass(frozen=True)
class FailureDetails:
    """Cleaned failure text with the values it compares."""

    message: str
    expected: tuple[str, ...]
    actual: tuple[str, ...]


def strip_ansi_codes(text: str) -> str:
    """Remove terminal color escape sequences."""
    return _ANSI_ESCAPE_PATTERN.sub("", text)


def extract_failure_details(raw_message: str | None) -> FailureDetails:
    """Strip escapes, then collect every expected and actual value in message order."""
    cleaned = strip_ansi_codes(raw_message or NO_ERROR_MESSAGE)
    return FailureDetails(
        message=cleaned,
        expected=_collect(_EXPECTED_PATTERN, cleaned),
        actual=_collect(_ACTUAL_PATTERN, cleaned),
    )


def _collect(pattern: re.Pattern[str], text: str) -> tuple[str, ...]:
    return tuple(match.group(1).strip() for match in pattern.finditer(text))
