"""Failure message extraction tests."""

from __future__ import annotations

from suite_digest.result_aggregation.error_extraction import (
    NO_ERROR_MESSAGE,
    extract_failure_details,
    strip_ansi_codes,
)


def test_strips_ansi_codes_before_matching() -> None:
    raw = (
        "expect(received).toBe(expected)\n"
        "\x1b[32mExpected: 5\x1b[39m\n"
        "\x1b[31mReceived: 3\x1b[39m"
    )

    details = extract_failure_details(raw)

    assert "\x1b" not in details.message
    assert details.expected == ("5",)
    assert details.actual == ("3",)


def test_collects_every_occurrence_in_message_order() -> None:
    raw = "Expected value: 1\nActual: 2\nexpected:  a  \nreceived: b"

    details = extract_failure_details(raw)

    assert details.expected == ("1", "a")
    assert details.actual == ("2", "b")


def test_message_without_comparison_has_empty_lists() -> None:
    details = extract_failure_details("Timeout 30000ms exceeded.")

    assert details.message == "Timeout 30000ms exceeded."
    assert details.expected == ()
    assert details.actual == ()


def test_missing_message_uses_placeholder() -> None:
    assert extract_failure_details(None).message == NO_ERROR_MESSAGE


def test_strip_ansi_codes_leaves_plain_text_untouched() -> None:
    assert strip_ansi_codes("plain [text]") == "plain [text]"
    assert strip_ansi_codes("\x1b[1;31mbold red\x1b[0m") == "bold red"
