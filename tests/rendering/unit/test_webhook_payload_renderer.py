"""Webhook MessageCard payload tests."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from suite_digest.report_model import build_report_model, select_failed_groups
from suite_digest.rendering import render_webhook_payload
from suite_digest.result_aggregation import SuiteGroup, TestRecord, build_test_record
from suite_digest.result_ingestion import EventLocation, TestEvent, TestStatus

GENERATED_AT = datetime(2024, 5, 17, 9, 30, 0)


def _record(**overrides: Any) -> TestRecord:
    values: dict[str, Any] = {
        "title": "test",
        "status": TestStatus.PASSED,
        "duration_ms": 100,
        "parent_suite_name": "Checkout",
        "location": EventLocation(file="tests/checkout.spec.ts", line=3),
        "tags": ("@local:fr", "@realm:eu"),
    }
    values.update(overrides)
    return build_test_record(TestEvent(**values))


def _groups() -> tuple[SuiteGroup, ...]:
    return (
        SuiteGroup(
            name="Checkout",
            records=(
                _record(title="passes"),
                _record(
                    title="multi\nline title",
                    status=TestStatus.FAILED,
                    tags=(
                        "@local:fr",
                        "@realm:eu",
                        "@payment_method:cb",
                        "@payment_method:visa",
                        "@team:pay",
                    ),
                    errors=("Request failed\nExpected: 200\nReceived: 500",),
                ),
            ),
        ),
    )


def _payload(*, failed_only: bool = True) -> dict[str, Any]:
    groups = _groups()
    model = build_report_model(groups)
    shown = select_failed_groups(groups) if failed_only else groups
    return render_webhook_payload(
        shown, model, generated_at=GENERATED_AT, title="Shop Report", failed_only=failed_only
    )


def test_payload_is_a_message_card_with_summary_facts() -> None:
    payload = _payload()

    assert payload["@type"] == "MessageCard"
    assert payload["@context"] == "http://schema.org/extensions"
    assert payload["themeColor"] == "d63031"
    assert payload["title"] == "Shop Report - Failed Tests"
    facts = {fact["name"]: fact["value"] for fact in payload["sections"][0]["facts"]}
    assert facts["Total Tests"] == "2"
    assert facts["Failed"] == "1"
    assert facts["Suites"] == "1"
    assert payload["sections"][0]["activitySubtitle"] == "Generated on 2024-05-17 09:30:00"
    json.dumps(payload)


def test_suite_section_lists_failed_records_on_single_lines() -> None:
    payload = _payload()

    section = payload["sections"][1]
    assert section["title"] == "**Checkout** (1 failed test)"
    (fact,) = section["facts"]
    assert fact["name"] == "multi line title"
    assert "\n" not in fact["value"]
    assert "**File:** checkout.spec.ts:3" in fact["value"]
    assert "**Payment Methods:** cb, visa" in fact["value"]
    assert "**team:** pay" in fact["value"]
    assert "**payment_method:**" not in fact["value"]
    assert "**Error:** Request failed Expected: 200 Received: 500" in fact["value"]
    assert "Expected: 200 | Actual: 500" in fact["value"]


def test_all_scope_lists_every_record() -> None:
    payload = _payload(failed_only=False)

    assert payload["title"] == "Shop Report"
    assert len(payload["sections"][1]["facts"]) == 2


def test_green_theme_when_nothing_failed() -> None:
    groups = (SuiteGroup(name="Search", records=(_record(),)),)

    payload = render_webhook_payload(
        groups,
        build_report_model(groups),
        generated_at=GENERATED_AT,
        title="Shop Report",
        failed_only=False,
    )

    assert payload["themeColor"] == "27ae60"


def test_payload_is_identical_when_rendered_twice() -> None:
    first = _payload()
    second = _payload()

    assert first == second
    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)
