"""pytest plugin adapter tests."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any

from suite_digest.configuration.runtime_settings import (
    Configuration,
    DeliverySettings,
    MailSettings,
    NotificationScope,
    ReportSettings,
    SMTPSettings,
    WebhookSettings,
)
from suite_digest.delivery import DeliveryCoordinator, DeliveryResult, ReportNotification
from suite_digest.pytest_plugin import (
    USER_PROPERTY_KEY,
    SuiteDigestCollector,
    describe_item,
    event_from_report,
)
from suite_digest.result_ingestion import EventLocation, TestStatus


def _report(**overrides: Any) -> SimpleNamespace:
    values: dict[str, Any] = {
        "when": "call",
        "passed": True,
        "failed": False,
        "skipped": False,
        "nodeid": "tests/test_checkout.py::TestCheckout::test_pays",
        "location": ("tests/test_checkout.py", 11, "TestCheckout.test_pays"),
        "duration": 0.1234,
        "longreprtext": "",
        "user_properties": [
            (
                USER_PROPERTY_KEY,
                {
                    "title": "test_pays",
                    "suite": "TestCheckout",
                    "file": "tests/test_checkout.py",
                    "line": 12,
                    "tags": ["@local:fr", "@realm:eu"],
                },
            )
        ],
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def _configuration(tmp_path: Path) -> Configuration:
    return Configuration(
        path=tmp_path / "config.yaml",
        report=ReportSettings(
            title="Plugin Report",
            output_dir=tmp_path / "custom-report",
            full_report_filename="full-test-report.html",
            failed_report_filename="failed-report.html",
            workbook_filename="test-results.xlsx",
        ),
        notification_scope=NotificationScope.FAILED,
        webhook=WebhookSettings(url=None, timeout_seconds=30),
        smtp=SMTPSettings(host="smtp.example.com", port=25, timeout_seconds=30),
        mail=MailSettings(from_address="reports@example.com", to_address="qa@example.com", cc=()),
        delivery=DeliverySettings(max_attempts=3, retry_delay_ms=0),
    )


def test_call_phase_becomes_an_event() -> None:
    event = event_from_report(_report())

    assert event is not None
    assert event.title == "test_pays"
    assert event.status == TestStatus.PASSED
    assert event.duration_ms == 123
    assert event.parent_suite_name == "TestCheckout"
    assert event.location == EventLocation(file="tests/test_checkout.py", line=12)
    assert event.tags == ("@local:fr", "@realm:eu")
    assert event.errors == ()


def test_failed_call_carries_the_failure_text() -> None:
    event = event_from_report(
        _report(passed=False, failed=True, longreprtext="AssertionError: Expected: 1")
    )

    assert event is not None
    assert event.status == TestStatus.FAILED
    assert event.errors == ("AssertionError: Expected: 1",)


def test_passing_setup_and_teardown_are_ignored() -> None:
    assert event_from_report(_report(when="setup")) is None
    assert event_from_report(_report(when="teardown")) is None


def test_skipped_setup_completes_the_test() -> None:
    event = event_from_report(_report(when="setup", passed=False, skipped=True))

    assert event is not None
    assert event.status == TestStatus.SKIPPED


def test_report_without_metadata_falls_back_to_node_id() -> None:
    event = event_from_report(_report(user_properties=[]))

    assert event is not None
    assert event.title == "test_pays"
    assert event.parent_suite_name is None
    assert event.location == EventLocation(file="tests/test_checkout.py", line=12)
    assert event.tags == ()


class _FakeItem:
    def __init__(self, markers: list[tuple[str, ...]], cls: type | None = None) -> None:
        self.name = "test_pays"
        self.cls = cls
        self.location = ("tests/test_checkout.py", 4, "test_pays")
        self._markers = markers

    def iter_markers(self, name: str) -> list[SimpleNamespace]:
        return [SimpleNamespace(name=name, args=args) for args in self._markers]


def test_describe_item_collects_tags_from_outermost_marker_first() -> None:
    class TestCheckout:
        pass

    item = _FakeItem([("@realm:eu",), ("@local:fr", "@team:pay")], cls=TestCheckout)

    described = describe_item(item)  # type: ignore[arg-type]

    assert described == {
        "title": "test_pays",
        "suite": "TestCheckout",
        "file": "tests/test_checkout.py",
        "line": 5,
        "tags": ["@local:fr", "@team:pay", "@realm:eu"],
    }


def test_describe_item_uses_module_name_for_free_functions() -> None:
    described = describe_item(_FakeItem([]))  # type: ignore[arg-type]

    assert described["suite"] == "test_checkout.py"
    assert described["tags"] == []


class RecordingChannel:
    name = "mail"

    def __init__(self) -> None:
        self.notifications: list[ReportNotification] = []

    def notify(self, notification: ReportNotification) -> DeliveryResult:
        self.notifications.append(notification)
        return DeliveryResult.sent(self.name)


def test_collector_publishes_reports_at_session_finish(tmp_path: Path) -> None:
    channel = RecordingChannel()
    collector = SuiteDigestCollector(
        _configuration(tmp_path), coordinator=DeliveryCoordinator([channel])
    )

    collector.pytest_runtest_logreport(_report(when="setup"))  # type: ignore[arg-type]
    collector.pytest_runtest_logreport(_report())  # type: ignore[arg-type]
    collector.pytest_runtest_logreport(
        _report(passed=False, failed=True, longreprtext="boom")  # type: ignore[arg-type]
    )
    collector.pytest_sessionfinish()

    assert collector.aggregator.record_count == 2
    output_dir = tmp_path / "custom-report"
    assert (output_dir / "full-test-report.html").exists()
    assert (output_dir / "failed-report.html").exists()
    assert (output_dir / "test-results.xlsx").exists()
    (notification,) = channel.notifications
    assert "boom" in notification.text_body
