"""pytest integration: report a test session through suite-digest.

Enable with ``--suite-digest-config PATH``. Tags are attached with
``@pytest.mark.tags("@local:fr", "@realm:eu")``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import pytest

from suite_digest.configuration import ConfigurationError, load_configuration
from suite_digest.configuration.runtime_settings import Configuration
from suite_digest.delivery import (
    DeliveryCoordinator,
    RequestsWebhookClient,
    SynchronousSMTPClient,
)
from suite_digest.result_aggregation import ResultAggregator
from suite_digest.result_ingestion import EventLocation, TestEvent, TestStatus
from suite_digest.run_reporting import (
    ReportRunError,
    build_delivery_coordinator,
    publish_run_report,
)

logger = logging.getLogger(__name__)

USER_PROPERTY_KEY = "suite_digest"
COLLECTOR_PLUGIN_NAME = "suite-digest-collector"
TAGS_MARKER = "tags"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("suite-digest")
    group.addoption(
        "--suite-digest-config",
        action="store",
        default=None,
        metavar="PATH",
        help="Write suite-digest reports and send notifications at session end.",
    )
    group.addoption(
        "--suite-digest-skip-delivery",
        action="store_true",
        default=False,
        help="Write suite-digest reports without sending the webhook or email.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", f"{TAGS_MARKER}(*tags): @key:value tags reported by suite-digest"
    )
    config_path = config.getoption("suite_digest_config")
    # xdist workers forward their reports; only the controlling process aggregates.
    if not config_path or hasattr(config, "workerinput"):
        return
    try:
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise pytest.UsageError(f"suite-digest: {exc}") from exc
    coordinator = None
    if not config.getoption("suite_digest_skip_delivery"):
        coordinator = build_delivery_coordinator(
            configuration,
            smtp_client=SynchronousSMTPClient(),
            webhook_client=RequestsWebhookClient(),
        )
    config.pluginmanager.register(
        SuiteDigestCollector(configuration, coordinator=coordinator), COLLECTOR_PLUGIN_NAME
    )


def pytest_itemcollected(item: pytest.Item) -> None:
    if not item.config.getoption("suite_digest_config"):
        return
    item.user_properties.append((USER_PROPERTY_KEY, describe_item(item)))


def describe_item(item: pytest.Item) -> dict[str, Any]:
    """Serializable test metadata carried on every report of ``item``."""
    tags: list[str] = []
    for marker in reversed(list(item.iter_markers(name=TAGS_MARKER))):
        tags.extend(str(tag) for tag in marker.args)
    cls = getattr(item, "cls", None)
    file_name, line_number, _ = item.location
    return {
        "title": item.name,
        "suite": cls.__name__ if cls is not None else os.path.basename(file_name),
        "file": file_name,
        "line": line_number + 1 if line_number is not None else None,
        "tags": tags,
    }


class SuiteDigestCollector:
    """Turn pytest reports into ingestion events and publish at session end."""

    def __init__(
        self, configuration: Configuration, *, coordinator: DeliveryCoordinator | None = None
    ) -> None:
        self.aggregator = ResultAggregator()
        self._configuration = configuration
        self._coordinator = coordinator

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        event = event_from_report(report)
        if event is not None:
            self.aggregator.ingest(event)

    def pytest_sessionfinish(self) -> None:
        try:
            publish_run_report(
                self.aggregator.snapshot(), self._configuration, coordinator=self._coordinator
            )
        except ReportRunError as exc:
            logger.error("suite-digest report could not be written: %s", exc)


def event_from_report(report: Any) -> TestEvent | None:
    """Build the event for the report that completes a test, ``None`` otherwise.

    The call phase completes a test; a setup phase completes it only when it
    failed or skipped, since the call phase then never runs.
    """
    completes_test = report.when == "call" or (report.when == "setup" and not report.passed)
    if not completes_test:
        return None

    metadata: Mapping[str, Any] = dict(report.user_properties).get(USER_PROPERTY_KEY) or {}
    title = metadata.get("title") or report.nodeid.rsplit("::", 1)[-1]
    file_name = metadata.get("file") or report.location[0]
    line = metadata.get("line")
    if line is None and report.location[1] is not None:
        line = report.location[1] + 1
    location = EventLocation(file=file_name, line=line) if line is not None else None

    return TestEvent(
        title=title,
        status=_status_of(report),
        duration_ms=round(report.duration * 1000),
        parent_suite_name=metadata.get("suite"),
        location=location,
        tags=tuple(metadata.get("tags") or ()),
        errors=(report.longreprtext,) if report.failed else (),
    )


def _status_of(report: Any) -> TestStatus:
    if report.failed:
        return TestStatus.FAILED
    if report.skipped:
        return TestStatus.SKIPPED
    return TestStatus.PASSED
