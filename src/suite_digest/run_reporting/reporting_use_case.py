"""Run reporting use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from suite_digest.configuration import ConfigurationError, load_configuration
from suite_digest.configuration.runtime_settings import Configuration, NotificationScope
from suite_digest.delivery import (
    DeliveryCoordinator,
    MailChannel,
    ReportNotification,
    RequestsWebhookClient,
    RetryPolicy,
    SynchronousSMTPClient,
    WebhookChannel,
    build_subject,
)
from suite_digest.delivery.email_delivery import SMTPClient
from suite_digest.delivery.retry_policy import Sleeper
from suite_digest.delivery.webhook_delivery import WebhookClient
from suite_digest.report_model import ReportModel, build_report_model, select_failed_groups
from suite_digest.rendering import (
    render_full_report,
    render_notification_body,
    render_webhook_payload,
    write_report_artifact,
    write_results_workbook,
)
from suite_digest.result_aggregation import ResultAggregator, SuiteGroup
from suite_digest.result_ingestion import EventIntakeError, read_events

from .reporting_contracts import ReportArtifacts, ReportOutcome, ReportRequest

logger = logging.getLogger(__name__)


class ReportRunError(Exception):
    """Raised when a reporting run cannot be completed."""


def execute_report_run(
    request: ReportRequest,
    *,
    smtp_client_factory: Callable[[], SMTPClient] | None = None,
    webhook_client_factory: Callable[[], WebhookClient] | None = None,
    sleep: Sleeper | None = None,
    environ: Mapping[str, str] | None = None,
    generated_at: datetime | None = None,
) -> ReportOutcome:
    """Load configuration and events, aggregate them, then publish the report."""
    try:
        configuration = load_configuration(request.config_path, environ=environ)
        events = read_events(request.events_path)
    except (ConfigurationError, EventIntakeError, OSError) as exc:
        raise ReportRunError(str(exc)) from exc

    if request.output_dir:
        configuration = with_output_dir(configuration, request.output_dir)

    aggregator = ResultAggregator()
    for event in events:
        aggregator.ingest(event)

    coordinator = None
    if not request.skip_delivery:
        coordinator = build_delivery_coordinator(
            configuration,
            smtp_client=(smtp_client_factory or SynchronousSMTPClient)(),
            webhook_client=(webhook_client_factory or RequestsWebhookClient)(),
            sleep=sleep,
        )
    return publish_run_report(
        aggregator.snapshot(),
        configuration,
        coordinator=coordinator,
        generated_at=generated_at,
    )


def publish_run_report(
    groups: Sequence[SuiteGroup],
    configuration: Configuration,
    *,
    coordinator: DeliveryCoordinator | None = None,
    generated_at: datetime | None = None,
) -> ReportOutcome:
    """Write the report artifacts and, when a coordinator is given, notify.

    Transport failures end up in the returned delivery results and are never
    raised. Failing to write an artifact raises ``ReportRunError``.
    """
    if not groups:
        logger.info("No tests to report.")
        return ReportOutcome(model=None, artifacts=ReportArtifacts())

    timestamp = generated_at or datetime.now().astimezone()
    model = build_report_model(groups)
    artifacts = _write_artifacts(groups, model, configuration, timestamp)

    if coordinator is None:
        logger.info("Notification delivery skipped.")
        return ReportOutcome(model=model, artifacts=artifacts)

    notification = build_notification(groups, model, configuration, artifacts, timestamp)
    if notification is None:
        logger.info("All tests passed; no failure notification to send.")
        return ReportOutcome(model=model, artifacts=artifacts)

    results = coordinator.deliver(notification)
    return ReportOutcome(model=model, artifacts=artifacts, delivery_results=results)


def build_notification(
    groups: Sequence[SuiteGroup],
    model: ReportModel,
    configuration: Configuration,
    artifacts: ReportArtifacts,
    generated_at: datetime,
) -> ReportNotification | None:
    """Render the email and webhook content for the configured scope."""
    failed_only = configuration.notification_scope == NotificationScope.FAILED
    listed = select_failed_groups(groups) if failed_only else tuple(groups)
    if not listed:
        return None
    title = configuration.report.title
    body = render_notification_body(
        listed, model, generated_at=generated_at, title=title, failed_only=failed_only
    )
    payload = render_webhook_payload(
        listed, model, generated_at=generated_at, title=title, failed_only=failed_only
    )
    return ReportNotification(
        subject=build_subject(title, generated_at),
        text_body=body.text,
        html_body=body.html,
        webhook_payload=payload,
        attachment_path=artifacts.full_report_path,
    )


def build_delivery_coordinator(
    configuration: Configuration,
    *,
    smtp_client: SMTPClient,
    webhook_client: WebhookClient,
    sleep: Sleeper | None = None,
) -> DeliveryCoordinator:
    """Webhook first, then mail; the two share no state."""
    webhook = WebhookChannel(
        webhook_client,
        configuration.webhook.url,
        timeout_seconds=configuration.webhook.timeout_seconds,
    )
    mail = MailChannel(
        smtp_client,
        configuration.smtp,
        configuration.mail,
        retry_policy=RetryPolicy.from_milliseconds(
            configuration.delivery.max_attempts, configuration.delivery.retry_delay_ms
        ),
        sleep=sleep,
    )
    return DeliveryCoordinator([webhook, mail])


def with_output_dir(configuration: Configuration, output_dir: str | Path) -> Configuration:
    """Return a copy of the configuration writing artifacts to ``output_dir``."""
    report = replace(configuration.report, output_dir=Path(output_dir).resolve())
    return replace(configuration, report=report)


def _write_artifacts(
    groups: Sequence[SuiteGroup],
    model: ReportModel,
    configuration: Configuration,
    generated_at: datetime,
) -> ReportArtifacts:
    settings = configuration.report
    try:
        full_report_path = write_report_artifact(
            settings.full_report_path,
            render_full_report(groups, model, generated_at=generated_at, title=settings.title),
        )
        logger.info("Full HTML report generated: %s", full_report_path)
        failed_report_path = None
        if model.failed:
            failed_report_path = write_report_artifact(
                settings.failed_report_path,
                render_full_report(
                    groups,
                    model,
                    generated_at=generated_at,
                    title=settings.title,
                    failed_only=True,
                ),
            )
            logger.info("Failed tests HTML report generated: %s", failed_report_path)
        workbook_path = write_results_workbook(
            settings.workbook_path, groups, model, generated_at=generated_at
        )
        logger.info("Results workbook generated: %s", workbook_path)
    except OSError as exc:
        raise ReportRunError(f"Failed to write report artifacts: {exc}") from exc
    return ReportArtifacts(
        full_report_path=full_report_path,
        failed_report_path=failed_report_path,
        workbook_path=workbook_path,
    )
