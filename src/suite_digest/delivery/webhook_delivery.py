"""Chat webhook delivery: one POST attempt, outcome logged."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import requests

from .delivery_outcomes import DeliveryResult
from .notification_contracts import ReportNotification

logger = logging.getLogger(__name__)

WEBHOOK_CHANNEL = "webhook"
_RESPONSE_EXCERPT_LENGTH = 500


class WebhookDeliveryError(Exception):
    """Raised by webhook clients when a POST does not succeed."""

    def __init__(
        self, message: str, *, classification: str, response_body: str | None = None
    ) -> None:
        super().__init__(message)
        self.classification = classification
        self.response_body = response_body


class WebhookClient(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for clients posting JSON to a webhook URL."""

    def post_json(self, url: str, payload: Mapping[str, Any], timeout_seconds: int) -> None: ...


class RequestsWebhookClient:  # pylint: disable=too-few-public-methods
    """Webhook client backed by a requests session."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def post_json(self, url: str, payload: Mapping[str, Any], timeout_seconds: int) -> None:
        try:
            response = self.session.post(url, json=dict(payload), timeout=timeout_seconds)
        except requests.RequestException as exc:
            raise WebhookDeliveryError(str(exc), classification=type(exc).__name__) from exc
        if 200 <= response.status_code < 300:
            return
        body = (response.text or "").strip()[:_RESPONSE_EXCERPT_LENGTH] or None
        raise WebhookDeliveryError(
            f"Webhook responded with HTTP {response.status_code}",
            classification=f"HTTP {response.status_code}",
            response_body=body,
        )


class WebhookChannel:  # pylint: disable=too-few-public-methods
    """Post the rendered payload once; failures are logged, never retried."""

    name = WEBHOOK_CHANNEL

    def __init__(
        self, client: WebhookClient, url: str | None, *, timeout_seconds: int = 30
    ) -> None:
        self._client = client
        self._url = url
        self._timeout_seconds = timeout_seconds

    def notify(self, notification: ReportNotification) -> DeliveryResult:
        if not self._url:
            logger.warning("Webhook URL is not configured; webhook notification not sent.")
            return DeliveryResult.skipped(self.name, "webhook URL not configured")
        try:
            self._client.post_json(self._url, notification.webhook_payload, self._timeout_seconds)
        except WebhookDeliveryError as exc:
            logger.error(
                "Error sending webhook notification: message=%s classification=%s response=%s",
                exc,
                exc.classification,
                exc.response_body or "No response",
            )
            return DeliveryResult.failed(self.name, exc)
        logger.info("Webhook notification sent successfully.")
        return DeliveryResult.sent(self.name)
