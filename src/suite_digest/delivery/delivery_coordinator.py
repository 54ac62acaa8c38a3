"""Sequential orchestration of the notification channels."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .delivery_outcomes import DeliveryResult
from .notification_contracts import NotificationChannel, ReportNotification

logger = logging.getLogger(__name__)


class DeliveryCoordinator:  # pylint: disable=too-few-public-methods
    """Invoke each channel in order; one channel's failure never affects the next."""

    def __init__(self, channels: Sequence[NotificationChannel]) -> None:
        self._channels = tuple(channels)

    def deliver(self, notification: ReportNotification) -> tuple[DeliveryResult, ...]:
        results = []
        for channel in self._channels:
            try:
                result = channel.notify(notification)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.exception("Notification channel %r failed unexpectedly.", channel.name)
                result = DeliveryResult.failed(channel.name, exc, attempts=0)
            results.append(result)
        return tuple(results)
