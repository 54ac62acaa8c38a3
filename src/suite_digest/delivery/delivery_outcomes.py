"""Delivery domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeliveryStatus(str, Enum):
    """Final outcome of one notification channel."""

    SENT = "sent"
    FAILED = "failed"
    ABORTED = "aborted"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of attempting to deliver through one channel."""

    channel: str
    status: DeliveryStatus
    attempts: int
    error_message: str | None

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.SENT

    @staticmethod
    def sent(channel: str, attempts: int = 1) -> DeliveryResult:
        return DeliveryResult(
            channel=channel,
            status=DeliveryStatus.SENT,
            attempts=attempts,
            error_message=None,
        )

    @staticmethod
    def failed(channel: str, error: Exception | str, attempts: int = 1) -> DeliveryResult:
        return DeliveryResult(
            channel=channel,
            status=DeliveryStatus.FAILED,
            attempts=attempts,
            error_message=str(error),
        )

    @staticmethod
    def aborted(channel: str, error: Exception | str) -> DeliveryResult:
        return DeliveryResult(
            channel=channel,
            status=DeliveryStatus.ABORTED,
            attempts=0,
            error_message=str(error),
        )

    @staticmethod
    def skipped(channel: str, reason: str | None = None) -> DeliveryResult:
        return DeliveryResult(
            channel=channel,
            status=DeliveryStatus.SKIPPED,
            attempts=0,
            error_message=reason,
        )
