"""Contracts shared by the notification channels."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from .delivery_outcomes import DeliveryResult


@dataclass(frozen=True)
class ReportNotification:
    """Everything the channels need from the rendering stage."""

    subject: str
    text_body: str
    html_body: str
    webhook_payload: Mapping[str, Any]
    attachment_path: Path | None


class NotificationChannel(Protocol):  # pylint: disable=too-few-public-methods
    """A delivery strategy that never raises for transport failures."""

    name: str

    def notify(self, notification: ReportNotification) -> DeliveryResult: ...
