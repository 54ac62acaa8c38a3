"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class NotificationScope(str, Enum):
    """Which records the email and webhook notifications list."""

    FAILED = "failed"
    ALL = "all"


@dataclass(frozen=True)
class ReportSettings:
    """Report artifact naming and placement."""

    title: str
    output_dir: Path
    full_report_filename: str
    failed_report_filename: str
    workbook_filename: str

    @property
    def full_report_path(self) -> Path:
        return self.output_dir / self.full_report_filename

    @property
    def failed_report_path(self) -> Path:
        return self.output_dir / self.failed_report_filename

    @property
    def workbook_path(self) -> Path:
        return self.output_dir / self.workbook_filename


@dataclass(frozen=True)
class WebhookSettings:
    """Chat webhook destination. A missing URL disables the channel."""

    url: str | None
    timeout_seconds: int


@dataclass(frozen=True)
class SMTPSettings:
    """SMTP server connectivity configuration."""

    host: str
    port: int
    timeout_seconds: int


@dataclass(frozen=True)
class MailSettings:
    """Sender and destination mailbox configuration."""

    from_address: str
    to_address: str
    cc: tuple[str, ...]


@dataclass(frozen=True)
class DeliverySettings:
    """Retry budget for the mail channel."""

    max_attempts: int
    retry_delay_ms: int


@dataclass(frozen=True)
class Configuration:  # pylint: disable=too-many-instance-attributes
    """Top-level configuration aggregate."""

    path: Path
    report: ReportSettings
    notification_scope: NotificationScope
    webhook: WebhookSettings
    smtp: SMTPSettings
    mail: MailSettings
    delivery: DeliverySettings
