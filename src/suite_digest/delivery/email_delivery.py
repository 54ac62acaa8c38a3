"""Report email composition and SMTP delivery with bounded retries."""

from __future__ import annotations

import logging
import mimetypes
import smtplib
import time
from datetime import datetime
from email.message import EmailMessage
from email.utils import make_msgid
from enum import Enum
from pathlib import Path
from typing import Protocol

from suite_digest.configuration.runtime_settings import MailSettings, SMTPSettings

from .delivery_outcomes import DeliveryResult
from .notification_contracts import ReportNotification
from .retry_policy import RetryPolicy, Sleeper, send_with_retry

logger = logging.getLogger(__name__)

MAIL_CHANNEL = "mail"


class EmailCompositionError(Exception):
    """Raised when the report email cannot be built (missing attachment, etc.)."""


class MailChannelState(str, Enum):
    """Lifecycle of the mail channel within one run."""

    DISCONNECTED = "disconnected"
    VERIFYING = "verifying"
    READY = "ready"
    SENDING = "sending"
    RETRYING = "retrying"
    SENT = "sent"
    ABANDONED = "abandoned"
    ABORTED = "aborted"


class SMTPClient(Protocol):
    """Protocol for SMTP clients used by the mail channel."""

    def verify_connection(self, settings: SMTPSettings) -> None: ...

    def send_message(self, settings: SMTPSettings, message: EmailMessage) -> None: ...


class SynchronousSMTPClient:
    """Real SMTP client implementation using smtplib. No authentication."""

    def verify_connection(self, settings: SMTPSettings) -> None:
        smtp = smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout_seconds)
        try:
            smtp.ehlo()
            code, response = smtp.noop()
            if code != 250:
                raise smtplib.SMTPResponseException(code, response)
        finally:
            smtp.quit()

    def send_message(self, settings: SMTPSettings, message: EmailMessage) -> None:
        recipients = _collect_recipients(message)
        smtp = smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout_seconds)
        try:
            smtp.ehlo()
            smtp.send_message(message, to_addrs=recipients)
        finally:
            smtp.quit()


def build_subject(title: str, generated_at: datetime) -> str:
    return f"{title} Report - {generated_at.strftime('%Y-%m-%d %H:%M:%S')}"


def compose_report_email(
    notification: ReportNotification, mail_settings: MailSettings
) -> EmailMessage:
    """Build the multipart report email with the report artifact attached."""
    message = EmailMessage()
    message["Message-ID"] = make_msgid()
    message["From"] = mail_settings.from_address
    message["To"] = mail_settings.to_address
    if mail_settings.cc:
        message["Cc"] = ", ".join(mail_settings.cc)
    message["Subject"] = notification.subject

    message.set_content(notification.text_body or "No content provided.")
    message.add_alternative(notification.html_body, subtype="html")

    if notification.attachment_path is not None:
        _attach_file(message, notification.attachment_path)
    return message


def _attach_file(message: EmailMessage, path: Path) -> None:
    if not path.exists():
        raise EmailCompositionError(f"Attachment file not found: {path}")
    content_type, _ = mimetypes.guess_type(path.name)
    maintype, _, subtype = (content_type or "application/octet-stream").partition("/")
    message.add_attachment(
        path.read_bytes(), maintype=maintype, subtype=subtype, filename=path.name
    )


class MailChannel:
    """Verify the SMTP connection once, then send with a fixed retry budget.

    A verification failure aborts the channel without any send attempt.
    Exhausting the budget leaves the channel ``abandoned``; neither case
    raises.
    """

    name = MAIL_CHANNEL

    def __init__(  # pylint: disable=too-many-arguments
        self,
        smtp_client: SMTPClient,
        smtp_settings: SMTPSettings,
        mail_settings: MailSettings,
        *,
        retry_policy: RetryPolicy | None = None,
        sleep: Sleeper | None = None,
    ) -> None:
        self._smtp_client = smtp_client
        self._smtp_settings = smtp_settings
        self._mail_settings = mail_settings
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep or time.sleep
        self.state = MailChannelState.DISCONNECTED

    def notify(self, notification: ReportNotification) -> DeliveryResult:
        self.state = MailChannelState.VERIFYING
        try:
            self._smtp_client.verify_connection(self._smtp_settings)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self.state = MailChannelState.ABORTED
            logger.error(
                "Error verifying SMTP connection to %s:%s: %s (%s)",
                self._smtp_settings.host,
                self._smtp_settings.port,
                exc,
                type(exc).__name__,
            )
            return DeliveryResult.aborted(self.name, exc)
        self.state = MailChannelState.READY
        logger.info("SMTP server connection verified successfully.")

        try:
            message = compose_report_email(notification, self._mail_settings)
        except EmailCompositionError as exc:
            self.state = MailChannelState.ABANDONED
            logger.error("Report email could not be composed: %s", exc)
            return DeliveryResult.failed(self.name, exc, attempts=0)

        outcome = send_with_retry(
            lambda: self._send(message),
            self._retry_policy,
            sleep=self._sleep,
            on_failure=self._record_failure,
        )
        if outcome.succeeded:
            self.state = MailChannelState.SENT
            logger.info("Report email sent successfully (attempt %d).", outcome.attempts)
            return DeliveryResult.sent(self.name, attempts=outcome.attempts)

        self.state = MailChannelState.ABANDONED
        logger.error("All %d email sending attempts failed.", outcome.attempts)
        return DeliveryResult.failed(
            self.name,
            outcome.last_error or "email sending failed",
            attempts=outcome.attempts,
        )

    def _send(self, message: EmailMessage) -> None:
        self.state = MailChannelState.SENDING
        self._smtp_client.send_message(self._smtp_settings, message)

    def _record_failure(self, attempt: int, error: Exception) -> None:
        logger.error(
            "Email attempt %d/%d failed: %s (%s)",
            attempt,
            self._retry_policy.max_attempts,
            error,
            type(error).__name__,
        )
        if attempt < self._retry_policy.max_attempts:
            self.state = MailChannelState.RETRYING


def _collect_recipients(message: EmailMessage) -> list[str]:
    recipients = []
    for header in ("To", "Cc", "Bcc"):
        if header in message:
            recipients.extend(
                [address.strip() for address in message[header].split(",") if address.strip()]
            )
    return recipients
