"""Delivery exports."""

from .delivery_coordinator import DeliveryCoordinator
from .delivery_outcomes import DeliveryResult, DeliveryStatus
from .email_delivery import (
    EmailCompositionError,
    MailChannel,
    MailChannelState,
    SynchronousSMTPClient,
    build_subject,
    compose_report_email,
)
from .notification_contracts import NotificationChannel, ReportNotification
from .retry_policy import RetryOutcome, RetryPolicy, send_with_retry
from .webhook_delivery import (
    RequestsWebhookClient,
    WebhookChannel,
    WebhookDeliveryError,
)

__all__ = [
    "DeliveryCoordinator",
    "DeliveryResult",
    "DeliveryStatus",
    "EmailCompositionError",
    "MailChannel",
    "MailChannelState",
    "NotificationChannel",
    "ReportNotification",
    "RequestsWebhookClient",
    "RetryOutcome",
    "RetryPolicy",
    "SynchronousSMTPClient",
    "WebhookChannel",
    "WebhookDeliveryError",
    "build_subject",
    "compose_report_email",
    "send_with_retry",
]
