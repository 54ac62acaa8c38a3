"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import WEBHOOK_URL_ENV_VAR, ConfigurationError, load_configuration
from .runtime_settings import (
    Configuration,
    DeliverySettings,
    MailSettings,
    NotificationScope,
    ReportSettings,
    SMTPSettings,
    WebhookSettings,
)

__all__ = [
    "Configuration",
    "DeliverySettings",
    "MailSettings",
    "NotificationScope",
    "ReportSettings",
    "SMTPSettings",
    "WebhookSettings",
    "ConfigurationError",
    "WEBHOOK_URL_ENV_VAR",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
