"""Configuration loader service."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    DeliverySettings,
    MailSettings,
    NotificationScope,
    ReportSettings,
    SMTPSettings,
    WebhookSettings,
)

WEBHOOK_URL_ENV_VAR = "WEB_HOOK_URL"

DEFAULT_REPORT_TITLE = "Automation Test Report"
DEFAULT_OUTPUT_DIR = "custom-report"
DEFAULT_FULL_REPORT_FILENAME = "full-test-report.html"
DEFAULT_FAILED_REPORT_FILENAME = "failed-report.html"
DEFAULT_WORKBOOK_FILENAME = "test-results.xlsx"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(
    config_path: Path | str, *, environ: Mapping[str, str] | None = None
) -> Configuration:
    """Load and validate the configuration file.

    Args:
      config_path: YAML (or JSON) configuration file.
      environ: Environment used for the webhook URL fallback. Defaults to
        ``os.environ``.

    Raises:
      ConfigurationError: If the file is missing, unparsable or invalid.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"Configuration file is not valid UTF-8: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    environment = os.environ if environ is None else environ
    report = _parse_report_section(parsed.get("report"), path.parent)
    scope = _parse_notifications_section(parsed.get("notifications"))
    webhook = _parse_webhook_section(parsed.get("webhook"), environment)
    smtp = _parse_smtp_section(parsed.get("smtp"))
    mail = _parse_mail_section(parsed.get("mail"))
    delivery = _parse_delivery_section(parsed.get("delivery"))

    return Configuration(
        path=path,
        report=report,
        notification_scope=scope,
        webhook=webhook,
        smtp=smtp,
        mail=mail,
        delivery=delivery,
    )


def _parse_report_section(value: Any, base_path: Path) -> ReportSettings:
    section = _optional_mapping(value, "report")
    title = _string_with_default(section.get("title"), "report.title", DEFAULT_REPORT_TITLE)
    output_dir = _string_with_default(
        section.get("output_dir"), "report.output_dir", DEFAULT_OUTPUT_DIR
    )
    return ReportSettings(
        title=title,
        output_dir=_resolve_path(base_path, output_dir),
        full_report_filename=_filename(
            section.get("full_report_filename"),
            "report.full_report_filename",
            DEFAULT_FULL_REPORT_FILENAME,
        ),
        failed_report_filename=_filename(
            section.get("failed_report_filename"),
            "report.failed_report_filename",
            DEFAULT_FAILED_REPORT_FILENAME,
        ),
        workbook_filename=_filename(
            section.get("workbook_filename"),
            "report.workbook_filename",
            DEFAULT_WORKBOOK_FILENAME,
        ),
    )


def _parse_notifications_section(value: Any) -> NotificationScope:
    section = _optional_mapping(value, "notifications")
    raw_scope = _string_with_default(
        section.get("scope"), "notifications.scope", NotificationScope.FAILED.value
    ).lower()
    try:
        return NotificationScope(raw_scope)
    except ValueError as exc:
        allowed = ", ".join(scope.value for scope in NotificationScope)
        raise ConfigurationError(f"notifications.scope must be one of: {allowed}.") from exc


def _parse_webhook_section(value: Any, environ: Mapping[str, str]) -> WebhookSettings:
    section = _optional_mapping(value, "webhook")
    url = _optional_string(section.get("url"), "webhook.url")
    if url is None:
        url = (environ.get(WEBHOOK_URL_ENV_VAR) or "").strip() or None
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "webhook.timeout_seconds"
    )
    return WebhookSettings(url=url, timeout_seconds=timeout_seconds)


def _parse_smtp_section(value: Any) -> SMTPSettings:
    section = _require_mapping(value, "smtp")
    host = _require_non_empty_string(section.get("host"), "smtp.host")
    port = _require_positive_int(section.get("port"), "smtp.port")
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "smtp.timeout_seconds"
    )
    return SMTPSettings(host=host, port=port, timeout_seconds=timeout_seconds)


def _parse_mail_section(value: Any) -> MailSettings:
    section = _require_mapping(value, "mail")
    from_address = _require_non_empty_string(section.get("from_address"), "mail.from_address")
    to_address = _require_non_empty_string(section.get("to_address"), "mail.to_address")
    cc = _normalize_string_sequence(section.get("cc"), "mail.cc")
    return MailSettings(from_address=from_address, to_address=to_address, cc=cc)


def _parse_delivery_section(value: Any) -> DeliverySettings:
    section = _optional_mapping(value, "delivery")
    max_attempts = _require_positive_int(section.get("max_attempts", 3), "delivery.max_attempts")
    retry_delay_ms = _require_non_negative_int(
        section.get("retry_delay_ms", 1000), "delivery.retry_delay_ms"
    )
    return DeliverySettings(max_attempts=max_attempts, retry_delay_ms=retry_delay_ms)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _filename(value: Any, field_name: str, default: str) -> str:
    name = _string_with_default(value, field_name, default)
    if Path(name).name != name:
        raise ConfigurationError(f"{field_name} must be a bare file name.")
    return name


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _string_with_default(value: Any, field_name: str, default: str) -> str:
    if value is None:
        return default
    return _require_non_empty_string(value, field_name)


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    checked = _require_int(value, field_name)
    if checked <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return checked


def _require_non_negative_int(value: Any, field_name: str) -> int:
    checked = _require_int(value, field_name)
    if checked < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return checked


def _require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    return value
