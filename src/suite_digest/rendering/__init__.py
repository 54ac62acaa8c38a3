"""Rendering exports."""

from .html_report_renderer import render_full_report, write_report_artifact
from .notification_renderer import NotificationBody, render_notification_body, render_text_summary
from .results_workbook_writer import write_results_workbook
from .webhook_payload_renderer import render_webhook_payload

__all__ = [
    "NotificationBody",
    "render_full_report",
    "render_notification_body",
    "render_text_summary",
    "render_webhook_payload",
    "write_report_artifact",
    "write_results_workbook",
]
