"""Run reporting exports."""

from .reporting_contracts import ReportArtifacts, ReportOutcome, ReportRequest
from .reporting_use_case import (
    ReportRunError,
    build_delivery_coordinator,
    build_notification,
    execute_report_run,
    publish_run_report,
    with_output_dir,
)

__all__ = [
    "ReportArtifacts",
    "ReportOutcome",
    "ReportRequest",
    "ReportRunError",
    "build_delivery_coordinator",
    "build_notification",
    "execute_report_run",
    "publish_run_report",
    "with_output_dir",
]
