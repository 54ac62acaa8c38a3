"""Report model exports."""

from .summary_builder import build_report_model, select_failed_groups
from .summary_models import ReportModel

__all__ = [
    "ReportModel",
    "build_report_model",
    "select_failed_groups",
]
