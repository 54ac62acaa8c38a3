"""Run reporting entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from suite_digest.delivery.delivery_outcomes import DeliveryResult
from suite_digest.report_model.summary_models import ReportModel


@dataclass(frozen=True)
class ReportRequest:
    """Input contract for reporting on one finished run."""

    config_path: str
    events_path: str
    output_dir: str | None = None
    skip_delivery: bool = False


@dataclass(frozen=True)
class ReportArtifacts:
    """Files written for one run; ``None`` when an artifact was not produced."""

    full_report_path: Path | None = None
    failed_report_path: Path | None = None
    workbook_path: Path | None = None

    def written(self) -> tuple[Path, ...]:
        paths = (self.full_report_path, self.failed_report_path, self.workbook_path)
        return tuple(path for path in paths if path is not None)


@dataclass(frozen=True)
class ReportOutcome:
    """Output contract for one reporting run."""

    model: ReportModel | None
    artifacts: ReportArtifacts
    delivery_results: tuple[DeliveryResult, ...] = ()
