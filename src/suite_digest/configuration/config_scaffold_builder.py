"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "suite-digest.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reporting configuration template for suite-digest.
# Replace every <REQUIRED> placeholder before running report.
# Uncomment <OPTIONAL> entries you need; commented values are the defaults.

report:
  # title: "Automation Test Report"
  # Relative paths resolve against this file's directory.
  # output_dir: "custom-report"
  # full_report_filename: "full-test-report.html"
  # failed_report_filename: "failed-report.html"
  # workbook_filename: "test-results.xlsx"

notifications:
  # failed: email and webhook list failed tests only; all: every test.
  scope: "failed"

webhook:
  # Leave empty to fall back to the WEB_HOOK_URL environment variable.
  # Without any URL the webhook notification is skipped.
  # url: "<OPTIONAL>"
  # timeout_seconds: 30

smtp:
  host: "<REQUIRED>"
  port: "<REQUIRED>"
  # timeout_seconds: 30

mail:
  from_address: "<REQUIRED>"
  to_address: "<REQUIRED>"
  # cc:
  #   - "<OPTIONAL>"

delivery:
  # Mail send attempts and the fixed pause between them.
  max_attempts: 3
  retry_delay_ms: 1000
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
