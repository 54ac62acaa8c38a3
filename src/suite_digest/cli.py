"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from suite_digest.configuration import DEFAULT_CONFIG_FILENAME, write_placeholder_configuration
from suite_digest.delivery import DeliveryStatus
from suite_digest.run_reporting import ReportRequest, ReportRunError, execute_report_run

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="suite-digest")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Verbosity of diagnostic output on stderr",
)
def cli(log_level: str) -> None:
    """Aggregate test results into reports and notifications."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="report")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON reporting configuration",
)
@click.option(
    "--events",
    "events_path",
    required=True,
    type=click.Path(path_type=str),
    help="JSON Lines (or JSON array) file with one event per finished test",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for report artifacts, overriding report.output_dir",
)
@click.option(
    "--skip-delivery",
    is_flag=True,
    default=False,
    help="Write the report artifacts without sending the webhook or email.",
)
def report(config_path: str, events_path: str, output_dir: str | None, skip_delivery: bool) -> None:
    """Build the reports for a finished run and send the notifications."""
    try:
        outcome = execute_report_run(
            ReportRequest(
                config_path=config_path,
                events_path=events_path,
                output_dir=output_dir,
                skip_delivery=skip_delivery,
            )
        )
    except ReportRunError as exc:
        raise CliError(str(exc)) from exc
    for path in outcome.artifacts.written():
        click.echo(str(path))
    for result in outcome.delivery_results:
        if result.status != DeliveryStatus.SENT:
            detail = f": {result.error_message}" if result.error_message else ""
            click.echo(f"{result.channel} notification {result.status.value}{detail}", err=True)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="suite-digest", standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
