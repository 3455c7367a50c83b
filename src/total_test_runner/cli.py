"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from total_test_runner.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from total_test_runner.result_parsing import ResultKind, evaluate_result_file
from total_test_runner.results_writing import StepStatus
from total_test_runner.run_execution import RunExecutionError, RunRequest, execute_total_test_run

LOGGER_NAME = "total_test_runner"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


def configure_logging(verbose: bool) -> None:
    """Send package log records to stderr, replacing handlers from earlier calls."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="total-test-runner")
@click.option("--verbose", is_flag=True, default=False, help="Log debug details to stderr.")
def cli(verbose: bool) -> None:
    """Run Total Test CLI steps and interpret their results."""
    configure_logging(verbose)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML test configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML test configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML test configuration file",
)
@click.option(
    "--workspace",
    "workspace",
    required=False,
    type=click.Path(path_type=str),
    help="Build workspace the CLI runs in (defaults to the current directory)",
)
@click.option(
    "--summary-output",
    "summary_output",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path of a run summary workbook to write",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the masked Total Test CLI command without launching it.",
)
def run_step(
    config_path: str, workspace: str | None, summary_output: str | None, dry_run: bool
) -> None:
    """Run the configured Total Test step."""
    try:
        outcome = execute_total_test_run(
            RunRequest(
                config_path=config_path,
                workspace=workspace,
                dry_run=dry_run,
                summary_output=summary_output,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    if outcome.dry_run:
        click.echo(" ".join(outcome.arguments))
    if outcome.summary_path is not None:
        click.echo(str(outcome.summary_path))
    click.echo(outcome.status.value)
    if outcome.status is StepStatus.FAILED:
        raise CliError("Test failure")


@cli.command(name="check-result")
@click.option(
    "--result-file",
    "result_file",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a suite or scenario result file",
)
@click.option(
    "--scenario",
    is_flag=True,
    default=False,
    help="Read the file as a single scenario result (XaUnitResult).",
)
@click.option(
    "--threshold",
    type=click.IntRange(0, 100),
    default=0,
    show_default=True,
    help="Minimum code coverage percentage",
)
def check_result(result_file: str, scenario: bool, threshold: int) -> None:
    """Interpret an existing result file without running the CLI."""
    kind = ResultKind.SCENARIO if scenario else ResultKind.SUITE
    verdict = evaluate_result_file(result_file, kind, threshold)
    if verdict.coverage_percent is not None:
        click.echo(f"coverage: {verdict.coverage_percent}%")
    if not verdict.success:
        raise CliError(f"Test failure: {verdict.reason}")
    click.echo(StepStatus.PASSED.value)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
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
