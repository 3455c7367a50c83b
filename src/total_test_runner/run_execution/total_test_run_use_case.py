"""Run execution use-case service."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from pathlib import Path

from total_test_runner.argument_building import (
    ArgumentList,
    BuildContext,
    build_run_arguments,
    quote_whole_token,
    script_filename,
)
from total_test_runner.cli_compatibility import (
    FUNCTIONAL_MINIMUM_VERSION,
    UNIT_MINIMUM_VERSION,
    ToolCompatibilityError,
    VersionGate,
    assert_compatible,
    read_tool_version,
)
from total_test_runner.configuration import (
    Configuration,
    ConfigurationError,
    RunConfiguration,
    RunnerKind,
    load_configuration,
)
from total_test_runner.host_access import CredentialStore, HostConnectionRegistry
from total_test_runner.result_location import ResultLocator, result_file_candidates
from total_test_runner.result_parsing import ResultKind, RunVerdict, evaluate_result_file
from total_test_runner.results_writing import RunSummary, StepStatus, write_run_summary_workbook

from .run_contracts import RunOutcome, RunRequest

_LOGGER = logging.getLogger("total_test_runner.run_execution")

ProcessLauncher = Callable[[tuple[str, ...], Path, Mapping[str, str]], int]


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_total_test_run(
    request: RunRequest,
    *,
    process_launcher: ProcessLauncher | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunOutcome:
    """Run one configured Total Test step and apply the configured failure policy.

    Configuration, version and argument problems raise before the CLI is
    launched. Problems with the result file only fail the step.

    Raises:
      RunExecutionError: If the step cannot be prepared or the CLI script
        cannot be launched.
    """
    launcher = process_launcher or _launch_process
    process_environ = dict(os.environ if environ is None else environ)
    run_start = datetime.now(UTC)

    configuration = _load_configuration(request.config_path, process_environ)
    run = configuration.run
    workspace = Path(request.workspace).resolve() if request.workspace else Path.cwd()
    cli_directory = _resolve_cli_directory(configuration)
    gate = _check_tool_version(cli_directory, run.runner)
    context = BuildContext(
        script_path=str(cli_directory / script_filename(run.runner, configuration.cli.uses_shell)),
        workspace=str(workspace),
        is_shell=configuration.cli.uses_shell,
        gate=gate,
        credentials=CredentialStore(configuration.credentials),
        connections=HostConnectionRegistry(configuration.connections),
    )
    arguments = _build_arguments(run, context)
    _LOGGER.info("Total Test CLI command: %s", arguments.to_display_string())

    if request.dry_run:
        _LOGGER.info("Dry run: the Total Test CLI was not launched.")
        return RunOutcome(
            status=StepStatus.DRY_RUN, arguments=arguments.display_tokens, dry_run=True
        )

    workspace.mkdir(parents=True, exist_ok=True)
    exit_code = launcher(arguments.tokens, workspace, process_environ)
    _LOGGER.info("%s exited with exit value = %s", Path(context.script_path).name, exit_code)

    verdict: RunVerdict | None = None
    result_path: Path | None = None
    if exit_code == 0 and run.runner is RunnerKind.FUNCTIONAL:
        result_path, verdict = _evaluate_functional_result(run, gate, workspace)
    status = _decide_status(run, exit_code, verdict)

    summary_path = None
    if request.summary_output:
        summary_path = write_run_summary_workbook(
            request.summary_output,
            RunSummary(
                run_start=run_start,
                config_path=configuration.path,
                runner=run.runner.value,
                tool_version=str(gate.installed) if gate.installed else None,
                status=status,
                arguments=arguments.display_tokens,
                exit_code=exit_code,
                result_path=result_path,
                verdict=verdict,
            ),
        )
        _LOGGER.info("Run summary written to %s", summary_path)

    return RunOutcome(
        status=status,
        arguments=arguments.display_tokens,
        dry_run=False,
        exit_code=exit_code,
        verdict=verdict,
        result_path=result_path,
        summary_path=summary_path,
    )


def _load_configuration(config_path: str, environ: Mapping[str, str]) -> Configuration:
    try:
        return load_configuration(config_path, environ=environ)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc


def _resolve_cli_directory(configuration: Configuration) -> Path:
    location = configuration.cli.location
    if not location:
        target = "Linux" if configuration.cli.uses_shell else "Windows"
        raise RunExecutionError(f"No Total Test CLI location is configured for {target}.")
    cli_directory = Path(location)
    if not cli_directory.is_dir():
        raise RunExecutionError(f"Total Test CLI location does not exist: {cli_directory}")
    _LOGGER.info("Total Test CLI location: %s", cli_directory)
    return cli_directory


def _check_tool_version(cli_directory: Path, runner: RunnerKind) -> VersionGate:
    installed = read_tool_version(cli_directory)
    minimum = (
        FUNCTIONAL_MINIMUM_VERSION if runner is RunnerKind.FUNCTIONAL else UNIT_MINIMUM_VERSION
    )
    try:
        assert_compatible(installed, minimum)
    except ToolCompatibilityError as exc:
        raise RunExecutionError(str(exc)) from exc
    _LOGGER.info("Total Test CLI version: %s", installed)
    return VersionGate(installed)


def _build_arguments(run: RunConfiguration, context: BuildContext) -> ArgumentList:
    try:
        return build_run_arguments(run, context)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc


def _evaluate_functional_result(
    run: RunConfiguration, gate: VersionGate, workspace: Path
) -> tuple[Path | None, RunVerdict]:
    kind = ResultKind.for_test_path(run.test_path)
    locator = ResultLocator(gate.uses_default_output_folder)
    candidates = result_file_candidates(kind, gate.uses_new_file_extensions)
    try:
        result_path = locator.locate_any(
            workspace, run.report_folder, candidates, test_path=run.test_path
        )
        if result_path is None:
            search_root = locator.search_root(workspace, run.report_folder, test_path=run.test_path)
            result_path = search_root / candidates[0].name
            _LOGGER.warning("Result file not found; trying %s", result_path)
    except OSError as exc:
        _LOGGER.error("Unable to search for the result file: %s", exc)
        return None, RunVerdict(success=False, reason=f"Unable to search for result file: {exc}")
    return result_path, evaluate_result_file(result_path, kind, run.code_coverage.threshold)


def _decide_status(run: RunConfiguration, exit_code: int, verdict: RunVerdict | None) -> StepStatus:
    if exit_code != 0:
        if run.halt_pipeline_on_failure:
            return StepStatus.FAILED
        _LOGGER.warning("Total Test CLI failed; continuing because halting is disabled.")
        return StepStatus.PASSED
    if verdict is not None and not verdict.success:
        if run.stop_if_test_fails_or_threshold_reached:
            return StepStatus.FAILED
        _LOGGER.warning("Test failure or coverage threshold ignored: %s", verdict.reason)
    return StepStatus.PASSED


def process_arguments(
    command: tuple[str, ...], *, windows: bool = os.name == "nt"
) -> list[str] | str:
    """Return what ``subprocess.run`` should receive for ``command`` on this platform.

    Tokens are already escaped for the batch or shell script. On Windows they
    are joined into one command line so cmd.exe sees the doubled quotes as is;
    only unquoted tokens containing spaces get an outer pair of quotes.
    """
    if windows:
        return " ".join(
            quote_whole_token(token) if " " in token and not token.startswith('"') else token
            for token in command
        )
    return list(command)


def _launch_process(command: tuple[str, ...], cwd: Path, environ: Mapping[str, str]) -> int:
    """Run the CLI script, wait for it and return its exit code."""
    try:
        completed = subprocess.run(
            process_arguments(command), cwd=cwd, env=dict(environ), check=False
        )
    except FileNotFoundError as exc:
        raise RunExecutionError(f"Total Test CLI script not found: {command[0]}") from exc
    except OSError as exc:
        raise RunExecutionError(
            f"Unable to launch Total Test CLI {command[0]}: {exc}"
        ) from exc
    return completed.returncode
