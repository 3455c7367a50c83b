"""Arguments for the legacy unit test CLI (``TotalTestCLI``).

Every token has the ``-flag=value`` form. On batch targets the whole token is
wrapped in double quotes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from total_test_runner.configuration import RunConfiguration

from .argument_list import ArgumentList
from .build_context import ArgumentBuildError, BuildContext
from .connection_resolution import resolve_credential, resolve_host_connection
from .test_selection import uses_test_name_list

_LOGGER = logging.getLogger("total_test_runner.argument_building")

RUN_TEST_COMMAND = "runtest"
JENKINS_FLAG = "-jenkins"
POST_RUN_COMMANDS = "copyjunit,copysonar"


def build_unit_arguments(run: RunConfiguration, context: BuildContext) -> ArgumentList:
    """Assemble the ``TotalTestCLI`` command line for one unit test run.

    Raises:
      ArgumentBuildError: If the connection or credentials do not resolve, or
        the project folder, test suite or JCL is missing.
    """
    quote = not context.is_shell
    arguments = ArgumentList().add_value(context.script_path)
    arguments.add_option("-data", context.cli_data_directory)
    arguments.add_assignment("-command", RUN_TEST_COMMAND, quote=quote)
    arguments.add(JENKINS_FLAG)

    connection = resolve_host_connection(run.connection, context.connections)
    arguments.add_assignment("-host", connection.host, quote=quote)
    arguments.add_assignment("-port", connection.port, quote=quote)
    arguments.add_assignment("-targetencoding", connection.code_page, quote=quote)
    arguments.add_assignment("-encryptprotocol", connection.protocol, quote=quote)

    credential = resolve_credential(context.credentials, run.credentials_id)
    arguments.add_assignment("-user", credential.username, quote=quote)
    arguments.add_assignment("-pw", credential.password, quote=quote, masked=True)

    _add_project_arguments(arguments, run, context, quote)
    _add_execution_arguments(arguments, run, quote)
    _add_code_coverage_arguments(arguments, run, quote)

    arguments.add_assignment("-externaltoolsws", context.workspace, quote=quote)
    arguments.add_assignment("-postruncommands", POST_RUN_COMMANDS, quote=quote)
    return arguments


def resolve_project_folder(project_folder: str, workspace: str) -> Path:
    """Return the existing project directory for an absolute or workspace-relative path."""
    if not project_folder.strip():
        raise ArgumentBuildError("Test project folder was not specified.")
    candidate = Path(project_folder.strip())
    if not candidate.is_absolute():
        candidate = Path(workspace) / candidate
    if not candidate.is_dir():
        raise ArgumentBuildError(
            f"Test project folder '{candidate}' does not exist or is not a directory."
        )
    return candidate


def _add_project_arguments(
    arguments: ArgumentList, run: RunConfiguration, context: BuildContext, quote: bool
) -> None:
    project = resolve_project_folder(run.test_path, context.workspace)
    if not run.test_suite:
        raise ArgumentBuildError("Test suite was not specified.")
    if not run.jcl:
        raise ArgumentBuildError("JCL was not specified.")

    arguments.add_assignment("-project", str(project), quote=quote)
    if uses_test_name_list(run.test_suite):
        arguments.add_assignment("-testsuitelist", run.test_suite, quote=quote)
    else:
        arguments.add_assignment("-ts", run.test_suite, quote=quote)
    arguments.add_assignment("-jcl", run.jcl, quote=quote)


def _add_execution_arguments(arguments: ArgumentList, run: RunConfiguration, quote: bool) -> None:
    if run.dataset_hlq:
        arguments.add_assignment("-dsnhlq", run.dataset_hlq.upper(), quote=quote)
    # The unit CLI only understands the negative form of these flags.
    if not run.use_stubs:
        arguments.add_assignment("-usestubs", "false", quote=quote)
    if not run.delete_temp:
        arguments.add_assignment("-deletetemp", "false", quote=quote)


def _add_code_coverage_arguments(
    arguments: ArgumentList, run: RunConfiguration, quote: bool
) -> None:
    coverage = run.code_coverage
    target = coverage.target
    if target is None:
        if coverage.repository or coverage.system or coverage.test_id:
            _LOGGER.debug("Code coverage repository, system or test id is missing; skipping.")
        return
    repository, system, test_id = target
    arguments.add_assignment("-ccrepo", repository, quote=quote)
    arguments.add_assignment("-ccsystem", system, quote=quote)
    arguments.add_assignment("-cctestid", test_id, quote=quote)
    if coverage.program_type:
        arguments.add_assignment("-cctype", coverage.program_type, quote=quote)
    clear_stats = "true" if coverage.clear_stats else "false"
    arguments.add_assignment("-ccclearstats", clear_stats, quote=quote)
