"""Arguments for the functional test CLI (``TotalTestFTCLI``)."""

from __future__ import annotations

import logging

from total_test_runner.cli_compatibility import HOST_CONNECTION_VERSION
from total_test_runner.configuration import ByEnvironmentId, RunConfiguration
from total_test_runner.configuration.runtime_settings import DEFAULT_SOURCE_FOLDER
from total_test_runner.host_access import HostPortError, parse_host_port

from .argument_list import ArgumentList
from .build_context import ArgumentBuildError, BuildContext
from .connection_resolution import resolve_credential, resolve_host_connection

_LOGGER = logging.getLogger("total_test_runner.argument_building")

TOTAL_TEST_WEBAPP = "totaltestapi"
CURRENT_FOLDER = "."


def repository_url(server_url: str) -> str:
    """Return the repository API URL for a Total Test server URL."""
    url = server_url.strip()
    if not url.endswith("/"):
        url += "/"
    return f"{url}{TOTAL_TEST_WEBAPP}/"


def build_functional_arguments(run: RunConfiguration, context: BuildContext) -> ArgumentList:
    """Assemble the ``TotalTestFTCLI`` command line for one functional test run.

    Args:
      run: Functional test step configuration.
      context: Script path, workspace, version gate and collaborators.

    Returns:
      The ordered argument list, script path first.

    Raises:
      ArgumentBuildError: If the connection, credentials or enterprise data
        settings cannot be resolved.
    """
    arguments = ArgumentList().add_value(context.script_path)
    arguments.add_option("-data", context.cli_data_directory)
    _add_authentication(arguments, run, context)

    credential = resolve_credential(context.credentials, run.credentials_id)
    arguments.add_option("-u", credential.username)
    arguments.add_option("-p", credential.password, masked=True)

    _add_folder(arguments, run, context)
    _add_switches(arguments, run)
    _add_value_options(arguments, run)
    _add_code_coverage(arguments, run)
    _add_local_config(arguments, run, context)
    _add_server_credentials(arguments, run, context)
    _add_context_variables(arguments, run, context)
    _add_enterprise_data(arguments, run, context)
    return arguments


def _add_authentication(
    arguments: ArgumentList, run: RunConfiguration, context: BuildContext
) -> None:
    if isinstance(run.connection, ByEnvironmentId):
        if not run.server_url:
            raise ArgumentBuildError("A server URL is required when running on an environment id.")
        arguments.add_option("-e", run.connection.environment_id)
        arguments.add_option("-s", repository_url(run.server_url))
        _LOGGER.info("Repository URL: %s", repository_url(run.server_url))
        return

    if not context.gate.supports_host_connections:
        raise ArgumentBuildError(
            f"Host connections require Total Test CLI {HOST_CONNECTION_VERSION} or later "
            f"(installed: {context.gate.installed or 'unknown'})."
        )
    connection = resolve_host_connection(run.connection, context.connections)
    arguments.add_option("-host", connection.host)
    arguments.add_option("-port", connection.port)
    arguments.add_option("-protocol", connection.protocol)
    arguments.add_option("-codepage", connection.code_page)
    if run.server_url:
        arguments.add_option("-s", repository_url(run.server_url))


def _add_folder(arguments: ArgumentList, run: RunConfiguration, context: BuildContext) -> None:
    folder = run.test_path.strip() or CURRENT_FOLDER
    _LOGGER.info("Folder path: %s", folder)
    arguments.add_option("-f", folder)
    if folder == CURRENT_FOLDER or not context.is_absolute(folder):
        arguments.add_option("-r", context.workspace)


def _add_switches(arguments: ArgumentList, run: RunConfiguration) -> None:
    switches = (
        ("-R", run.recursive),
        ("-x", run.upload_to_server),
        ("-h", run.halt_at_failure),
        ("-usestubs", run.use_stubs),
        ("-deletetemp", run.delete_temp),
        ("-cj", run.compare_junits),
        ("-sc", run.use_scenarios),
        ("-ccclear", run.code_coverage.clear_stats),
    )
    for flag, enabled in switches:
        if enabled:
            arguments.add(flag)


def _add_value_options(arguments: ArgumentList, run: RunConfiguration) -> None:
    if run.source_folder and run.source_folder.upper() != DEFAULT_SOURCE_FOLDER:
        arguments.add_option("-S", run.source_folder)
    if run.report_folder:
        arguments.add_option("-g", run.report_folder)
        arguments.add("-G")
    if run.sonar_version:
        arguments.add_option("-v", run.sonar_version)
    if run.accounting_info:
        arguments.add_option("-a", run.accounting_info)
    if run.log_level:
        arguments.add_option("-l", run.log_level)
    if run.program_selection is not None and run.program_selection.value:
        arguments.add_option(run.program_selection.mode.value, run.program_selection.value)


def _add_code_coverage(arguments: ArgumentList, run: RunConfiguration) -> None:
    if not run.code_coverage.collect:
        return
    target = run.code_coverage.target
    if target is None:
        _LOGGER.debug("Code coverage repository, system or test id is missing; skipping.")
        return
    repository, system, test_id = target
    arguments.add_option("-ccrepo", repository)
    arguments.add_option("-ccsystem", system)
    arguments.add_option("-cctestid", test_id)


def _add_local_config(
    arguments: ArgumentList, run: RunConfiguration, context: BuildContext
) -> None:
    if not run.local_config:
        return
    if not context.gate.supports_local_config:
        _LOGGER.warning("Installed Total Test CLI does not support local configuration; skipping.")
        return
    arguments.add("-localconfig")
    arguments.add_option("-localconfiglocation", run.local_config_location)


def _add_server_credentials(
    arguments: ArgumentList, run: RunConfiguration, context: BuildContext
) -> None:
    if not run.server_credentials_id:
        return
    if not context.gate.supports_server_credentials:
        _LOGGER.warning("Installed Total Test CLI does not support server credentials; skipping.")
        return
    credential = resolve_credential(context.credentials, run.server_credentials_id)
    arguments.add_option("-cesu", credential.username)
    arguments.add_option("-cesp", credential.password, masked=True)


def _add_context_variables(
    arguments: ArgumentList, run: RunConfiguration, context: BuildContext
) -> None:
    if not run.context_variables:
        return
    if not context.gate.supports_context_variables:
        _LOGGER.warning("Installed Total Test CLI does not support context variables; skipping.")
        return
    arguments.add_option("-ctxvars", run.context_variables)


def _add_enterprise_data(
    arguments: ArgumentList, run: RunConfiguration, context: BuildContext
) -> None:
    settings = run.enterprise_data
    if settings is None:
        return
    if not context.gate.supports_enterprise_data:
        _LOGGER.warning("Installed Total Test CLI does not support enterprise data; skipping.")
        return
    try:
        host, port = parse_host_port(settings.host_port)
    except HostPortError as exc:
        raise ArgumentBuildError(f"Enterprise data server: {exc}") from exc
    arguments.add_option("-edserver", host)
    arguments.add_option("-edport", port)
    if settings.protocol:
        arguments.add_option("-edprotocol", settings.protocol)
