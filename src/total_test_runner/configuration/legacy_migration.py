"""Migration of version 1 pipeline-style step settings to the version 2 layout.

Version 1 step sections use the flat camelCase field names of the original
pipeline syntax (``hostPort``, ``connectionId``, ``selectProgramsOption`` and
friends) and encode choices through parallel string/boolean fields. Version 2
nests the connection, code coverage and program selection into their own
mappings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .runtime_settings import CONFIG_VERSION, DEFAULT_JSON_FILE, ProgramSelectionMode

_LOGGER = logging.getLogger("total_test_runner.configuration")

STEP_SECTIONS: tuple[str, ...] = ("functional_test", "unit_test")

_ENVIRONMENT_RADIO = "-e"
_HOST_CONNECTION_RADIO = "-hci"

_FIELD_RENAMES: Mapping[str, str] = {
    "credentialsId": "credentials_id",
    "serverUrl": "server_url",
    "serverCredentialsId": "server_credentials_id",
    "folderPath": "folder_path",
    "projectFolder": "project_folder",
    "testSuite": "test_suite",
    "hlq": "dataset_hlq",
    "useStubs": "use_stubs",
    "deleteTemp": "delete_temp",
    "uploadToServer": "upload_to_server",
    "haltAtFailure": "halt_at_failure",
    "compareJUnits": "compare_junits",
    "useScenarios": "use_scenarios",
    "sourceFolder": "source_folder",
    "reportFolder": "report_folder",
    "sonarVersion": "sonar_version",
    "accountInfo": "accounting_info",
    "logLevel": "log_level",
    "contextVariables": "context_variables",
    "localConfig": "local_config",
    "localConfigLocation": "local_config_location",
    "stopIfTestFailsOrThresholdReached": "stop_if_test_fails_or_threshold_reached",
    "haltPipelineOnFailure": "halt_pipeline_on_failure",
}

_CODE_COVERAGE_RENAMES: Mapping[str, str] = {
    "ccRepo": "repository",
    "ccSystem": "system",
    "ccTestId": "test_id",
    "ccPgmType": "program_type",
    "ccClearStats": "clear_stats",
    "ccThreshold": "threshold",
    "ccThreshhold": "threshold",
    "collectCodeCoverage": "collect",
    "collectCCRepository": "repository",
    "collectCCSystem": "system",
    "collectCCTestID": "test_id",
    "clearCodeCoverage": "clear_stats",
}

_ENTERPRISE_DATA_RENAMES: Mapping[str, str] = {
    "enterpriseDataHostPort": "host_port",
    "enterpriseDataProtocol": "protocol",
}

_PROGRAM_SELECTION_KEYS = ("selectProgramsOption", "selectPrograms", "jsonFile", "programList")
_CONNECTION_KEYS = ("hostPort", "connectionId", "environmentId", "selectEnvironmentRadio")


def needs_migration(document: Mapping[str, Any]) -> bool:
    """Return True when the document predates the version 2 layout."""
    return document.get("version", 1) != CONFIG_VERSION


def migrate_configuration_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return a version 2 copy of ``document``.

    Step sections are rewritten with :func:`migrate_step_section`; every other
    section is copied unchanged.
    """
    migrated = dict(document)
    if not needs_migration(document):
        return migrated
    _LOGGER.info("Migrating test configuration to version %s.", CONFIG_VERSION)
    for section_name in STEP_SECTIONS:
        section = document.get(section_name)
        if isinstance(section, Mapping):
            migrated[section_name] = migrate_step_section(section)
    migrated["version"] = CONFIG_VERSION
    return migrated


def migrate_step_section(section: Mapping[str, Any]) -> dict[str, Any]:
    """Map legacy camelCase step fields onto the version 2 step layout."""
    migrated: dict[str, Any] = {}
    code_coverage: dict[str, Any] = dict(section.get("code_coverage") or {})
    enterprise_data: dict[str, Any] = dict(section.get("enterprise_data") or {})

    for key, value in section.items():
        if key in _CONNECTION_KEYS or key in _PROGRAM_SELECTION_KEYS:
            continue
        if key in _FIELD_RENAMES:
            migrated[_FIELD_RENAMES[key]] = value
        elif key in _CODE_COVERAGE_RENAMES:
            code_coverage[_CODE_COVERAGE_RENAMES[key]] = _coerce_threshold(key, value)
        elif key in _ENTERPRISE_DATA_RENAMES:
            enterprise_data[_ENTERPRISE_DATA_RENAMES[key]] = value
        elif key not in ("code_coverage", "enterprise_data"):
            migrated[key] = value

    connection = _migrate_connection(section)
    if connection:
        migrated["connection"] = connection
    program_selection = _migrate_program_selection(section)
    if program_selection:
        migrated["program_selection"] = program_selection
    if code_coverage:
        migrated["code_coverage"] = code_coverage
    if enterprise_data:
        migrated["enterprise_data"] = enterprise_data
    return migrated


def _migrate_connection(section: Mapping[str, Any]) -> dict[str, Any] | None:
    existing = section.get("connection")
    if isinstance(existing, Mapping):
        return dict(existing)

    radio = section.get("selectEnvironmentRadio")
    environment_id = _non_empty(section.get("environmentId"))
    connection_id = _non_empty(section.get("connectionId"))
    host_port = _non_empty(section.get("hostPort"))

    if radio == _ENVIRONMENT_RADIO and environment_id:
        return {"environment_id": environment_id}
    if radio == _HOST_CONNECTION_RADIO and connection_id:
        return {"connection_id": connection_id}
    if connection_id:
        return {"connection_id": connection_id}
    if host_port:
        _LOGGER.info("Migrating bare hostPort '%s' to a host:port connection.", host_port)
        return {"host_port": host_port}
    if environment_id:
        return {"environment_id": environment_id}
    return None


def _migrate_program_selection(section: Mapping[str, Any]) -> dict[str, Any] | None:
    existing = section.get("program_selection")
    if isinstance(existing, Mapping):
        return dict(existing)
    if not section.get("selectProgramsOption"):
        return None
    if section.get("selectPrograms") == ProgramSelectionMode.PROGRAM_LIST.value:
        return {"program_list": section.get("programList") or ""}
    return {"json_file": section.get("jsonFile") or DEFAULT_JSON_FILE}


def _coerce_threshold(key: str, value: Any) -> Any:
    # Pipeline syntax stored the threshold as text.
    if _CODE_COVERAGE_RENAMES[key] != "threshold" or not isinstance(value, str):
        return value
    return int(value.strip()) if value.strip().isdigit() else value


def _non_empty(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
