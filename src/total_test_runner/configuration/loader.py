"""Configuration loader service."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from total_test_runner.host_access.access_models import (
    DEFAULT_CODE_PAGE,
    DEFAULT_PROTOCOL,
    HostConnection,
    StoredCredential,
)
from total_test_runner.host_access.host_connections import HostPortError, parse_host_port

from .legacy_migration import STEP_SECTIONS, migrate_configuration_document
from .runtime_settings import (
    CONFIG_VERSION,
    DEFAULT_LOCAL_CONFIG_LOCATION,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REPORT_FOLDER,
    DEFAULT_SONAR_VERSION,
    DEFAULT_SOURCE_FOLDER,
    LOG_LEVELS,
    MAX_ACCOUNTING_INFO_LENGTH,
    SONAR_VERSIONS,
    ByEnvironmentId,
    ByHostPort,
    ById,
    CliSettings,
    CodeCoverageSettings,
    Configuration,
    ConnectionRef,
    EnterpriseDataSettings,
    ProgramSelection,
    ProgramSelectionMode,
    RunConfiguration,
    RunnerKind,
    TargetOS,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(
    config_path: Path | str, *, environ: Mapping[str, str] | None = None
) -> Configuration:
    """Load, migrate and validate the test configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    version = parsed.get("version", 1)
    if version not in (1, CONFIG_VERSION):
        raise ConfigurationError(f"Unsupported configuration version: {version!r}")
    document = migrate_configuration_document(parsed)

    cli = _parse_cli_section(document.get("cli"), path.parent)
    connections = _parse_host_connections(document.get("host_connections"))
    credentials = _parse_credentials(
        document.get("credentials"), os.environ if environ is None else environ
    )
    run = _parse_step_section(document)

    return Configuration(
        path=path,
        cli=cli,
        connections=connections,
        credentials=credentials,
        run=run,
    )


def _parse_cli_section(value: Any, base_path: Path) -> CliSettings:
    section = _require_mapping(value, "cli")
    shared = _optional_string(section.get("location"), "cli.location")
    linux_location = _optional_string(section.get("linux_location"), "cli.linux_location")
    windows_location = _optional_string(section.get("windows_location"), "cli.windows_location")
    linux_location = linux_location or shared
    windows_location = windows_location or shared
    if not linux_location and not windows_location:
        raise ConfigurationError(
            "cli.location (or cli.linux_location / cli.windows_location) is required."
        )
    target_os_raw = _require_non_empty_string(
        section.get("target_os", TargetOS.AUTO.value), "cli.target_os"
    ).lower()
    try:
        target_os = TargetOS(target_os_raw)
    except ValueError as exc:
        raise ConfigurationError(
            "cli.target_os must be one of: " + ", ".join(item.value for item in TargetOS)
        ) from exc
    return CliSettings(
        linux_location=_resolve_location(base_path, linux_location),
        windows_location=windows_location,
        target_os=target_os,
    )


def _parse_host_connections(value: Any) -> tuple[HostConnection, ...]:
    entries = _optional_sequence(value, "host_connections")
    connections: list[HostConnection] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        label = f"host_connections[{index}]"
        mapping = _require_mapping(entry, label)
        connection_id = _require_non_empty_string(mapping.get("id"), f"{label}.id")
        if connection_id in seen:
            raise ConfigurationError(f"Duplicate host connection id '{connection_id}'.")
        seen.add(connection_id)
        host_port = _require_non_empty_string(mapping.get("host_port"), f"{label}.host_port")
        try:
            host, port = parse_host_port(host_port)
        except HostPortError as exc:
            raise ConfigurationError(f"{label}.host_port: {exc}") from exc
        connections.append(
            HostConnection(
                connection_id=connection_id,
                host=host,
                port=port,
                description=_optional_string(mapping.get("description"), f"{label}.description")
                or "",
                code_page=_optional_string(mapping.get("code_page"), f"{label}.code_page")
                or DEFAULT_CODE_PAGE,
                protocol=_optional_string(mapping.get("protocol"), f"{label}.protocol")
                or DEFAULT_PROTOCOL,
            )
        )
    return tuple(connections)


def _parse_credentials(value: Any, environ: Mapping[str, str]) -> tuple[StoredCredential, ...]:
    entries = _optional_sequence(value, "credentials")
    credentials: list[StoredCredential] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        label = f"credentials[{index}]"
        mapping = _require_mapping(entry, label)
        credentials_id = _require_non_empty_string(mapping.get("id"), f"{label}.id")
        if credentials_id in seen:
            raise ConfigurationError(f"Duplicate credentials id '{credentials_id}'.")
        seen.add(credentials_id)
        username = _require_non_empty_string(mapping.get("username"), f"{label}.username")
        credentials.append(
            StoredCredential(
                credentials_id=credentials_id,
                username=username,
                password=_resolve_password(mapping, label, environ),
            )
        )
    return tuple(credentials)


def _resolve_password(mapping: Mapping[str, Any], label: str, environ: Mapping[str, str]) -> str:
    password = mapping.get("password")
    password_env = mapping.get("password_env")
    if password is not None and password_env is not None:
        raise ConfigurationError(f"{label} must not set both password and password_env.")
    if password_env is not None:
        variable = _require_non_empty_string(password_env, f"{label}.password_env")
        if variable not in environ:
            raise ConfigurationError(
                f"{label}.password_env refers to unset environment variable '{variable}'."
            )
        return environ[variable]
    if password is None:
        raise ConfigurationError(f"{label} requires either password or password_env.")
    if not isinstance(password, str):
        raise ConfigurationError(f"{label}.password must be a string.")
    return password


def _parse_step_section(document: Mapping[str, Any]) -> RunConfiguration:
    present = [name for name in STEP_SECTIONS if document.get(name)]
    if len(present) != 1:
        raise ConfigurationError(
            "Exactly one step section (functional_test or unit_test) must be provided."
        )
    section_name = present[0]
    section = _require_mapping(document[section_name], section_name)
    if section_name == "unit_test":
        return _parse_unit_test_section(section)
    return _parse_functional_test_section(section)


def _parse_functional_test_section(section: Mapping[str, Any]) -> RunConfiguration:
    name = "functional_test"
    connection = _parse_connection(section.get("connection"), f"{name}.connection")
    accounting_info = _optional_string(section.get("accounting_info"), f"{name}.accounting_info")
    if accounting_info and len(accounting_info) > MAX_ACCOUNTING_INFO_LENGTH:
        raise ConfigurationError(
            f"{name}.accounting_info must not exceed {MAX_ACCOUNTING_INFO_LENGTH} characters."
        )
    log_level = _require_choice(
        section.get("log_level", DEFAULT_LOG_LEVEL), f"{name}.log_level", LOG_LEVELS
    )
    sonar_version = _require_choice(
        str(section.get("sonar_version", DEFAULT_SONAR_VERSION)),
        f"{name}.sonar_version",
        SONAR_VERSIONS,
    )
    return RunConfiguration(
        runner=RunnerKind.FUNCTIONAL,
        connection=connection,
        credentials_id=_require_non_empty_string(
            section.get("credentials_id"), f"{name}.credentials_id"
        ),
        server_url=_optional_string(section.get("server_url"), f"{name}.server_url"),
        server_credentials_id=_optional_string(
            section.get("server_credentials_id"), f"{name}.server_credentials_id"
        ),
        test_path=_optional_string(section.get("folder_path"), f"{name}.folder_path") or "",
        use_stubs=_optional_bool(section.get("use_stubs"), f"{name}.use_stubs", False),
        delete_temp=_optional_bool(section.get("delete_temp"), f"{name}.delete_temp", False),
        recursive=_optional_bool(section.get("recursive"), f"{name}.recursive", False),
        upload_to_server=_optional_bool(
            section.get("upload_to_server"), f"{name}.upload_to_server", False
        ),
        halt_at_failure=_optional_bool(
            section.get("halt_at_failure"), f"{name}.halt_at_failure", False
        ),
        compare_junits=_optional_bool(
            section.get("compare_junits"), f"{name}.compare_junits", False
        ),
        use_scenarios=_optional_bool(section.get("use_scenarios"), f"{name}.use_scenarios", False),
        source_folder=_optional_string(section.get("source_folder"), f"{name}.source_folder")
        or DEFAULT_SOURCE_FOLDER,
        report_folder=_optional_string(
            section.get("report_folder", DEFAULT_REPORT_FOLDER), f"{name}.report_folder"
        )
        or "",
        sonar_version=sonar_version,
        accounting_info=accounting_info,
        log_level=log_level,
        program_selection=_parse_program_selection(
            section.get("program_selection"), f"{name}.program_selection"
        ),
        code_coverage=_parse_code_coverage(
            section.get("code_coverage"), f"{name}.code_coverage"
        ),
        context_variables=_parse_context_variables(
            section.get("context_variables"), f"{name}.context_variables"
        ),
        local_config=_optional_bool(section.get("local_config"), f"{name}.local_config", False),
        local_config_location=_optional_string(
            section.get("local_config_location"), f"{name}.local_config_location"
        )
        or DEFAULT_LOCAL_CONFIG_LOCATION,
        enterprise_data=_parse_enterprise_data(
            section.get("enterprise_data"), f"{name}.enterprise_data"
        ),
        stop_if_test_fails_or_threshold_reached=_optional_bool(
            section.get("stop_if_test_fails_or_threshold_reached"),
            f"{name}.stop_if_test_fails_or_threshold_reached",
            True,
        ),
        halt_pipeline_on_failure=_optional_bool(
            section.get("halt_pipeline_on_failure"), f"{name}.halt_pipeline_on_failure", True
        ),
    )


def _parse_unit_test_section(section: Mapping[str, Any]) -> RunConfiguration:
    name = "unit_test"
    return RunConfiguration(
        runner=RunnerKind.UNIT,
        connection=_parse_connection(section.get("connection"), f"{name}.connection"),
        credentials_id=_require_non_empty_string(
            section.get("credentials_id"), f"{name}.credentials_id"
        ),
        test_path=_optional_string(section.get("project_folder"), f"{name}.project_folder") or "",
        test_suite=_optional_string(section.get("test_suite"), f"{name}.test_suite"),
        jcl=_optional_string(section.get("jcl"), f"{name}.jcl"),
        dataset_hlq=_optional_string(section.get("dataset_hlq"), f"{name}.dataset_hlq"),
        use_stubs=_optional_bool(section.get("use_stubs"), f"{name}.use_stubs", True),
        delete_temp=_optional_bool(section.get("delete_temp"), f"{name}.delete_temp", True),
        code_coverage=_parse_code_coverage(
            section.get("code_coverage"), f"{name}.code_coverage"
        ),
        halt_pipeline_on_failure=_optional_bool(
            section.get("halt_pipeline_on_failure"), f"{name}.halt_pipeline_on_failure", True
        ),
    )


def _parse_connection(value: Any, label: str) -> ConnectionRef:
    section = _require_mapping(value, label)
    candidates = [
        key for key in ("environment_id", "connection_id", "host_port") if section.get(key)
    ]
    if len(candidates) != 1:
        raise ConfigurationError(
            f"{label} requires exactly one of environment_id, connection_id or host_port."
        )
    key = candidates[0]
    raw = _require_non_empty_string(section[key], f"{label}.{key}")
    if key == "environment_id":
        return ByEnvironmentId(environment_id=raw)
    if key == "connection_id":
        return ById(connection_id=raw)
    try:
        host, port = parse_host_port(raw)
    except HostPortError as exc:
        raise ConfigurationError(f"{label}.host_port: {exc}") from exc
    return ByHostPort(host=host, port=port)


def _parse_code_coverage(value: Any, label: str) -> CodeCoverageSettings:
    if value is None:
        return CodeCoverageSettings()
    section = _require_mapping(value, label)
    repository = _optional_string(section.get("repository"), f"{label}.repository")
    return CodeCoverageSettings(
        collect=_optional_bool(section.get("collect"), f"{label}.collect", bool(repository)),
        repository=repository,
        system=_optional_string(section.get("system"), f"{label}.system"),
        test_id=_optional_string(section.get("test_id"), f"{label}.test_id"),
        program_type=_optional_string(section.get("program_type"), f"{label}.program_type"),
        clear_stats=_optional_bool(section.get("clear_stats"), f"{label}.clear_stats", False),
        threshold=_require_int_in_range(
            section.get("threshold", 0), f"{label}.threshold", 0, 100
        ),
    )


def _parse_program_selection(value: Any, label: str) -> ProgramSelection | None:
    if value is None:
        return None
    section = _require_mapping(value, label)
    candidates = [key for key in ("json_file", "program_list") if section.get(key)]
    if len(candidates) != 1:
        raise ConfigurationError(f"{label} requires exactly one of json_file or program_list.")
    key = candidates[0]
    mode = (
        ProgramSelectionMode.JSON_FILE if key == "json_file" else ProgramSelectionMode.PROGRAM_LIST
    )
    raw = section[key]
    if isinstance(raw, Sequence) and not isinstance(raw, str):
        raw = ",".join(_normalize_string_sequence(raw, f"{label}.{key}"))
    return ProgramSelection(mode=mode, value=_require_non_empty_string(raw, f"{label}.{key}"))


def _parse_context_variables(value: Any, label: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        pairs = [f"{key}={item}" for key, item in value.items()]
        return ",".join(pairs) or None
    return _optional_string(value, label)


def _parse_enterprise_data(value: Any, label: str) -> EnterpriseDataSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, label)
    host_port = _optional_string(section.get("host_port"), f"{label}.host_port")
    if not host_port:
        return None
    return EnterpriseDataSettings(
        host_port=host_port,
        protocol=_optional_string(section.get("protocol"), f"{label}.protocol"),
    )


def _normalize_string_sequence(value: Sequence[Any], field_name: str) -> tuple[str, ...]:
    normalized = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(f"{field_name} entries must be strings.")
        stripped = item.strip()
        if stripped:
            normalized.append(stripped)
    return tuple(normalized)


def _resolve_location(base_path: Path, raw_path: str | None) -> str | None:
    if raw_path is None:
        return None
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return str((base_path / candidate).resolve())
    return raw_path


def _optional_sequence(value: Any, section_name: str) -> Sequence[Any]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a list.")
    return value


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_choice(value: Any, field_name: str, choices: Sequence[str]) -> str:
    normalized = _require_non_empty_string(value, field_name).upper()
    if normalized not in choices:
        raise ConfigurationError(f"{field_name} must be one of: {', '.join(choices)}.")
    return normalized


def _require_int_in_range(value: Any, field_name: str, minimum: int, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < minimum or value > maximum:
        raise ConfigurationError(f"{field_name} must be between {minimum} and {maximum}.")
    return value
