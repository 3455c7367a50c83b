"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .legacy_migration import migrate_configuration_document, migrate_step_section
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
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

__all__ = [
    "ByEnvironmentId",
    "ByHostPort",
    "ById",
    "CliSettings",
    "CodeCoverageSettings",
    "Configuration",
    "ConnectionRef",
    "EnterpriseDataSettings",
    "ProgramSelection",
    "ProgramSelectionMode",
    "RunConfiguration",
    "RunnerKind",
    "TargetOS",
    "ConfigurationError",
    "load_configuration",
    "migrate_configuration_document",
    "migrate_step_section",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
