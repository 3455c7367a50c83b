"""Configuration domain entities."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from total_test_runner.host_access.access_models import HostConnection, StoredCredential

CONFIG_VERSION = 2

DEFAULT_SOURCE_FOLDER = "COBOL"
DEFAULT_REPORT_FOLDER = "TTTReport"
DEFAULT_SONAR_VERSION = "6"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOCAL_CONFIG_LOCATION = "./TotalTestConfiguration"
DEFAULT_JSON_FILE = "changedPrograms.json"
MAX_ACCOUNTING_INFO_LENGTH = 52

LOG_LEVELS: tuple[str, ...] = ("ALL", "TRACE", "DEBUG", "INFO", "WARNING", "ERROR")
SONAR_VERSIONS: tuple[str, ...] = ("5", "6")


class RunnerKind(str, Enum):
    """Which Total Test CLI the step drives."""

    FUNCTIONAL = "functional"
    UNIT = "unit"


class TargetOS(str, Enum):
    """Operating system of the machine that runs the CLI script."""

    AUTO = "auto"
    UNIX = "unix"
    WINDOWS = "windows"


class ProgramSelectionMode(str, Enum):
    """How the programs under test are selected; the value is the CLI flag."""

    JSON_FILE = "-pnf"
    PROGRAM_LIST = "-pn"


@dataclass(frozen=True)
class ById:
    """Host connection referenced by its registry id."""

    connection_id: str


@dataclass(frozen=True)
class ByHostPort:
    """Host connection given as a raw host and port."""

    host: str
    port: str


@dataclass(frozen=True)
class ByEnvironmentId:
    """Execution environment defined on the Total Test repository server."""

    environment_id: str


ConnectionRef = ById | ByHostPort | ByEnvironmentId


@dataclass(frozen=True)
class ProgramSelection:
    """Programs whose tests should run."""

    mode: ProgramSelectionMode
    value: str


@dataclass(frozen=True)
class CodeCoverageSettings:
    """Code coverage collection and threshold settings."""

    collect: bool = False
    repository: str | None = None
    system: str | None = None
    test_id: str | None = None
    program_type: str | None = None
    clear_stats: bool = False
    threshold: int = 0

    @property
    def is_complete(self) -> bool:
        return bool(self.repository and self.system and self.test_id)

    @property
    def target(self) -> tuple[str, str, str] | None:
        """Upper-cased repository, system and test id, or None when any is missing."""
        if not (self.repository and self.system and self.test_id):
            return None
        return self.repository.upper(), self.system.upper(), self.test_id.upper()


@dataclass(frozen=True)
class EnterpriseDataSettings:
    """Enterprise data server the CLI should use."""

    host_port: str
    protocol: str | None = None


@dataclass(frozen=True)
class CliSettings:
    """Location of the Total Test CLI installation."""

    linux_location: str | None
    windows_location: str | None
    target_os: TargetOS = TargetOS.AUTO

    @property
    def uses_shell(self) -> bool:
        if self.target_os is TargetOS.AUTO:
            return os.name != "nt"
        return self.target_os is TargetOS.UNIX

    @property
    def location(self) -> str | None:
        return self.linux_location if self.uses_shell else self.windows_location


@dataclass(frozen=True)
class RunConfiguration:  # pylint: disable=too-many-instance-attributes
    """One Total Test step, immutable once a run starts."""

    runner: RunnerKind
    connection: ConnectionRef
    credentials_id: str
    version: int = CONFIG_VERSION
    server_url: str | None = None
    server_credentials_id: str | None = None
    test_path: str = ""
    test_suite: str | None = None
    jcl: str | None = None
    dataset_hlq: str | None = None
    use_stubs: bool = True
    delete_temp: bool = True
    recursive: bool = False
    upload_to_server: bool = False
    halt_at_failure: bool = False
    compare_junits: bool = False
    use_scenarios: bool = False
    source_folder: str = DEFAULT_SOURCE_FOLDER
    report_folder: str = DEFAULT_REPORT_FOLDER
    sonar_version: str = DEFAULT_SONAR_VERSION
    accounting_info: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    program_selection: ProgramSelection | None = None
    code_coverage: CodeCoverageSettings = field(default_factory=CodeCoverageSettings)
    context_variables: str | None = None
    local_config: bool = False
    local_config_location: str = DEFAULT_LOCAL_CONFIG_LOCATION
    enterprise_data: EnterpriseDataSettings | None = None
    stop_if_test_fails_or_threshold_reached: bool = True
    halt_pipeline_on_failure: bool = True


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    cli: CliSettings
    connections: tuple[HostConnection, ...]
    credentials: tuple[StoredCredential, ...]
    run: RunConfiguration
