"""Inputs shared by the argument builders."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath, PureWindowsPath

from total_test_runner.cli_compatibility import VersionGate
from total_test_runner.configuration import ConfigurationError
from total_test_runner.host_access import CredentialStore, HostConnectionRegistry

CLI_WORKSPACE_DIRECTORY = "TopazCliWkspc"


class ArgumentBuildError(ConfigurationError):
    """Raised when a run configuration cannot be turned into CLI arguments."""


@dataclass(frozen=True)
class BuildContext:
    """Environment of one argument build.

    ``workspace`` and ``script_path`` are paths on the machine that runs the
    CLI, so they are handled with the path flavour of the target OS.
    """

    script_path: str
    workspace: str
    is_shell: bool
    gate: VersionGate
    credentials: CredentialStore
    connections: HostConnectionRegistry

    def _path(self, *parts: str) -> PurePath:
        path_type = PurePosixPath if self.is_shell else PureWindowsPath
        return path_type(*parts)

    def workspace_path(self, *parts: str) -> str:
        return str(self._path(self.workspace, *parts))

    def is_absolute(self, path: str) -> bool:
        return self._path(path).is_absolute()

    @property
    def cli_data_directory(self) -> str:
        return self.workspace_path(CLI_WORKSPACE_DIRECTORY)
