"""Feature gates keyed on the installed Total Test CLI version."""

from __future__ import annotations

from dataclasses import dataclass

from .tool_version import ToolVersion, is_at_least

UNIT_MINIMUM_VERSION = "18.2.4"
FUNCTIONAL_MINIMUM_VERSION = "19.6.4"

NEW_EXTENSIONS_VERSION = "20.02.01"
DEFAULT_OUTPUT_FOLDER_VERSION = "20.03.01"
LOCAL_CONFIG_VERSION = "20.04.01"
HOST_CONNECTION_VERSION = "20.05.01"
CONTEXT_VARIABLES_VERSION = "20.09.02"


@dataclass(frozen=True)
class VersionGate:
    """Soft per-feature checks against one installed CLI version.

    Each optional capability of the CLI is unlocked independently once the
    installed version reaches the release that introduced it. An unknown
    version unlocks nothing.
    """

    installed: ToolVersion | None

    def is_at_least(self, required: ToolVersion | str) -> bool:
        return is_at_least(self.installed, required)

    @property
    def uses_new_file_extensions(self) -> bool:
        return self.is_at_least(NEW_EXTENSIONS_VERSION)

    @property
    def uses_default_output_folder(self) -> bool:
        return self.is_at_least(DEFAULT_OUTPUT_FOLDER_VERSION)

    @property
    def supports_local_config(self) -> bool:
        return self.is_at_least(LOCAL_CONFIG_VERSION)

    @property
    def supports_host_connections(self) -> bool:
        return self.is_at_least(HOST_CONNECTION_VERSION)

    @property
    def supports_context_variables(self) -> bool:
        return self.is_at_least(CONTEXT_VARIABLES_VERSION)

    @property
    def supports_server_credentials(self) -> bool:
        return self.is_at_least(CONTEXT_VARIABLES_VERSION)

    @property
    def supports_enterprise_data(self) -> bool:
        return self.is_at_least(CONTEXT_VARIABLES_VERSION)
