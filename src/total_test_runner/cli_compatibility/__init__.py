"""Total Test CLI compatibility exports."""

from .tool_version import (
    VERSION_FILENAME,
    ToolCompatibilityError,
    ToolVersion,
    ToolVersionError,
    assert_compatible,
    is_at_least,
    read_tool_version,
)
from .version_gate import (
    CONTEXT_VARIABLES_VERSION,
    DEFAULT_OUTPUT_FOLDER_VERSION,
    FUNCTIONAL_MINIMUM_VERSION,
    HOST_CONNECTION_VERSION,
    LOCAL_CONFIG_VERSION,
    NEW_EXTENSIONS_VERSION,
    UNIT_MINIMUM_VERSION,
    VersionGate,
)

__all__ = [
    "VERSION_FILENAME",
    "ToolCompatibilityError",
    "ToolVersion",
    "ToolVersionError",
    "assert_compatible",
    "is_at_least",
    "read_tool_version",
    "CONTEXT_VARIABLES_VERSION",
    "DEFAULT_OUTPUT_FOLDER_VERSION",
    "FUNCTIONAL_MINIMUM_VERSION",
    "HOST_CONNECTION_VERSION",
    "LOCAL_CONFIG_VERSION",
    "NEW_EXTENSIONS_VERSION",
    "UNIT_MINIMUM_VERSION",
    "VersionGate",
]
