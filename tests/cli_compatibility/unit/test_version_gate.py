"""Feature gate tests."""

from __future__ import annotations

from total_test_runner.cli_compatibility import ToolVersion, VersionGate


def _gate(version: str | None) -> VersionGate:
    return VersionGate(ToolVersion.parse(version) if version else None)


def test_unknown_version_unlocks_nothing() -> None:
    gate = _gate(None)

    assert not gate.uses_new_file_extensions
    assert not gate.uses_default_output_folder
    assert not gate.supports_local_config
    assert not gate.supports_host_connections
    assert not gate.supports_context_variables
    assert not gate.supports_server_credentials
    assert not gate.supports_enterprise_data


def test_features_unlock_at_their_release() -> None:
    assert _gate("20.02.01").uses_new_file_extensions
    assert not _gate("20.02.01").uses_default_output_folder
    assert _gate("20.03.01").uses_default_output_folder
    assert _gate("20.04.01").supports_local_config
    assert not _gate("20.04.01").supports_host_connections
    assert _gate("20.05.01").supports_host_connections
    assert not _gate("20.09.01").supports_context_variables
    assert _gate("20.09.02").supports_context_variables


def test_gates_never_regress_for_newer_versions() -> None:
    gate = _gate("23.1.0")

    assert gate.uses_new_file_extensions
    assert gate.uses_default_output_folder
    assert gate.supports_local_config
    assert gate.supports_host_connections
    assert gate.supports_server_credentials
    assert gate.supports_enterprise_data
