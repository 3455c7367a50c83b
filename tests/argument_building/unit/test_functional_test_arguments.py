"""Functional test CLI argument builder tests."""

from __future__ import annotations

import dataclasses
import logging

import pytest
from total_test_runner.argument_building import (
    MASK,
    ArgumentBuildError,
    BuildContext,
    build_functional_arguments,
    repository_url,
)
from total_test_runner.cli_compatibility import ToolVersion, VersionGate
from total_test_runner.configuration import (
    ByEnvironmentId,
    ByHostPort,
    ById,
    CodeCoverageSettings,
    ConfigurationError,
    EnterpriseDataSettings,
    ProgramSelection,
    ProgramSelectionMode,
    RunConfiguration,
    RunnerKind,
)
from total_test_runner.host_access import (
    CredentialStore,
    HostConnection,
    HostConnectionRegistry,
    StoredCredential,
)

SCRIPT = "/opt/ttt/cli/TotalTestFTCLI.sh"


def _context(version: str | None = "20.09.02") -> BuildContext:
    return BuildContext(
        script_path=SCRIPT,
        workspace="/ws",
        is_shell=True,
        gate=VersionGate(ToolVersion.parse(version) if version else None),
        credentials=CredentialStore(
            [
                StoredCredential("tso", "USER01", "secret"),
                StoredCredential("server", "SRVUSER", "srvpass"),
            ]
        ),
        connections=HostConnectionRegistry(
            [
                HostConnection(
                    connection_id="cw01",
                    host="cw01.example.com",
                    port="30947",
                    code_page="1140",
                    protocol="TLSv1.2",
                )
            ]
        ),
    )


def _run(**overrides) -> RunConfiguration:
    values = {
        "runner": RunnerKind.FUNCTIONAL,
        "connection": ByEnvironmentId("env-1"),
        "credentials_id": "tso",
        "server_url": "http://ttt:8080",
        "use_stubs": False,
        "delete_temp": False,
    }
    values.update(overrides)
    return RunConfiguration(**values)


def _value_after(tokens: tuple[str, ...], flag: str) -> str:
    return tokens[tokens.index(flag) + 1]


def test_environment_id_run_emits_arguments_in_order() -> None:
    arguments = build_functional_arguments(_run(), _context())

    assert arguments.tokens == (
        SCRIPT,
        "-data",
        "/ws/TopazCliWkspc",
        "-e",
        "env-1",
        "-s",
        "http://ttt:8080/totaltestapi/",
        "-u",
        "USER01",
        "-p",
        "secret",
        "-f",
        ".",
        "-r",
        "/ws",
        "-g",
        "TTTReport",
        "-G",
        "-v",
        "6",
        "-l",
        "INFO",
    )
    assert _value_after(arguments.display_tokens, "-p") == MASK


def test_repository_url_appends_web_app_once() -> None:
    assert repository_url("http://ttt:8080/") == "http://ttt:8080/totaltestapi/"
    assert repository_url("http://ttt:8080") == "http://ttt:8080/totaltestapi/"


def test_environment_id_requires_server_url() -> None:
    with pytest.raises(ArgumentBuildError, match="server URL"):
        build_functional_arguments(_run(server_url=None), _context())


def test_registered_host_connection_emits_host_arguments() -> None:
    arguments = build_functional_arguments(
        _run(connection=ById("cw01"), server_url=None), _context()
    )
    tokens = arguments.tokens

    assert tokens[3:11] == (
        "-host",
        "cw01.example.com",
        "-port",
        "30947",
        "-protocol",
        "TLSv1.2",
        "-codepage",
        "1140",
    )
    assert "-e" not in tokens
    assert "-s" not in tokens


def test_unregistered_host_port_uses_default_code_page_and_protocol() -> None:
    arguments = build_functional_arguments(
        _run(connection=ByHostPort(host="cw02", port="16196")), _context()
    )
    tokens = arguments.tokens

    assert _value_after(tokens, "-host") == "cw02"
    assert _value_after(tokens, "-port") == "16196"
    assert _value_after(tokens, "-protocol") == "None"
    assert _value_after(tokens, "-codepage") == "1047"
    assert _value_after(tokens, "-s") == "http://ttt:8080/totaltestapi/"


def test_host_connections_require_supporting_cli_version() -> None:
    with pytest.raises(ArgumentBuildError, match="20.05.01"):
        build_functional_arguments(_run(connection=ById("cw01")), _context("20.04.01"))


def test_unknown_connection_and_credentials_are_configuration_errors() -> None:
    with pytest.raises(ConfigurationError, match="Host connection id 'nope'"):
        build_functional_arguments(_run(connection=ById("nope")), _context())
    with pytest.raises(ArgumentBuildError, match="Credentials id 'missing'"):
        build_functional_arguments(_run(credentials_id="missing"), _context())


def test_relative_folder_gets_root_folder_and_absolute_folder_does_not() -> None:
    relative = build_functional_arguments(_run(test_path="suites/Suite1.testsuite"), _context())
    absolute = build_functional_arguments(_run(test_path="/data/suites"), _context())

    assert _value_after(relative.tokens, "-f") == "suites/Suite1.testsuite"
    assert _value_after(relative.tokens, "-r") == "/ws"
    assert _value_after(absolute.tokens, "-f") == "/data/suites"
    assert "-r" not in absolute.tokens


def test_switches_are_emitted_only_when_enabled() -> None:
    arguments = build_functional_arguments(
        _run(
            recursive=True,
            upload_to_server=True,
            halt_at_failure=True,
            use_stubs=True,
            delete_temp=True,
            compare_junits=True,
            use_scenarios=True,
            code_coverage=CodeCoverageSettings(clear_stats=True),
        ),
        _context(),
    )

    for flag in ("-R", "-x", "-h", "-usestubs", "-deletetemp", "-cj", "-sc", "-ccclear"):
        assert flag in arguments.tokens

    plain = build_functional_arguments(_run(), _context())
    for flag in ("-R", "-x", "-h", "-usestubs", "-deletetemp", "-cj", "-sc", "-ccclear"):
        assert flag not in plain.tokens


def test_optional_values_are_emitted_when_set() -> None:
    arguments = build_functional_arguments(
        _run(
            source_folder="src/cobol",
            report_folder="",
            accounting_info="ACCT1",
            log_level="DEBUG",
            program_selection=ProgramSelection(ProgramSelectionMode.JSON_FILE, "changed.json"),
        ),
        _context(),
    )
    tokens = arguments.tokens

    assert _value_after(tokens, "-S") == "src/cobol"
    assert "-g" not in tokens
    assert "-G" not in tokens
    assert _value_after(tokens, "-a") == "ACCT1"
    assert _value_after(tokens, "-l") == "DEBUG"
    assert _value_after(tokens, "-pnf") == "changed.json"


def test_default_cobol_source_folder_is_not_emitted() -> None:
    arguments = build_functional_arguments(_run(source_folder="cobol"), _context())

    assert "-S" not in arguments.tokens


def test_complete_code_coverage_group_is_upper_cased() -> None:
    arguments = build_functional_arguments(
        _run(
            code_coverage=CodeCoverageSettings(
                collect=True, repository="user01.repo", system="sys", test_id="t1"
            )
        ),
        _context(),
    )
    tokens = arguments.tokens

    assert _value_after(tokens, "-ccrepo") == "USER01.REPO"
    assert _value_after(tokens, "-ccsystem") == "SYS"
    assert _value_after(tokens, "-cctestid") == "T1"


def test_partial_code_coverage_group_is_silently_skipped() -> None:
    arguments = build_functional_arguments(
        _run(code_coverage=CodeCoverageSettings(collect=True, repository="repo", system="sys")),
        _context(),
    )

    for flag in ("-ccrepo", "-ccsystem", "-cctestid"):
        assert flag not in arguments.tokens


def test_version_gated_blocks_are_emitted_on_new_cli() -> None:
    arguments = build_functional_arguments(
        _run(
            local_config=True,
            server_credentials_id="server",
            context_variables="region=EU",
            enterprise_data=EnterpriseDataSettings("ed.example.com:8081", protocol="https"),
        ),
        _context("20.09.02"),
    )
    tokens = arguments.tokens

    assert "-localconfig" in tokens
    assert _value_after(tokens, "-localconfiglocation") == "./TotalTestConfiguration"
    assert _value_after(tokens, "-cesu") == "SRVUSER"
    assert _value_after(arguments.display_tokens, "-cesp") == MASK
    assert _value_after(tokens, "-ctxvars") == "region=EU"
    assert _value_after(tokens, "-edserver") == "ed.example.com"
    assert _value_after(tokens, "-edport") == "8081"
    assert _value_after(tokens, "-edprotocol") == "https"


def test_version_gated_blocks_are_skipped_with_warning_on_old_cli(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="total_test_runner")
    arguments = build_functional_arguments(
        _run(
            local_config=True,
            server_credentials_id="server",
            context_variables="region=EU",
            enterprise_data=EnterpriseDataSettings("ed.example.com:8081"),
        ),
        _context("20.03.01"),
    )

    for flag in ("-localconfig", "-cesu", "-ctxvars", "-edserver"):
        assert flag not in arguments.tokens
    assert "local configuration" in caplog.text
    assert "enterprise data" in caplog.text


@pytest.mark.parametrize("host_port", ["ed.example.com", "ed.example.com:http", ":8081"])
def test_malformed_enterprise_data_host_port_is_rejected(host_port: str) -> None:
    with pytest.raises(ArgumentBuildError, match="Enterprise data"):
        build_functional_arguments(
            _run(enterprise_data=EnterpriseDataSettings(host_port)), _context()
        )


def test_double_quotes_in_values_are_always_doubled() -> None:
    arguments = build_functional_arguments(
        _run(test_path='my "suites"', accounting_info='A"1', context_variables='k="v"'),
        _context(),
    )

    for token in arguments.tokens:
        assert '"' not in token.replace('""', "")
    assert _value_after(arguments.tokens, "-f") == 'my ""suites""'


def test_build_is_deterministic() -> None:
    run = _run(connection=ById("cw01"), program_selection=None)

    first = build_functional_arguments(run, _context())
    second = build_functional_arguments(dataclasses.replace(run), _context())

    assert first.tokens == second.tokens
