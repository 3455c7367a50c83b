"""CLI error-handling tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from total_test_runner.cli import LOGGER_NAME, main


@pytest.fixture(autouse=True)
def _detach_cli_log_handlers():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_configuration_file_returns_failure(tmp_path: Path, capsys) -> None:
    exit_code = main(["run", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "missing.yaml" in captured.err
    assert "Traceback" not in captured.err


def test_threshold_outside_percentage_range_is_rejected(tmp_path: Path, capsys) -> None:
    exit_code = main(
        ["check-result", "--result-file", str(tmp_path / "r.xml"), "--threshold", "101"]
    )
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "--threshold" in captured.err
