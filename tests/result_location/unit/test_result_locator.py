"""Result locator tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from total_test_runner.result_location import (
    LEGACY_SUITE_RESULT_FILENAME,
    SCENARIO_RESULT_SUFFIX,
    SUITE_RESULT_FILENAME,
    ResultFileName,
    ResultLocator,
    result_file_candidates,
)
from total_test_runner.result_parsing import ResultKind


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<XaSuiteResult/>", encoding="utf-8")
    return path


def test_finds_suite_result_in_workspace_root_without_report_folder(tmp_path: Path) -> None:
    expected = _touch(tmp_path / SUITE_RESULT_FILENAME)

    found = ResultLocator(True).locate(tmp_path, "", SUITE_RESULT_FILENAME)

    assert found == expected


def test_search_descends_depth_first_in_sorted_order(tmp_path: Path) -> None:
    _touch(tmp_path / "TTTReport" / "b" / SUITE_RESULT_FILENAME)
    expected = _touch(tmp_path / "TTTReport" / "a" / "deep" / SUITE_RESULT_FILENAME)

    found = ResultLocator(True).locate(tmp_path, "TTTReport", SUITE_RESULT_FILENAME)

    assert found == expected


def test_missing_result_returns_none(tmp_path: Path) -> None:
    _touch(tmp_path / "TTTReport" / "other.xml")

    assert ResultLocator(True).locate(tmp_path, "TTTReport", SUITE_RESULT_FILENAME) is None
    assert ResultLocator(True).locate(tmp_path / "missing", None, SUITE_RESULT_FILENAME) is None


def test_absolute_existing_report_folder_wins(tmp_path: Path) -> None:
    reports = tmp_path / "reports"
    expected = _touch(reports / SUITE_RESULT_FILENAME)
    _touch(tmp_path / "workspace" / SUITE_RESULT_FILENAME)

    locator = ResultLocator(True)

    assert locator.search_root(tmp_path / "workspace", str(reports)) == reports
    assert locator.locate(tmp_path / "workspace", str(reports), SUITE_RESULT_FILENAME) == expected


def test_relative_report_folder_is_joined_to_root(tmp_path: Path) -> None:
    root = ResultLocator(True).search_root(tmp_path, " TTTReport ")

    assert root == tmp_path / "TTTReport"


def test_existing_test_path_directory_becomes_root(tmp_path: Path) -> None:
    (tmp_path / "suites").mkdir()

    root = ResultLocator(True).search_root(tmp_path, "TTTReport", test_path="suites")

    assert root == tmp_path / "suites" / "TTTReport"


@pytest.mark.parametrize(
    ("uses_default_output_folder", "expected_parts"),
    [(True, ("tests", "Output")), (False, ("tests",))],
)
def test_test_path_file_uses_parent_or_output_folder(
    tmp_path: Path, uses_default_output_folder: bool, expected_parts: tuple[str, ...]
) -> None:
    locator = ResultLocator(uses_default_output_folder)

    root = locator.search_root(tmp_path, None, test_path="tests/Scenario1.testscenario")

    assert root == tmp_path.joinpath(*expected_parts)


def test_suffix_match_finds_scenario_results(tmp_path: Path) -> None:
    expected = _touch(tmp_path / "Output" / f"Scenario1{SCENARIO_RESULT_SUFFIX}")

    found = ResultLocator(True).locate(
        tmp_path, None, SCENARIO_RESULT_SUFFIX, match_suffix=True
    )
    exact = ResultLocator(True).locate(tmp_path, None, SCENARIO_RESULT_SUFFIX)

    assert found == expected
    assert exact is None


def test_search_depth_is_bounded(tmp_path: Path) -> None:
    _touch(tmp_path / "a" / "b" / "c" / SUITE_RESULT_FILENAME)

    shallow = ResultLocator(True, max_depth=2)
    deep = ResultLocator(True, max_depth=3)

    assert shallow.locate(tmp_path, None, SUITE_RESULT_FILENAME) is None
    assert deep.locate(tmp_path, None, SUITE_RESULT_FILENAME) is not None


def test_negative_depth_is_rejected() -> None:
    with pytest.raises(ValueError):
        ResultLocator(True, max_depth=-1)


def test_locate_any_prefers_new_name_then_falls_back(tmp_path: Path) -> None:
    legacy = _touch(tmp_path / LEGACY_SUITE_RESULT_FILENAME)
    candidates = result_file_candidates(ResultKind.SUITE, uses_new_extensions=True)

    assert ResultLocator(True).locate_any(tmp_path, None, candidates) == legacy

    newer = _touch(tmp_path / SUITE_RESULT_FILENAME)
    assert ResultLocator(True).locate_any(tmp_path, None, candidates) == newer


def test_result_file_candidates_follow_extension_gate() -> None:
    assert result_file_candidates(ResultKind.SUITE, uses_new_extensions=False) == (
        ResultFileName(LEGACY_SUITE_RESULT_FILENAME),
    )
    assert result_file_candidates(ResultKind.SCENARIO, uses_new_extensions=True) == (
        ResultFileName(".cli.scenarioresult", match_suffix=True),
        ResultFileName(".cli.xaunitres", match_suffix=True),
    )
