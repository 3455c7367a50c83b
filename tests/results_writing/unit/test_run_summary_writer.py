"""Run summary workbook writer tests."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from openpyxl import load_workbook
from total_test_runner.result_parsing import RunVerdict
from total_test_runner.results_writing import RunSummary, StepStatus, write_run_summary_workbook


def _summary(**overrides) -> RunSummary:
    values = {
        "run_start": datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        "config_path": Path("/ci/totaltest.yaml"),
        "runner": "functional",
        "tool_version": "20.9.2",
        "status": StepStatus.FAILED,
        "arguments": ("/opt/cli/TotalTestFTCLI.sh", "-p", "******"),
        "exit_code": 0,
        "result_path": Path("/ws/TTTReport/generated.cli.suiteresult"),
        "verdict": RunVerdict(
            success=False,
            result_type="SUCCESS",
            coverage_percent=40,
            reason="Code coverage 40% is below the threshold of 60%.",
        ),
    }
    values.update(overrides)
    return RunSummary(**values)


def test_writes_run_info_and_arguments_sheets(tmp_path: Path) -> None:
    output_path = tmp_path / "nested" / "summary.xlsx"

    written = write_run_summary_workbook(output_path, _summary())

    assert written == output_path.resolve()
    workbook = load_workbook(output_path)
    assert workbook.sheetnames == ["RunInfo", "Arguments"]
    run_info = {row[0]: row[1] for row in workbook["RunInfo"].iter_rows(values_only=True)}
    assert run_info["run_start"] == "2024-05-01T12:00:00+00:00"
    assert run_info["status"] == "FAILED"
    assert run_info["exit_code"] == 0
    assert run_info["coverage_percent"] == 40
    assert run_info["result_path"] == "/ws/TTTReport/generated.cli.suiteresult"
    arguments = list(workbook["Arguments"].iter_rows(values_only=True))
    assert arguments[0] == ("position", "argument")
    assert arguments[1:] == [
        (1, "/opt/cli/TotalTestFTCLI.sh"),
        (2, "-p"),
        (3, "******"),
    ]


def test_writes_blank_result_fields_without_verdict(tmp_path: Path) -> None:
    output_path = tmp_path / "summary.xlsx"

    write_run_summary_workbook(
        output_path,
        _summary(status=StepStatus.PASSED, exit_code=None, result_path=None, verdict=None),
    )

    run_info = {
        row[0]: row[1]
        for row in load_workbook(output_path)["RunInfo"].iter_rows(values_only=True)
    }
    assert run_info["status"] == "PASSED"
    assert run_info["exit_code"] is None
    assert run_info["result_path"] in ("", None)
    assert run_info["reason"] in ("", None)
