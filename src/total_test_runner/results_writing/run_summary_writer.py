"""Run summary workbook writer service."""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .report_models import RunSummary

RUN_INFO_SHEET_NAME = "RunInfo"
ARGUMENTS_SHEET_NAME = "Arguments"


def write_run_summary_workbook(output_path: Path | str, summary: RunSummary) -> Path:
    """Write a workbook describing one run and return its resolved path.

    ``summary.arguments`` is written as given, so callers pass the masked
    tokens.
    """
    workbook = Workbook()
    run_info = workbook.active
    run_info.title = RUN_INFO_SHEET_NAME
    _write_run_info_sheet(run_info, summary)
    _write_arguments_sheet(workbook.create_sheet(ARGUMENTS_SHEET_NAME), summary.arguments)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_run_info_sheet(sheet, summary: RunSummary) -> None:
    verdict = summary.verdict
    entries = (
        ("run_start", summary.run_start.isoformat()),
        ("config_path", str(summary.config_path)),
        ("runner", summary.runner),
        ("tool_version", summary.tool_version or ""),
        ("status", summary.status.value),
        ("exit_code", summary.exit_code),
        ("result_path", str(summary.result_path) if summary.result_path else ""),
        ("result_type", verdict.result_type if verdict else ""),
        ("coverage_percent", verdict.coverage_percent if verdict else None),
        ("reason", verdict.reason if verdict else ""),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
    sheet.column_dimensions[get_column_letter(1)].width = 20
    sheet.column_dimensions[get_column_letter(2)].width = 60


def _write_arguments_sheet(sheet, arguments: tuple[str, ...]) -> None:
    for column, header in enumerate(("position", "argument"), start=1):
        sheet.cell(row=1, column=column, value=header).font = Font(bold=True)
    for row, argument in enumerate(arguments, start=2):
        sheet.cell(row=row, column=1, value=row - 1)
        sheet.cell(row=row, column=2, value=argument)
    sheet.column_dimensions[get_column_letter(2)].width = max(
        [20, *(min(len(argument), 100) for argument in arguments)]
    )
