"""Results writing domain exports."""

from .report_models import RunSummary, StepStatus
from .run_summary_writer import write_run_summary_workbook

__all__ = [
    "RunSummary",
    "StepStatus",
    "write_run_summary_workbook",
]
