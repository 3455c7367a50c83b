"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from total_test_runner.result_parsing import RunVerdict


class StepStatus(str, Enum):
    """Final status of one Total Test step."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    DRY_RUN = "DRY_RUN"


@dataclass(frozen=True)
class RunSummary:  # pylint: disable=too-many-instance-attributes
    """Metadata rendered into the RunInfo and Arguments sheets."""

    run_start: datetime
    config_path: Path
    runner: str
    tool_version: str | None
    status: StepStatus
    arguments: tuple[str, ...]
    exit_code: int | None = None
    result_path: Path | None = None
    verdict: RunVerdict | None = None
