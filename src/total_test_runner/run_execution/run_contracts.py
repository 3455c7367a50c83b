"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from total_test_runner.result_parsing import RunVerdict
from total_test_runner.results_writing import StepStatus


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one Total Test step."""

    config_path: str
    workspace: str | None = None
    dry_run: bool = False
    summary_output: str | None = None


@dataclass(frozen=True)
class RunOutcome:  # pylint: disable=too-many-instance-attributes
    """Output contract for one completed step."""

    status: StepStatus
    arguments: tuple[str, ...]
    dry_run: bool
    exit_code: int | None = None
    verdict: RunVerdict | None = None
    result_path: Path | None = None
    summary_path: Path | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is not StepStatus.FAILED
