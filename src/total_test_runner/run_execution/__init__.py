"""Run execution domain exports."""

from .run_contracts import RunOutcome, RunRequest
from .total_test_run_use_case import ProcessLauncher, RunExecutionError, execute_total_test_run

__all__ = [
    "RunRequest",
    "RunOutcome",
    "ProcessLauncher",
    "RunExecutionError",
    "execute_total_test_run",
]
