"""Runner dispatch for argument building."""

from __future__ import annotations

from total_test_runner.configuration import RunConfiguration, RunnerKind

from .argument_list import ArgumentList
from .build_context import BuildContext
from .functional_test_arguments import build_functional_arguments
from .unit_test_arguments import build_unit_arguments

FUNCTIONAL_SCRIPT_STEM = "TotalTestFTCLI"
UNIT_SCRIPT_STEM = "TotalTestCLI"


def script_filename(runner: RunnerKind, is_shell: bool) -> str:
    """Return the launcher script name for ``runner`` on a shell or batch target."""
    stem = FUNCTIONAL_SCRIPT_STEM if runner is RunnerKind.FUNCTIONAL else UNIT_SCRIPT_STEM
    return f"{stem}.sh" if is_shell else f"{stem}.bat"


def build_run_arguments(run: RunConfiguration, context: BuildContext) -> ArgumentList:
    if run.runner is RunnerKind.FUNCTIONAL:
        return build_functional_arguments(run, context)
    return build_unit_arguments(run, context)
