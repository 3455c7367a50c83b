"""Result interpretation entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SCENARIO_TEST_PATH_SUFFIXES: tuple[str, ...] = (".context", ".testscenario")


class ResultKind(str, Enum):
    """Granularity of a result file, named after its XML root element."""

    SUITE = "XaSuiteResult"
    SCENARIO = "XaUnitResult"

    @property
    def root_element(self) -> str:
        return self.value

    @classmethod
    def for_test_path(cls, test_path: str | None) -> ResultKind:
        """Return SCENARIO when the test path names a single scenario or context file."""
        if test_path and test_path.strip().lower().endswith(SCENARIO_TEST_PATH_SUFFIXES):
            return cls.SCENARIO
        return cls.SUITE


@dataclass(frozen=True)
class RunVerdict:
    """Pass or fail decision derived from one result document."""

    success: bool
    result_type: str | None = None
    coverage_percent: int | None = None
    reason: str = ""
