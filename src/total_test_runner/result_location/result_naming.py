"""Result file names written by the functional test CLI."""

from __future__ import annotations

from dataclasses import dataclass

from total_test_runner.result_parsing import ResultKind

SUITE_RESULT_FILENAME = "generated.cli.suiteresult"
LEGACY_SUITE_RESULT_FILENAME = "generated.cli.xasuiteres"
SCENARIO_RESULT_SUFFIX = ".cli.scenarioresult"
LEGACY_SCENARIO_RESULT_SUFFIX = ".cli.xaunitres"


@dataclass(frozen=True)
class ResultFileName:
    """A name to search for and whether it is matched as a suffix."""

    name: str
    match_suffix: bool = False


def result_file_candidates(
    kind: ResultKind, uses_new_extensions: bool
) -> tuple[ResultFileName, ...]:
    """Return the names to search for, most likely first.

    Installations with the new extensions may still leave results with the
    old extension behind, so those are tried after the new name.
    """
    if kind is ResultKind.SCENARIO:
        new = ResultFileName(SCENARIO_RESULT_SUFFIX, match_suffix=True)
        legacy = ResultFileName(LEGACY_SCENARIO_RESULT_SUFFIX, match_suffix=True)
    else:
        new = ResultFileName(SUITE_RESULT_FILENAME)
        legacy = ResultFileName(LEGACY_SUITE_RESULT_FILENAME)
    return (new, legacy) if uses_new_extensions else (legacy,)
