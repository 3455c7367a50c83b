"""Result location exports."""

from .result_locator import DEFAULT_MAX_DEPTH, DEFAULT_OUTPUT_FOLDER, ResultLocator
from .result_naming import (
    LEGACY_SCENARIO_RESULT_SUFFIX,
    LEGACY_SUITE_RESULT_FILENAME,
    SCENARIO_RESULT_SUFFIX,
    SUITE_RESULT_FILENAME,
    ResultFileName,
    result_file_candidates,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_OUTPUT_FOLDER",
    "ResultLocator",
    "LEGACY_SCENARIO_RESULT_SUFFIX",
    "LEGACY_SUITE_RESULT_FILENAME",
    "SCENARIO_RESULT_SUFFIX",
    "SUITE_RESULT_FILENAME",
    "ResultFileName",
    "result_file_candidates",
]
