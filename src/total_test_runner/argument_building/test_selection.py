"""Test suite selector classification."""

from __future__ import annotations

ALL_SCENARIOS = "ALL_SCENARIOS"
ALL_SUITES = "ALL_SUITES"
AUTO_SELECT = "AUTO_SELECT"

SPECIAL_TEST_NAMES: tuple[str, ...] = (ALL_SCENARIOS, ALL_SUITES, AUTO_SELECT)
_LIST_MARKERS: tuple[str, ...] = (",", "?", "*")


def is_special_test_name(test_name: str | None) -> bool:
    """Return True for ALL_SCENARIOS, ALL_SUITES or AUTO_SELECT, ignoring case."""
    if not test_name:
        return False
    return test_name.strip().upper() in SPECIAL_TEST_NAMES


def is_test_name_list(test_suite_entry: str | None) -> bool:
    """Return True when the entry names several tests or contains wildcards."""
    if not test_suite_entry:
        return False
    return any(marker in test_suite_entry for marker in _LIST_MARKERS)


def uses_test_name_list(test_suite_entry: str | None) -> bool:
    return is_special_test_name(test_suite_entry) or is_test_name_list(test_suite_entry)
