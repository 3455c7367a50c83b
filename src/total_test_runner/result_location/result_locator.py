"""Best-effort search for result files below the workspace."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .result_naming import ResultFileName

_LOGGER = logging.getLogger("total_test_runner.result_location")

DEFAULT_MAX_DEPTH = 32
DEFAULT_OUTPUT_FOLDER = "Output"
TEST_FILE_SUFFIXES: tuple[str, ...] = (".context", ".testscenario", ".testsuite")


class ResultLocator:
    """Find the CLI output file with a bounded depth-first search.

    The search is a heuristic: the first matching file in sorted, depth-first
    order wins. It never reports a path that does not exist.
    """

    def __init__(self, uses_default_output_folder: bool, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 0:
            raise ValueError("max_depth must not be negative.")
        self._uses_default_output_folder = uses_default_output_folder
        self._max_depth = max_depth

    def search_root(
        self,
        base_dir: Path | str,
        report_folder: str | None,
        *,
        test_path: str | None = None,
    ) -> Path:
        """Return the directory the search starts from."""
        root = Path(base_dir)
        if test_path and test_path.strip() not in ("", "."):
            candidate = Path(test_path.strip())
            if not candidate.is_absolute():
                candidate = root / candidate
            if candidate.is_dir():
                root = candidate
            elif candidate.is_file() or candidate.suffix.lower() in TEST_FILE_SUFFIXES:
                root = candidate.parent
                if self._uses_default_output_folder:
                    root = root / DEFAULT_OUTPUT_FOLDER

        folder = (report_folder or "").strip()
        if folder:
            report_path = Path(folder)
            if report_path.is_absolute() and report_path.is_dir():
                return report_path
            return root / folder
        return root

    def locate(
        self,
        base_dir: Path | str,
        report_folder: str | None,
        target_name: str,
        *,
        test_path: str | None = None,
        match_suffix: bool = False,
    ) -> Path | None:
        """Return the first file named ``target_name`` below the search root, or None."""
        root = self.search_root(base_dir, report_folder, test_path=test_path)
        _LOGGER.info("Searching for %s below %s", target_name, root)
        found = self._search(root, target_name, match_suffix, depth=0)
        if found is None:
            _LOGGER.info("No %s found below %s", target_name, root)
        else:
            _LOGGER.info("Found result file %s", found)
        return found

    def locate_any(
        self,
        base_dir: Path | str,
        report_folder: str | None,
        candidates: Iterable[ResultFileName],
        *,
        test_path: str | None = None,
    ) -> Path | None:
        """Try each candidate name in order and return the first file found."""
        for candidate in candidates:
            found = self.locate(
                base_dir,
                report_folder,
                candidate.name,
                test_path=test_path,
                match_suffix=candidate.match_suffix,
            )
            if found is not None:
                return found
        return None

    def _search(self, path: Path, target_name: str, match_suffix: bool, depth: int) -> Path | None:
        if path.is_file():
            return path if _matches(path.name, target_name, match_suffix) else None
        if not path.is_dir():
            return None
        for child in sorted(path.iterdir()):
            if child.is_dir():
                if depth + 1 > self._max_depth:
                    _LOGGER.debug("Not descending into %s: depth limit reached.", child)
                    continue
                found = self._search(child, target_name, match_suffix, depth + 1)
            else:
                found = self._search(child, target_name, match_suffix, depth)
            if found is not None:
                return found
        return None


def _matches(name: str, target_name: str, match_suffix: bool) -> bool:
    return name.endswith(target_name) if match_suffix else name == target_name
