"""Verdict extraction from Total Test XML result files."""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from .result_models import ResultKind, RunVerdict

_LOGGER = logging.getLogger("total_test_runner.result_parsing")

SUCCESS_RESULT_TYPE = "SUCCESS"


class ResultInterpretationError(Exception):
    """Raised when a result document does not have the expected shape."""


def _hardened_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


def parse_result_document(
    content: bytes | str, kind: ResultKind, cc_threshold: int = 0
) -> RunVerdict:
    """Derive a verdict from the XML content of a suite or scenario result.

    Any ``resultType`` other than ``SUCCESS`` (ignoring case) fails. When a
    coverage threshold above zero is configured and the run succeeded, a
    ``CC/data/@percentage`` below the threshold fails the run too.

    Raises:
      ResultInterpretationError: If the XML is malformed, the root element is
        missing or the coverage percentage is not an integer.
    """
    raw = content.encode("utf-8") if isinstance(content, str) else content
    try:
        document = etree.fromstring(raw, parser=_hardened_parser())
    except etree.XMLSyntaxError as exc:
        raise ResultInterpretationError(f"Malformed result XML: {exc}") from exc

    root = kind.root_element
    matches = document.xpath(f"/{root}")
    if not matches:
        raise ResultInterpretationError(
            f"Result root element '{root}' not found (found '{document.tag}')."
        )
    result_type = matches[0].get("resultType", "")
    if result_type.upper() != SUCCESS_RESULT_TYPE:
        return RunVerdict(
            success=False,
            result_type=result_type,
            reason=f"{root} resultType is '{result_type}'.",
        )
    if cc_threshold <= 0:
        return RunVerdict(success=True, result_type=result_type)

    _LOGGER.info(
        "Run succeeded, checking code coverage against the %s%% threshold.", cc_threshold
    )
    coverage_percent = _read_coverage_percent(document, root)
    if coverage_percent is None:
        return RunVerdict(success=True, result_type=result_type)
    if coverage_percent < cc_threshold:
        return RunVerdict(
            success=False,
            result_type=result_type,
            coverage_percent=coverage_percent,
            reason=(
                f"Code coverage {coverage_percent}% is below the threshold of {cc_threshold}%."
            ),
        )
    return RunVerdict(success=True, result_type=result_type, coverage_percent=coverage_percent)


def _read_coverage_percent(document, root: str) -> int | None:
    elements = document.xpath(f"/{root}/CC/data")
    if not elements:
        return None
    percentage = elements[0].get("percentage")
    try:
        return int(percentage.strip())
    except (AttributeError, ValueError) as exc:
        raise ResultInterpretationError(
            f"Coverage percentage {percentage!r} is not an integer."
        ) from exc


def evaluate_result_file(path: Path | str, kind: ResultKind, cc_threshold: int = 0) -> RunVerdict:
    """Read and interpret a result file, degrading every problem to a failed verdict."""
    result_path = Path(path)
    try:
        content = result_path.read_bytes()
        verdict = parse_result_document(content, kind, cc_threshold)
    except OSError as exc:
        _LOGGER.error("Unable to read result file %s: %s", result_path, exc)
        return RunVerdict(success=False, reason=f"Unable to read result file: {exc}")
    except ResultInterpretationError as exc:
        _LOGGER.error("Unable to interpret result file %s: %s", result_path, exc)
        return RunVerdict(success=False, reason=str(exc))

    if verdict.success:
        _LOGGER.info("%s in %s reports success.", kind.root_element, result_path)
    else:
        _LOGGER.warning(
            "%s in %s reports failure: %s", kind.root_element, result_path, verdict.reason
        )
    return verdict
