"""Tests for ubiquitous language documentation."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_ubiquitous_language_doc_exists_with_core_terms() -> None:
    glossary_path = _project_root() / "docs" / "ubiquitous-language.md"
    assert glossary_path.exists(), "Expected docs/ubiquitous-language.md to exist."

    text = glossary_path.read_text(encoding="utf-8")
    required_terms = (
        "total test cli",
        "functional runner",
        "unit runner",
        "test configuration",
        "step",
        "tool version",
        "version gate",
        "hard minimum",
        "connection reference",
        "host connection",
        "environment id",
        "credentials id",
        "argument list",
        "test selector",
        "result file",
        "suite result",
        "scenario result",
        "verdict",
        "code coverage threshold",
        "hlq",
        "run summary",
    )
    for term in required_terms:
        assert term in text.lower(), f"Expected glossary to include term: {term}"
