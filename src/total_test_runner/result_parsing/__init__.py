"""Result parsing exports."""

from .result_document_parser import (
    SUCCESS_RESULT_TYPE,
    ResultInterpretationError,
    evaluate_result_file,
    parse_result_document,
)
from .result_models import ResultKind, RunVerdict

__all__ = [
    "SUCCESS_RESULT_TYPE",
    "ResultInterpretationError",
    "evaluate_result_file",
    "parse_result_document",
    "ResultKind",
    "RunVerdict",
]
