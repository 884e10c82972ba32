"""Failures surfaced by the analyzer to its callers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uxdash.models.test_metadata import AnalysisResult


class AnalysisError(Exception):
    """Base class for analyzer failures."""


class NoTestFilesFoundError(AnalysisError, FileNotFoundError):
    """Discovery yielded no candidate test files."""

    def __init__(self, message: str, result: AnalysisResult | None = None):
        super().__init__(message)
        self.result = result


class ResultsNotFoundError(AnalysisError, FileNotFoundError):
    """No previously saved analysis exists."""


class PersistenceError(AnalysisError, OSError):
    """The results directory or a results document could not be written or read."""
