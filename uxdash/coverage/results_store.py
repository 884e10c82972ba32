"""Persist the last analysis batch and its coverage matrix as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from uxdash.errors import PersistenceError, ResultsNotFoundError
from uxdash.models.test_metadata import CoverageMatrix, TestMetadata

ANALYSIS_FILENAME = "test-analysis.json"
MATRIX_FILENAME = "coverage-matrix.json"


class ResultsStore:
    """Manages the two JSON documents under the results directory.

    The documents are written independently. Concurrent runs sharing one
    results directory can leave them mutually inconsistent.
    """

    def __init__(self, results_dir: str | Path, logger: logging.Logger | None = None):
        self.results_dir = Path(results_dir)
        self.logger = logger or logging.getLogger(__name__)

    @property
    def analysis_path(self) -> Path:
        return self.results_dir / ANALYSIS_FILENAME

    @property
    def matrix_path(self) -> Path:
        return self.results_dir / MATRIX_FILENAME

    def ensure_results_dir(self) -> Path:
        """Create the results directory if it is missing."""
        if self.results_dir.is_dir():
            return self.results_dir
        try:
            self.results_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Could not create results directory {self.results_dir}: {e}") from e
        self.logger.info("Created results directory %s", self.results_dir)
        return self.results_dir

    def save(self, batch: list[TestMetadata], matrix: CoverageMatrix) -> bool:
        """Overwrite both documents. Returns False if only the matrix failed to save.

        A metadata write failure raises PersistenceError. The matrix write is
        best-effort and never undoes a successful metadata save.
        """
        self.ensure_results_dir()

        try:
            self._write_json(self.analysis_path, [record.to_json_dict() for record in batch])
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not save analysis results to {self.analysis_path}: {e}") from e
        self.logger.info("Saved %d analysis records to %s", len(batch), self.analysis_path)

        try:
            self._write_json(self.matrix_path, matrix.to_json_dict())
        except (OSError, TypeError, ValueError) as e:
            self.logger.warning("Could not save coverage matrix to %s: %s", self.matrix_path, e)
            return False
        self.logger.debug("Saved coverage matrix to %s", self.matrix_path)
        return True

    def load(self) -> tuple[list[TestMetadata], CoverageMatrix]:
        """Return the last saved batch and matrix.

        Raises ResultsNotFoundError when no analysis has been saved. A missing
        matrix document yields an empty matrix.
        """
        if not self.analysis_path.exists():
            raise ResultsNotFoundError(
                f"No analysis results found at {self.analysis_path}. Run an analysis first."
            )

        data = self._read_json(self.analysis_path)
        try:
            batch = [TestMetadata.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            raise PersistenceError(f"Invalid analysis results in {self.analysis_path}: {e}") from e

        matrix = CoverageMatrix()
        if self.matrix_path.exists():
            try:
                matrix = CoverageMatrix.model_validate(self._read_json(self.matrix_path))
            except ValidationError as e:
                raise PersistenceError(f"Invalid coverage matrix in {self.matrix_path}: {e}") from e
        else:
            self.logger.debug("No coverage matrix at %s, using an empty one", self.matrix_path)

        self.logger.debug("Loaded %d analysis records from %s", len(batch), self.analysis_path)
        return batch, matrix

    def _write_json(self, path: Path, data) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def _read_json(self, path: Path):
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {path}: {e}") from e
