"""Analysis orchestrator: resolve the root, discover, analyze, aggregate and persist."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from uxdash.coverage.matrix import build_coverage_matrix
from uxdash.coverage.quality import calculate_quality_metrics
from uxdash.coverage.results_store import ResultsStore
from uxdash.discovery.file_discovery import FileDiscovery
from uxdash.discovery.path_resolver import PathResolver
from uxdash.errors import NoTestFilesFoundError
from uxdash.extractor.metadata_builder import TestMetadataBuilder
from uxdash.models.config import AnalyzerConfig
from uxdash.models.test_metadata import AnalysisResult, CoverageMatrix, TestMetadata


def _result(batch: list[TestMetadata], matrix: CoverageMatrix) -> AnalysisResult:
    return AnalysisResult(
        tests_analyzed=len(batch),
        test_metadata=batch,
        coverage_matrix=matrix,
        quality_metrics=calculate_quality_metrics(batch),
    )


class Orchestrator:
    """Runs one synchronous analysis at a time against a results directory."""

    def __init__(
        self,
        config: AnalyzerConfig,
        root: str | Path | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.root = Path(root) if root else None
        self.store = ResultsStore(config.results_dir, logger=self.logger)

    def resolve_root(self) -> Path:
        if self.root is not None:
            return self.root
        return PathResolver(self.config.candidate_dirs, logger=self.logger).resolve()

    def run_analysis(self) -> AnalysisResult:
        """Analyze every discovered test file and persist the results.

        Raises NoTestFilesFoundError when discovery finds nothing; the
        exception carries an empty result with an all-zero matrix.
        """
        start = time.time()
        root = self.resolve_root()
        self.logger.info("=== Starting test analysis in %s ===", root)

        discovery = FileDiscovery(
            seed_dirs=self.config.seed_dirs,
            search_pattern=self.config.search_pattern,
            logger=self.logger,
        )
        paths = discovery.discover(root)
        if not paths:
            raise NoTestFilesFoundError(
                f"No test files found under {root}",
                result=_result([], build_coverage_matrix([])),
            )

        builder = TestMetadataBuilder(root, logger=self.logger)
        batch = builder.build_all(paths)
        degraded = sum(1 for record in batch if record.error)
        if degraded:
            self.logger.warning("%d of %d files could not be analyzed", degraded, len(batch))

        matrix = build_coverage_matrix(batch)
        self.store.save(batch, matrix)

        self.logger.info("=== Analysis complete: %d files in %.1fs ===", len(batch), time.time() - start)
        return _result(batch, matrix)

    def load_last_results(self) -> AnalysisResult:
        """Return the last persisted analysis without rescanning."""
        batch, matrix = self.store.load()
        return _result(batch, matrix)
