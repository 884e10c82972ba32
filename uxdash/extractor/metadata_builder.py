"""Per-file metadata assembly with failure isolation."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from uxdash.extractor import patterns
from uxdash.models.test_metadata import TestCoverage, TestMetadata

DEGRADED_DESCRIPTION = "Fehler bei der Analyse"


def iso_timestamp(ts: float | None = None) -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = datetime.fromtimestamp(ts, tz=timezone.utc) if ts is not None else datetime.now(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TestMetadataBuilder:
    """Builds one TestMetadata record per file. ``build`` never raises."""

    def __init__(self, root: str | Path, logger: logging.Logger | None = None):
        self.root = os.path.abspath(root)
        self.logger = logger or logging.getLogger(__name__)

    def build(self, path: str | Path) -> TestMetadata:
        abs_path = os.path.abspath(path)
        self.logger.debug("Analyzing test file: %s", abs_path)
        try:
            return self._analyze(abs_path)
        except Exception as e:
            self.logger.error("Analysis failed for %s: %s", abs_path, e)
            return self._degraded(abs_path, e)

    def build_all(self, paths: list[Path]) -> list[TestMetadata]:
        """Analyze ``paths`` in order; a failing file yields a degraded record."""
        return [self.build(p) for p in paths]

    def _relative(self, abs_path: str) -> str:
        try:
            return os.path.relpath(abs_path, self.root)
        except ValueError:
            # Different drive on Windows
            return abs_path

    def _analyze(self, abs_path: str) -> TestMetadata:
        with open(abs_path, encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
        stats = os.stat(abs_path)

        file_name = os.path.basename(abs_path)
        extracted = patterns.extract(text)
        test_type = patterns.classify_test_type(text)
        functional_areas = patterns.classify_functional_areas(text)

        return TestMetadata(
            file=self._relative(abs_path),
            path=abs_path,
            name=file_name,
            title=patterns.extract_title(text, file_name),
            description=patterns.extract_description(text),
            test_type=test_type,
            selectors=extracted.selectors,
            assertions=extracted.assertions,
            dependencies=extracted.dependencies,
            timeouts=extracted.timeouts,
            screenshots="screenshot" in text,
            line_count=text.count("\n") + 1,
            updated_at=iso_timestamp(stats.st_mtime),
            functional_areas=functional_areas,
            coverage=TestCoverage(area=list(functional_areas), type=[test_type]),
        )

    def _degraded(self, abs_path: str, error: Exception) -> TestMetadata:
        file_name = os.path.basename(abs_path)
        return TestMetadata(
            file=self._relative(abs_path),
            path=abs_path,
            name=file_name,
            title=file_name,
            description=DEGRADED_DESCRIPTION,
            test_type=patterns.UNKNOWN_TEST_TYPE,
            updated_at=iso_timestamp(),
            coverage=TestCoverage(area=[], type=[patterns.UNKNOWN_TEST_TYPE]),
            error=str(error) or error.__class__.__name__,
        )
