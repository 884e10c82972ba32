"""Count analyzed files per test-type bucket."""

from __future__ import annotations

from uxdash.models.test_metadata import CoverageMatrix, TestMetadata

# Buckets are test types, not functional areas. Records typed "Unbekannt"
# fall outside every bucket and are not counted.
COVERAGE_AREAS: tuple[str, ...] = ("UI", "Funktional", "Integration")


def build_coverage_matrix(batch: list[TestMetadata]) -> CoverageMatrix:
    return CoverageMatrix(
        areas=list(COVERAGE_AREAS),
        coverage={
            area: sum(1 for record in batch if record.test_type == area)
            for area in COVERAGE_AREAS
        },
    )
