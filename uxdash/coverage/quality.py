"""Quality metrics derived from a batch of test metadata."""

from __future__ import annotations

from collections import Counter

from uxdash.models.quality import ComplexityScore, QualityMetrics
from uxdash.models.test_metadata import TestMetadata

UNKNOWN_CATEGORY = "unknown"


def complexity_scores(batch: list[TestMetadata]) -> list[ComplexityScore]:
    """Per-file scores in batch order. A file with nothing extracted scores 1."""
    return [
        ComplexityScore(
            complexity=record.complexity or 1,
            selectors=len(record.selectors),
            assertions=len(record.assertions),
        )
        for record in batch
    ]


def selector_type_counts(batch: list[TestMetadata]) -> dict[str, int]:
    """Number of extracted selectors per selector type across the batch."""
    counts: Counter[str] = Counter()
    for record in batch:
        for selector in record.selectors:
            counts[selector.type or UNKNOWN_CATEGORY] += 1
    return dict(counts)


def assertion_type_counts(batch: list[TestMetadata]) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for record in batch:
        for assertion in record.assertions:
            counts[assertion.type or UNKNOWN_CATEGORY] += 1
    return dict(counts)


def calculate_quality_metrics(batch: list[TestMetadata]) -> QualityMetrics:
    return QualityMetrics(
        complexity_score=complexity_scores(batch),
        selector_types=selector_type_counts(batch),
        assertion_coverage=assertion_type_counts(batch),
    )
