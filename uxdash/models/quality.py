"""Quality metric data structures derived from a metadata batch."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ComplexityScore(BaseModel):
    complexity: int = 0
    selectors: int = 0
    assertions: int = 0


class QualityMetrics(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    complexity_score: list[ComplexityScore] = Field(default_factory=list)
    selector_types: dict[str, int] = Field(default_factory=dict)
    assertion_coverage: dict[str, int] = Field(default_factory=dict)
