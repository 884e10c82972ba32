"""Configuration model for the test analyzer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AnalyzerConfig(BaseModel):
    # Root resolution, probed in order
    candidate_dirs: list[str] = Field(default_factory=lambda: ["tests", "../tests"])

    # Discovery seeds, relative to the resolved root
    seed_dirs: list[str] = Field(
        default_factory=lambda: ["", "..", "examples", "legacy-tests", "legacy-dirs"]
    )
    search_pattern: Optional[str] = None

    # Persistence
    results_dir: str = "results"

    # Logging
    log_dir: Optional[str] = None

    @field_validator("search_pattern", mode="before")
    @classmethod
    def empty_pattern_is_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def load(cls, path: str | Path) -> "AnalyzerConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
