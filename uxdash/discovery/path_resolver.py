"""Resolve the test root from an ordered list of candidate directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path


class PathResolver:
    """Probes an ordered list of candidate directories for the test root."""

    def __init__(
        self,
        candidates: list[str | Path],
        base_dir: str | Path | None = None,
        logger: logging.Logger | None = None,
    ):
        self.base_dir = Path(base_dir) if base_dir else None
        self.candidates = [self._absolute(c) for c in candidates]
        self.logger = logger or logging.getLogger(__name__)

    def _absolute(self, candidate: str | Path) -> Path:
        path = Path(candidate)
        if not path.is_absolute():
            path = (self.base_dir or Path(os.getcwd())) / path
        return Path(os.path.normpath(path))

    def resolve(self) -> Path:
        """Return the first existing candidate, or the working directory.

        Never raises. Falling back to the working directory may mean scanning
        an unrelated tree, in which case discovery simply finds little or nothing.
        """
        for candidate in self.candidates:
            if os.path.isdir(candidate):
                self.logger.info("Test root found: %s", candidate)
                return candidate

        cwd = Path(os.getcwd())
        self.logger.warning("No test root found, falling back to working directory %s", cwd)
        return cwd
