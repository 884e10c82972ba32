"""Bounded recursive scan for spec and test files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

TEST_FILE_SUFFIXES = (".spec.ts", ".test.ts", ".spec.js", ".test.js")

# The dashboard's own subtree is excluded alongside VCS, build and dependency dirs
EXCLUDED_DIRS = frozenset({"node_modules", ".git", "dist", "build", "dashboard"})

# Directories at this depth (relative to the root) are listed but not descended into
MAX_DEPTH = 2

DEFAULT_SEED_DIRS = ["", "..", "examples", "legacy-tests", "legacy-dirs"]


def is_test_file(name: str) -> bool:
    return name.endswith(TEST_FILE_SUFFIXES)


def relative_depth(directory: str, root: str) -> int:
    """Number of path segments of ``directory`` relative to ``root`` (the root itself is 1)."""
    return len(os.path.relpath(directory, root).split(os.sep))


class FileDiscovery:
    """Enumerates candidate test files under a resolved root."""

    def __init__(
        self,
        seed_dirs: list[str] | None = None,
        search_pattern: str | None = None,
        logger: logging.Logger | None = None,
    ):
        self.seed_dirs = list(DEFAULT_SEED_DIRS if seed_dirs is None else seed_dirs)
        self.search_pattern = search_pattern
        self.logger = logger or logging.getLogger(__name__)

    def discover(self, root: str | Path) -> list[Path]:
        """Return absolute test file paths in discovery order.

        Each seed directory is scanned in turn. A path reachable from more than
        one seed (the root is a child of its parent) is reported once.
        """
        root_str = os.path.abspath(root)
        self.logger.info("Searching for tests in %s", root_str)

        found: list[Path] = []
        seen: set[str] = set()

        for seed in self.seed_dirs:
            seed_dir = os.path.normpath(os.path.join(root_str, seed))
            if not os.path.isdir(seed_dir):
                self.logger.debug("Seed directory does not exist: %s", seed_dir)
                continue
            self._scan(seed_dir, root_str, found, seen)

        self.logger.info("%d test files found", len(found))
        return found

    def _scan(self, directory: str, root: str, found: list[Path], seen: set[str]) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)

            for entry in entries:
                if entry.name in EXCLUDED_DIRS:
                    continue

                if entry.is_dir(follow_symlinks=False):
                    if relative_depth(directory, root) < MAX_DEPTH:
                        self._scan(entry.path, root, found, seen)
                elif entry.is_file(follow_symlinks=False) and is_test_file(entry.name):
                    if self.search_pattern and self.search_pattern not in entry.path:
                        continue
                    if entry.path in seen:
                        continue
                    seen.add(entry.path)
                    found.append(Path(entry.path))
        except OSError as e:
            self.logger.error("Could not scan %s: %s", directory, e)
