from __future__ import annotations

import logging
import os
from pathlib import Path

from .listing import EntryDescriptor, describe, sort_key
from .paths import PathResolver

logger = logging.getLogger(__name__)


class RecursiveSearcher:
    """Case-insensitive substring search over every name below the root.

    The walk is depth-first and pre-order, children in name order. Every
    directory is descended into whether or not its own name matched. Symlinked
    directories are reported but not followed.
    """

    def __init__(self, resolver: PathResolver):
        self.resolver = resolver

    def search(self, query: str | None) -> list[EntryDescriptor]:
        needle = (query or '').strip().lower()
        if not needle:
            return []

        results: list[EntryDescriptor] = []
        self._walk(self.resolver.root, needle, results)
        logger.debug('Search for %r matched %d entries', needle, len(results))
        return results

    def _walk(self, directory: Path, needle: str, results: list[EntryDescriptor]) -> None:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: sort_key(e.name))

        for entry in entries:
            full = Path(entry.path)
            if needle in entry.name.lower():
                results.append(describe(self.resolver, full))
            if entry.is_dir(follow_symlinks=False):
                self._walk(full, needle, results)
