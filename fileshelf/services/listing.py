from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .errors import NotFound
from .paths import PathResolver


@dataclass(frozen=True)
class EntryDescriptor:
    name: str
    path: str
    is_directory: bool
    size: int
    type: str
    modified: datetime


def sort_key(name: str) -> tuple[str, str]:
    return name.lower(), name


def _extension(name: str) -> str:
    return os.path.splitext(name)[1].lstrip('.')


def describe(resolver: PathResolver, path: Path) -> EntryDescriptor:
    st = path.stat()
    is_dir = stat.S_ISDIR(st.st_mode)
    return EntryDescriptor(
        name=path.name,
        path=resolver.relative(path),
        is_directory=is_dir,
        size=0 if is_dir else st.st_size,
        type='' if is_dir else _extension(path.name),
        modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
    )


class DirectoryLister:
    """Lists the immediate children of a directory, sorted case-insensitively by name."""

    def __init__(self, resolver: PathResolver):
        self.resolver = resolver

    def list(self, directory: Path) -> list[EntryDescriptor]:
        if not directory.exists():
            return []
        if not directory.is_dir():
            raise NotFound('Not a directory')

        return [describe(self.resolver, child) for child in sorted(directory.iterdir(), key=lambda p: sort_key(p.name))]
