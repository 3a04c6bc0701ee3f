from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import BinaryIO

from .errors import InvalidPath, MissingParameters, NotFound
from .listing import DirectoryLister, EntryDescriptor
from .paths import PathResolver
from .search import RecursiveSearcher

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


def _check_bare_name(name: str) -> None:
    if '/' in name or '\\' in name or name in {'.', '..'}:
        raise InvalidPath('Invalid name')


def _ignore_missing(func, path, excinfo) -> None:
    # onexc passes the exception, onerror passes sys.exc_info()
    exc = excinfo[1] if isinstance(excinfo, tuple) else excinfo
    if not isinstance(exc, FileNotFoundError):
        raise exc


def _remove_tree(target: Path) -> None:
    if sys.version_info >= (3, 12):
        shutil.rmtree(target, onexc=_ignore_missing)
    else:
        shutil.rmtree(target, onerror=_ignore_missing)


class FileOps:
    """Filesystem operations confined to a single storage root."""

    def __init__(self, root: str | Path):
        self.resolver = PathResolver(root)
        self.root = self.resolver.root
        self.lister = DirectoryLister(self.resolver)
        self.searcher = RecursiveSearcher(self.resolver)

    def safe_path(self, rel: str | None) -> Path:
        return self.resolver.resolve(rel)

    def list_dir(self, rel: str | None) -> list[EntryDescriptor]:
        return self.lister.list(self.safe_path(rel))

    def search(self, query: str | None) -> list[EntryDescriptor]:
        return self.searcher.search(query)

    def create_folder(self, parent: str | None, name: str | None) -> Path:
        if not name:
            raise MissingParameters('Missing folder name')

        target = self.safe_path(f'{parent or ""}/{name}')
        target.mkdir(parents=True, exist_ok=True)
        logger.info('Created folder %s', self.resolver.relative(target))
        return target

    def delete_entry(self, rel: str | None) -> None:
        target = self.safe_path(rel)
        if target == self.root:
            raise InvalidPath('Cannot delete the storage root')
        if not target.exists():
            raise NotFound('Not found')

        if target.is_dir():
            _remove_tree(target)
        else:
            target.unlink(missing_ok=True)
        logger.info('Deleted %s', self.resolver.relative(target))

    def rename(self, old_path: str | None, new_name: str | None) -> Path:
        if not old_path or not new_name:
            raise MissingParameters('Missing parameters')
        _check_bare_name(new_name)

        source = self.safe_path(old_path)
        if source == self.root:
            raise InvalidPath('Cannot rename the storage root')
        if not source.exists():
            raise NotFound('Not found')

        # new_name is untrusted; re-check the final destination against the root
        destination = self.safe_path(self.resolver.relative(source.parent) + '/' + new_name)
        if destination.parent != source.parent:
            raise InvalidPath('Invalid new name')

        source.rename(destination)
        logger.info('Renamed %s -> %s', self.resolver.relative(source), self.resolver.relative(destination))
        return destination

    def write_upload(
        self,
        folder: str | None,
        filename: str | None,
        stream: BinaryIO,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> Path:
        if not filename:
            raise MissingParameters('No file uploaded')
        _check_bare_name(filename)

        target_dir = self.safe_path(folder)
        target = self.safe_path(f'{self.resolver.relative(target_dir)}/{filename}')
        target_dir.mkdir(parents=True, exist_ok=True)

        with target.open('wb') as f:
            while chunk := stream.read(chunk_size):
                f.write(chunk)
            f.flush()
            os.fsync(f.fileno())
        logger.info('Uploaded %s', self.resolver.relative(target))
        return target

    def read_for_download(self, rel: str | None) -> Path:
        target = self.safe_path(rel)
        if not target.exists() or target.is_dir():
            raise NotFound('Not found')
        return target
