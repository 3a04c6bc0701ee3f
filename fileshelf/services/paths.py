from __future__ import annotations

import logging
from pathlib import Path

from .errors import InvalidPath

logger = logging.getLogger(__name__)


def validate_path(requested_path: str, root: str) -> Path:
    base = Path(root).resolve(strict=False)
    try:
        candidate = (base / requested_path.lstrip('/')).resolve(strict=False)
    except (ValueError, OSError) as exc:
        raise InvalidPath('Invalid path') from exc
    if base != candidate and base not in candidate.parents:
        logger.warning('Rejected path outside storage root: %r', requested_path)
        raise InvalidPath('Invalid path')
    return candidate


class PathResolver:
    """Maps client supplied relative paths onto the storage root.

    The root is canonicalised once; every path handed out by ``resolve`` is the
    root itself or lies beneath it on a path-segment boundary.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def resolve(self, relative: str | None) -> Path:
        return validate_path(relative or '', str(self.root))

    def relative(self, path: Path) -> str:
        if path == self.root:
            return ''
        return path.relative_to(self.root).as_posix()
