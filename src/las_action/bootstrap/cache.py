"""Keyed cache for the scanner executable.

An entry holds one or more files under a deterministic key and is
restored to the same absolute locations it was saved from.
"""

from __future__ import annotations

import os
import tarfile
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

from las_action.bootstrap.paths import SCANNER_REPO
from las_action.core.logging import get_logger

LOGGER = get_logger(__name__)

PathLike = Union[str, Path]


def cache_key(tag: str, tool: str = SCANNER_REPO) -> str:
    """Return the cache key for a tool at a version tag.

    Example: cache_key("v0.2.0") == "less-advanced-security-v0.2.0"
    """
    return f"{tool}-{tag}"


class KeyedCache(ABC):
    """Base class for key-addressed caches of local files."""

    @abstractmethod
    def restore(self, paths: Sequence[PathLike], key: str) -> Optional[str]:
        """Restore the entry for key onto paths.

        Returns:
            The matched key on a hit, None on a miss.
        """

    @abstractmethod
    def save(self, paths: Sequence[PathLike], key: str) -> bool:
        """Save paths under key.

        Returns:
            True if the entry was stored.
        """


class DirectoryCache(KeyedCache):
    """Cache storing each entry as ``<root>/<key>.tar.gz``.

    A root of None disables the cache: every restore misses and every
    save reports failure.
    """

    def __init__(self, root: Optional[Path]) -> None:
        self._root = root

    @property
    def root(self) -> Optional[Path]:
        return self._root

    def entry_path(self, key: str) -> Optional[Path]:
        if self._root is None:
            return None
        return self._root / f"{key}.tar.gz"

    def restore(self, paths: Sequence[PathLike], key: str) -> Optional[str]:
        entry = self.entry_path(key)
        if entry is None or not entry.is_file():
            return None

        wanted = {_arcname(p) for p in paths}
        with tarfile.open(entry, "r:gz") as tar:
            members = [m for m in tar.getmembers() if m.name in wanted]
            if {m.name for m in members} != wanted:
                LOGGER.debug(f"Cache entry {entry} does not hold all of {sorted(wanted)}")
                return None
            for member in members:
                if not member.isfile():
                    LOGGER.debug(f"Cache entry {entry} holds a non-file {member.name}")
                    return None
            tar.extractall(path=Path(os.sep), members=members, filter="data")
        return key

    def save(self, paths: Sequence[PathLike], key: str) -> bool:
        entry = self.entry_path(key)
        if entry is None:
            LOGGER.debug("No cache directory configured")
            return False

        files: List[Path] = [Path(p) for p in paths]
        missing = [str(p) for p in files if not p.is_file()]
        if missing:
            LOGGER.debug(f"Cannot cache missing file(s): {', '.join(missing)}")
            return False

        entry.parent.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(dir=entry.parent, suffix=".partial")
        os.close(fd)
        try:
            with tarfile.open(name, "w:gz") as tar:
                for path in files:
                    tar.add(path, arcname=_arcname(path))
            os.replace(name, entry)
        finally:
            Path(name).unlink(missing_ok=True)
        return True


def _arcname(path: PathLike) -> str:
    # Absolute paths are stored without their root so they extract under "/"
    return str(Path(path).resolve()).lstrip(os.sep)
