"""Persistent cache of resolved list colors, keyed by a hash of the color namespace.

The key covers the set of configured color names only, not their values: if
a color changes value while the set of names stays the same, a cached match
list is still served. Caching is an optimization; every read or write
failure degrades to a warning and a full rebuild.
"""

from __future__ import annotations

import hashlib
import logging
import os
import socket
import tempfile
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from circlepaint.models.cache import ColorListCacheEntry

logger = logging.getLogger(__name__)


def namespace_hash(names: Iterable[str]) -> str:
    """md5 of the sorted, de-duplicated names joined with no separator."""
    return hashlib.md5("".join(sorted(set(names))).encode("utf-8")).hexdigest()


def default_cache_path(cache_file: str, cache_dir: Path | str | None = None) -> Path:
    """``<cache_file>.<hostname>.<user.>json`` in cache_dir or the system temp dir."""
    user = os.environ.get("USERNAME") or os.environ.get("USER") or ""
    user = f"{user}." if user else ""
    root = f"{cache_file}.{socket.gethostname()}.{user}json"
    directory = Path(cache_dir) if cache_dir else Path(tempfile.gettempdir())
    logger.debug("color list cache dir %s", directory)
    return directory / root


class ColorListCache:
    """File-backed store for one ``ColorListCacheEntry``. Last writer wins."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def lookup(
        self,
        target_hash: str,
        *,
        static: bool = False,
        rebuild: bool = False,
        source_mtime: float | None = None,
    ) -> ColorListCacheEntry | None:
        """Usable cache entry for ``target_hash``, or None when it must be rebuilt.

        A non-static cache older than the configuration source (``source_mtime``)
        is not read at all.
        """
        if rebuild:
            logger.debug("color list cache rebuild forced")
            return None
        if not self.path.exists():
            logger.debug("color list cache %s not found", self.path)
            return None
        logger.debug("color list cache %s found", self.path)
        if not static and source_mtime is not None:
            try:
                cache_mtime = self.path.stat().st_mtime
            except OSError as e:
                logger.warning("Problem reading color cache file %s: %s", self.path, e)
                return None
            if cache_mtime <= source_mtime:
                logger.debug(
                    "color list cache %s older than configuration - recreating", self.path
                )
                return None

        entry = self._read()
        if entry is None:
            return None
        if entry.namespace_hash == target_hash:
            logger.debug("color list hash %s matches cache file - using it", target_hash)
            return entry
        if static or entry.static:
            logger.debug(
                "color list hash %s does not match cache file - using it anyway, cache is static",
                target_hash,
            )
            return entry
        logger.debug(
            "color list hash %s does not match cache file - colors changed? recomputing",
            target_hash,
        )
        return None

    def _read(self) -> ColorListCacheEntry | None:
        try:
            raw = self.path.read_text(encoding="utf-8")
            return ColorListCacheEntry.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError, ValueError) as e:
            logger.warning("Problem reading color cache file %s: %s", self.path, e)
            return None

    def store(self, entry: ColorListCacheEntry) -> bool:
        """Write the entry. Returns False (after a warning) when it could not be written."""
        logger.debug("writing color list cache file [%s]", self.path)
        try:
            self.path.write_text(entry.model_dump_json(), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write to color list cache file %s: %s", self.path, e)
            return False
        if not self.path.exists():
            logger.warning("Could not find the cache file we supposedly just created %s", self.path)
            return False
        logger.debug("wrote color list cache file [%s]", self.path)
        return True

    def clear(self) -> None:
        """Delete the cache file; the next lookup rebuilds."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
