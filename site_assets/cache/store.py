#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
On-disk cache for asset records.
"""

import logging
import pickle
import time
from pathlib import Path
from typing import Any, Optional, Union

from ..utils.fs import dump_file
from ..utils.path import ensure_dir
from .key import CacheKey

logger = logging.getLogger(__name__)

KeyLike = Union[CacheKey, str]


class CacheStore:
    """Content-addressed store: one pickle file per key digest.

    Entries are written atomically (temp file + rename), so concurrent
    pipelines computing the same key can only replace a complete entry with
    another complete entry.
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = Path(cache_dir)
        ensure_dir(self.cache_dir)

    def _file(self, key: KeyLike) -> Path:
        digest = key.digest if isinstance(key, CacheKey) else str(key)
        return self.cache_dir / f"{digest}.pkl"

    def has(self, key: KeyLike) -> bool:
        return self._file(key).exists()

    def get(self, key: KeyLike, default: Optional[Any] = None) -> Any:
        """Load a cached value, ``default`` if the key is unknown."""
        cache_file = self._file(key)
        try:
            with cache_file.open('rb') as f:
                return pickle.load(f)
        except FileNotFoundError:
            return default

    def set(self, key: KeyLike, value: Any) -> None:
        dump_file(self._file(key), pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL))
        logger.debug("Cached %s", self._file(key).name)

    def delete(self, key: KeyLike) -> None:
        self._file(key).unlink(missing_ok=True)

    def clear(self) -> int:
        """Remove every entry; returns the number of files removed."""
        removed = 0
        for cache_file in self.cache_dir.glob("*.pkl"):
            cache_file.unlink(missing_ok=True)
            removed += 1
        return removed

    def cleanup_old(self, days: int = 7) -> int:
        """Clean up entries older than specified days."""
        cutoff = time.time() - days * 86400
        removed = 0
        for cache_file in self.cache_dir.glob("*.pkl"):
            try:
                if cache_file.stat().st_mtime < cutoff:
                    cache_file.unlink()
                    removed += 1
            except FileNotFoundError:
                continue
        logger.info("Cleaned up %d old cache entries", removed)
        return removed
