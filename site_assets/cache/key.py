#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Structured cache keys.

A key is the tuple (identity, version, tags) hashed deterministically; the
same inputs always give the same digest.
"""

import hashlib
import json
from dataclasses import dataclass
from typing import Iterable, Tuple

from ..models.asset_record import AssetRecord


@dataclass(frozen=True)
class CacheKey:
    identity: str
    version: str
    tags: Tuple[str, ...] = ()

    @property
    def digest(self) -> str:
        payload = json.dumps([self.identity, self.version, list(self.tags)],
                             ensure_ascii=True, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def __str__(self) -> str:
        return self.digest


def key_for_paths(identity: str, version: str) -> CacheKey:
    """Key of a freshly loaded asset (filename or joined source paths)."""
    return CacheKey(identity=identity, version=version)


def key_for_record(record: AssetRecord, version: str, tags: Iterable[str] = ()) -> CacheKey:
    """Key of a transformation step applied to ``record``.

    The identity includes a hash of the source bytes and the tags include the
    record's transformation history, so two records only share a key when they
    come from the same bytes through the same steps.
    """
    name = record.filename or "_".join(record.files)
    source_hash = hashlib.md5(record.content_source).hexdigest()
    return CacheKey(
        identity=f"{name}__{source_hash}",
        version=version,
        tags=tuple(record.history) + tuple(tags),
    )
