#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Build context: paths, flags and service handles threaded through the pipeline.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Tuple

from . import __version__
from .backends import Backends
from .cache.store import CacheStore
from .config import (
    AssetsConfig,
    DEFAULT_CACHE_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_STATIC_DIR,
    DEFAULT_THEMES_DIR,
)
from .resolver.remote import RemoteFetcher


@dataclass
class BuildContext:
    """Everything an asset needs from the enclosing build."""
    root: Path
    config: AssetsConfig = field(default_factory=AssetsConfig)
    themes: Tuple[str, ...] = ()
    debug: bool = False
    dry_run: bool = False
    version: str = __version__
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("site_assets"))

    static_dir: str = DEFAULT_STATIC_DIR
    themes_dir: str = DEFAULT_THEMES_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    cache_root: str = DEFAULT_CACHE_DIR

    backends: Backends = field(default_factory=Backends)
    fetcher: Optional[RemoteFetcher] = None
    cache: Optional[CacheStore] = None

    def __post_init__(self):
        self.root = Path(self.root)
        self.themes = tuple(self.themes)
        if self.fetcher is None:
            self.fetcher = RemoteFetcher()
        if self.cache is None:
            self.cache = CacheStore(self.cache_assets_path)

    @classmethod
    def create(cls, root: Path, site_config: Optional[dict] = None,
               themes: Sequence[str] = (), **kwargs) -> "BuildContext":
        """Context from a nested site configuration mapping."""
        return cls(root=Path(root), config=AssetsConfig.from_dict(site_config),
                   themes=tuple(themes), **kwargs)

    @property
    def assets_path(self) -> Path:
        return self.root / self.config.assets_dir

    @property
    def static_path(self) -> Path:
        return self.root / self.static_dir

    @property
    def output_path(self) -> Path:
        return self.root / self.output_dir

    @property
    def cache_assets_path(self) -> Path:
        return self.root / self.cache_root / self.config.cache_dir

    @property
    def cache_assets_remote_path(self) -> Path:
        return self.cache_assets_path / "remote"

    def theme_dir(self, theme: str, sub: str = "") -> Path:
        path = self.root / self.themes_dir / theme
        return path / sub if sub else path

    @property
    def sourcemap(self) -> bool:
        """Source maps are only produced by debug builds."""
        return self.debug and self.config.compile_sourcemap
