#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Global configuration and constants for the asset pipeline.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# Output styles accepted by the Sass compiler
COMPILE_STYLES: Tuple[str, ...] = ("expanded", "compressed")
SASS_EXT = {"scss", "sass"}
MINIFY_EXT = {"css", "js"}

# Default bundle names keyed by the bundle's common extension
BUNDLE_FILENAMES: Dict[str, str] = {
    "scss": "/styles.css",
    "css": "/styles.css",
    "js": "/scripts.js",
}

# Defaults (overridden by the site configuration)
DEFAULT_QUALITY = 75
DEFAULT_TARGET = "assets"
DEFAULT_ASSETS_DIR = "assets"
DEFAULT_STATIC_DIR = "static"
DEFAULT_THEMES_DIR = "themes"
DEFAULT_OUTPUT_DIR = "_site"
DEFAULT_CACHE_DIR = ".cache"
DEFAULT_CACHE_ASSETS_DIR = "assets"
DEFAULT_RESIZE_DIR = "thumbnails"
DEFAULT_COMPILE_STYLE = "expanded"
DEFAULT_COMPILE_IMPORT: Tuple[str, ...] = ("sass", "scss", "node_modules")
DEFAULT_CDN_URL = (
    "https://res.cloudinary.com/%account%/image/fetch/"
    "c_limit,w_%width%,q_%quality%,f_%format%,d_default/%image_url%"
)
DEFAULT_REMOTE_TIMEOUT = 10


def _lookup(data: Mapping[str, Any], dotted: str, default: Any = None) -> Any:
    """Walk a nested mapping with a dotted key."""
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return default
        node = node[part]
    return default if node is None else node


@dataclass(frozen=True)
class CdnConfig:
    """Image CDN settings."""
    enabled: bool = False
    svg: bool = False
    remote: bool = True
    account: str = ""
    url: str = DEFAULT_CDN_URL
    canonical: bool = True


@dataclass(frozen=True)
class AssetsConfig:
    """Immutable snapshot of every setting the pipeline reads."""
    fingerprint: bool = True
    minify: bool = True
    optimize: bool = False

    compile: bool = True
    compile_style: str = DEFAULT_COMPILE_STYLE
    compile_import: Tuple[str, ...] = DEFAULT_COMPILE_IMPORT
    compile_sourcemap: bool = False
    compile_variables: Mapping[str, Any] = field(default_factory=dict)

    quality: int = DEFAULT_QUALITY
    cdn: CdnConfig = field(default_factory=CdnConfig)

    target: str = DEFAULT_TARGET
    resize_dir: str = DEFAULT_RESIZE_DIR
    cache_dir: str = DEFAULT_CACHE_ASSETS_DIR
    assets_dir: str = DEFAULT_ASSETS_DIR

    baseurl: str = ""
    canonicalurl: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> "AssetsConfig":
        """Build a snapshot from a nested site configuration mapping.

        Keys follow the site configuration layout, e.g.
        ``{"assets": {"fingerprint": {"enabled": False}}}``. Anything not
        provided keeps its default.
        """
        data = data or {}

        def get(key: str, default: Any) -> Any:
            return _lookup(data, key, default)

        cdn = CdnConfig(
            enabled=bool(get("assets.images.cdn.enabled", False)),
            svg=bool(get("assets.images.cdn.svg", False)),
            remote=bool(get("assets.images.cdn.remote", True)),
            account=str(get("assets.images.cdn.account", "")),
            url=str(get("assets.images.cdn.url", DEFAULT_CDN_URL)),
            canonical=bool(get("assets.images.cdn.canonical", True)),
        )
        return cls(
            fingerprint=bool(get("assets.fingerprint.enabled", True)),
            minify=bool(get("assets.minify.enabled", True)),
            optimize=bool(get("assets.images.optimize.enabled", False)),
            compile=bool(get("assets.compile.enabled", True)),
            compile_style=str(get("assets.compile.style", DEFAULT_COMPILE_STYLE)),
            compile_import=tuple(get("assets.compile.import", DEFAULT_COMPILE_IMPORT)),
            compile_sourcemap=bool(get("assets.compile.sourcemap", False)),
            compile_variables=dict(get("assets.compile.variables", {})),
            quality=int(get("assets.images.quality", DEFAULT_QUALITY)),
            cdn=cdn,
            target=str(get("assets.target", DEFAULT_TARGET)),
            resize_dir=str(get("assets.images.resize.dir", DEFAULT_RESIZE_DIR)),
            cache_dir=str(get("cache.assets.dir", DEFAULT_CACHE_ASSETS_DIR)),
            assets_dir=str(get("assets.dir", DEFAULT_ASSETS_DIR)),
            baseurl=str(get("baseurl", "")),
            canonicalurl=bool(get("canonicalurl", False)),
        )
