#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data structures for resolved files and asset records.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class FileInfo:
    """A source file located by the resolver."""
    filepath: Path
    path: str              # public path
    content: bytes
    ext: str
    type: str              # 'image', 'text', 'audio', ...
    subtype: str           # MIME type
    size: int
    url: Optional[str] = None
    missing: bool = False


@dataclass(frozen=True)
class MissingFile:
    """Marker for a source that is absent but tolerated."""
    path: str
    missing: bool = True
    type: str = ""


@dataclass(frozen=True)
class AssetRecord:
    """Immutable snapshot of an asset; transformations derive new records."""
    files: Tuple[str, ...] = ()
    file: str = ""
    filename: str = ""
    path_source: str = ""
    path: str = ""
    url: Optional[str] = None
    missing: bool = False

    ext: str = ""
    type: str = ""
    subtype: str = ""
    size: int = 0

    content_source: bytes = b""
    content: bytes = b""

    width: int = 0
    height: int = 0
    exif: Dict[str, Any] = field(default_factory=dict, compare=False)

    fingerprinted: bool = False
    compiled: bool = False
    minified: bool = False

    # Transformation tags applied so far, in order
    history: Tuple[str, ...] = ()

    def derive(self, *tags: str, **changes: Any) -> "AssetRecord":
        """Return a copy with ``changes`` applied and ``tags`` appended to history."""
        if tags:
            changes["history"] = self.history + tags
        return replace(self, **changes)

    @property
    def is_image(self) -> bool:
        return self.type == "image"

    @property
    def is_svg(self) -> bool:
        return self.subtype == "image/svg+xml" or self.ext == "svg"

    def text(self) -> str:
        """Current content decoded as UTF-8."""
        return self.content.decode("utf-8")
