#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Media type detection and image metadata extraction.
"""

import mimetypes
from io import BytesIO
from pathlib import Path
from typing import Dict, Tuple

from PIL import Image, UnidentifiedImageError

from ..backends.image import ImageBackend
from ..errors import AssetError

# Types the platform mimetypes table gets wrong or doesn't know
MIME_OVERRIDES: Dict[str, str] = {
    ".css": "text/css",
    ".scss": "text/x-scss",
    ".sass": "text/x-sass",
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".ico": "image/x-icon",
    ".json": "application/json",
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
}
DEFAULT_MIME = "application/octet-stream"


def get_mime_type(filepath: Path, content: bytes) -> Tuple[str, str]:
    """Return ``(type, subtype)``, e.g. ``('image', 'image/png')``.

    The extension decides first; unknown extensions are sniffed with Pillow.
    """
    suffix = Path(filepath).suffix.lower()
    mime = MIME_OVERRIDES.get(suffix) or mimetypes.guess_type(str(filepath))[0]
    if mime is None:
        try:
            with Image.open(BytesIO(content)) as img:
                mime = Image.MIME.get(img.format or "")
        except (UnidentifiedImageError, OSError):
            mime = None
    mime = mime or DEFAULT_MIME
    return mime.split("/", 1)[0], mime


def image_size(content: bytes, subtype: str, path: str, backend: ImageBackend) -> Tuple[int, int]:
    """Width and height of an image or SVG document."""
    if subtype == "image/svg+xml":
        size = backend.svg_attributes(content)
        if size is not None:
            return size
    try:
        return backend.dimensions(content)
    except AssetError as e:
        raise AssetError(f'Not able to get size of "{path}": {e}') from e

