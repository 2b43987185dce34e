#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pillow image backend: geometry, EXIF, resize, format conversion and data URLs.
"""

import base64
import logging
import re
import warnings
import xml.etree.ElementTree as ET
from io import BytesIO
from typing import Any, Dict, Optional, Tuple

from PIL import ExifTags, Image, UnidentifiedImageError

from ..errors import AssetError
from ..models.asset_record import AssetRecord

# Suppress PIL warnings
warnings.filterwarnings("ignore", category=UserWarning,
                        message=".*Palette images with Transparency expressed in bytes.*")
logging.getLogger("PIL").setLevel(logging.WARNING)

_LENGTH = re.compile(r"^\s*([0-9.]+)\s*(px)?\s*$")
_LOSSY = {"JPEG", "WEBP", "AVIF"}


def _save_kwargs(fmt: str, quality: int) -> Dict[str, Any]:
    if fmt.upper() in _LOSSY:
        return {"quality": quality}
    if fmt.upper() == "PNG":
        return {"optimize": True}
    return {}


def _prepare_mode(img: Image.Image, fmt: str) -> Image.Image:
    """Convert modes the target format can't store."""
    fmt = fmt.upper()
    if fmt == "JPEG" and img.mode not in ("RGB", "L"):
        return img.convert("RGB")
    if fmt in ("WEBP", "AVIF") and img.mode not in ("RGB", "RGBA"):
        return img.convert("RGBA" if "transparency" in img.info or img.mode in ("LA", "PA", "P") else "RGB")
    return img


class ImageBackend:
    """Image operations on in-memory content."""

    def dimensions(self, content: bytes) -> Tuple[int, int]:
        """Width and height from the image header; raises AssetError if unreadable."""
        try:
            with Image.open(BytesIO(content)) as img:
                return img.size
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise AssetError(f"Not able to read image size: {e}") from e

    def svg_attributes(self, content: bytes) -> Optional[Tuple[int, int]]:
        """Width/height of an SVG document (attributes, then viewBox)."""
        try:
            root = ET.fromstring(content)
        except ET.ParseError:
            return None
        width, height = root.get("width"), root.get("height")
        parsed = [_LENGTH.match(v) if v else None for v in (width, height)]
        if all(parsed):
            return int(float(parsed[0].group(1))), int(float(parsed[1].group(1)))
        view_box = root.get("viewBox")
        if view_box:
            parts = view_box.replace(",", " ").split()
            if len(parts) == 4:
                return int(float(parts[2])), int(float(parts[3]))
        return None

    def exif(self, content: bytes) -> Dict[str, Any]:
        """EXIF tags by name; non-scalar values are stringified."""
        data: Dict[str, Any] = {}
        try:
            with Image.open(BytesIO(content)) as img:
                for tag_id, value in img.getexif().items():
                    name = ExifTags.TAGS.get(tag_id, str(tag_id))
                    if isinstance(value, bytes):
                        continue
                    if not isinstance(value, (int, float, str)):
                        value = str(value)
                    data[name] = value
        except (UnidentifiedImageError, OSError):
            return {}
        return data

    def resize(self, record: AssetRecord, width: int, quality: int) -> bytes:
        """Re-render the image at ``width``, keeping the aspect ratio."""
        if record.is_svg:
            return record.content
        with Image.open(BytesIO(record.content)) as img:
            fmt = img.format or record.ext.upper()
            height = max(1, round(img.height * width / img.width))
            resized = img.resize((width, height), Image.LANCZOS)
            out = BytesIO()
            _prepare_mode(resized, fmt).save(out, format=fmt, **_save_kwargs(fmt, quality))
            return out.getvalue()

    def convert(self, record: AssetRecord, fmt: str, quality: int) -> bytes:
        """Re-encode the image to ``fmt`` (e.g. 'webp')."""
        if record.is_svg:
            raise AssetError(f'Not able to convert "{record.path}": SVG is not a raster image.')
        with Image.open(BytesIO(record.content)) as img:
            out = BytesIO()
            _prepare_mode(img, fmt).save(out, format=fmt.upper(), **_save_kwargs(fmt, quality))
            return out.getvalue()

    def data_url(self, record: AssetRecord, quality: int) -> str:
        """Base64 data URL of the image re-encoded at ``quality``."""
        with Image.open(BytesIO(record.content)) as img:
            fmt = img.format or record.ext.upper()
            out = BytesIO()
            _prepare_mode(img, fmt).save(out, format=fmt, **_save_kwargs(fmt, quality))
            mime = Image.MIME.get(fmt, record.subtype)
        return f"data:{mime};base64,{base64.b64encode(out.getvalue()).decode('ascii')}"
