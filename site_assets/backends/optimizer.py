#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
In-place image optimization of published files.
"""

import logging
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..utils.fs import dump_file

logger = logging.getLogger(__name__)


class ImageOptimizer:
    """Re-encodes a file with Pillow's optimizer and keeps the result only if smaller."""

    def optimize(self, filepath: Path, quality: int) -> bool:
        filepath = Path(filepath)
        original = filepath.read_bytes()
        try:
            with Image.open(BytesIO(original)) as img:
                fmt = img.format
                if fmt not in ("JPEG", "PNG", "WEBP", "GIF"):
                    return False
                out = BytesIO()
                if fmt in ("JPEG", "WEBP"):
                    img.save(out, format=fmt, quality=quality, optimize=True)
                else:
                    img.save(out, format=fmt, optimize=True)
        except (UnidentifiedImageError, OSError) as e:
            logger.debug("Skipping optimization of %s: %s", filepath, e)
            return False

        optimized = out.getvalue()
        if len(optimized) >= len(original):
            return False
        dump_file(filepath, optimized)
        return True
