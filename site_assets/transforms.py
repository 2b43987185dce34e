#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Transformation steps.

Each step takes a record and returns a new one; latches, caching and CDN
short-circuits are handled by ``Asset``.
"""

import hashlib
import os
import re
from pathlib import Path
from typing import Callable, List

from .config import COMPILE_STYLES
from .errors import ConfigError
from .models.asset_record import AssetRecord
from .utils.path import join_path, relative_to

# A "sass"/"scss" path segment or extension, in any case
_SASS_SEGMENT = re.compile(r"(?<![^/.])(?:sass|scss)(?=/|$)", re.IGNORECASE)


def _replace_ext(path: str, ext: str, replacement: Callable[[str], str]) -> str:
    """Rewrite the trailing extension; ``replacement`` gets it as written in ``path``."""
    return re.sub(rf"\.({re.escape(ext)})$", lambda m: replacement(m.group(1)), path, flags=re.IGNORECASE)


def fingerprint(record: AssetRecord) -> AssetRecord:
    """Insert the md5 of the source content before the extension."""
    digest = hashlib.md5(record.content_source).hexdigest()
    path = record.path
    if record.ext:
        path = _replace_ext(path, record.ext, lambda ext: f".{digest}.{ext}")
    return record.derive("fingerprinted", path=path, fingerprinted=True)


def compile_style(context) -> str:
    style = context.config.compile_style.lower()
    if style not in COMPILE_STYLES:
        raise ConfigError('"assets.compile.style" value must be "{}".'.format('" or "'.join(COMPILE_STYLES)))
    return style


def import_paths(record: AssetRecord, context) -> List[str]:
    """Directories searched by Sass ``@import``, without duplicates."""
    dirs: List[Path] = [context.static_path, context.assets_path]
    source_dir = Path(record.file).parent if record.file else None
    if source_dir is not None:
        dirs.append(source_dir)
    for theme in context.themes:
        dirs += [context.theme_dir(theme, "static"), context.theme_dir(theme, "assets")]
    for sub in context.config.compile_import:
        dirs += [context.static_path / sub, context.assets_path / sub]
        if source_dir is not None:
            dirs.append(source_dir / sub)
        for theme in context.themes:
            dirs += [context.theme_dir(theme, f"static/{sub}"), context.theme_dir(theme, f"assets/{sub}")]
    return list(dict.fromkeys(str(d) for d in dirs))


def sourcemap_import_paths(record: AssetRecord, context) -> List[str]:
    """Import paths pointing at the copies in the output tree."""
    rel = relative_to(Path(record.file), context.assets_path) or os.path.basename(record.file)
    dirs = [str((context.output_path / rel).parent)]
    dirs += [str(context.output_path / sub) for sub in context.config.compile_import]
    return list(dict.fromkeys(dirs))


def compile_sass(record: AssetRecord, context) -> AssetRecord:
    """Compile a Sass/SCSS record to CSS."""
    sourcemap = None
    paths = import_paths(record, context)
    if context.sourcemap:
        paths = sourcemap_import_paths(record, context)
        sourcemap = {"root": "/"}
    css = context.backends.compiler.compile(
        record.text(),
        import_paths=paths,
        style=compile_style(context),
        variables=context.config.compile_variables,
        sourcemap=sourcemap,
        indented=record.ext == "sass",
    )
    content = css.encode("utf-8")
    return record.derive(
        "compiled",
        path=_SASS_SEGMENT.sub("css", record.path),
        ext="css",
        type="text",
        subtype="text/css",
        content=content,
        size=len(content),
        compiled=True,
    )


def minify(record: AssetRecord, context) -> AssetRecord:
    """Minify a CSS or JS record and mark its path with '.min.'."""
    content = context.backends.minifier.minify(record.text(), record.ext).encode("utf-8")
    return record.derive(
        "minified",
        path=_replace_ext(record.path, record.ext, lambda ext: f".min.{ext}"),
        content=content,
        size=len(content),
        minified=True,
    )


def resize(record: AssetRecord, width: int, quality: int, context) -> AssetRecord:
    """Re-render an image at ``width`` under the resize directory."""
    image = context.backends.image
    content = image.resize(record, width, quality)
    if record.is_svg:
        height = round(record.height * width / record.width) if record.width else record.height
    else:
        height = image.dimensions(content)[1]
    config = context.config
    return record.derive(
        f"{width}x", f"q{quality}",
        path="/" + join_path(config.target, config.resize_dir, str(width), record.path),
        content=content,
        width=width,
        height=height,
        size=len(content),
    )


def convert(record: AssetRecord, fmt: str, quality: int, source_ext: str, context) -> AssetRecord:
    """Re-encode an image to ``fmt``; ``source_ext`` is the extension being replaced."""
    content = context.backends.image.convert(record, fmt, quality)
    return record.derive(
        f"q{quality}", fmt,
        path=_replace_ext(record.path, source_ext, lambda _: f".{fmt}"),
        ext=fmt,
        subtype=f"image/{fmt}",
        content=content,
        size=len(content),
    )
