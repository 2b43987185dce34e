#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Layered lookup of local source files.
"""

from pathlib import Path
from typing import Iterator, Tuple

from ..errors import NotFoundError


class FileLocator:
    """Finds a logical path across the project and theme directories.

    Search order: project assets, each theme's assets, project static, each
    theme's static. Themes are searched in configured precedence order.
    """

    def __init__(self, context):
        self.context = context

    def search_roots(self) -> Iterator[Path]:
        ctx = self.context
        yield ctx.assets_path
        for theme in ctx.themes:
            yield ctx.theme_dir(theme, "assets")
        yield ctx.static_path
        for theme in ctx.themes:
            yield ctx.theme_dir(theme, "static")

    def locate(self, path: str) -> Tuple[Path, Path]:
        """Return ``(root, filepath)`` of the first match."""
        relative = path.lstrip("/")
        for root in self.search_roots():
            candidate = root / relative
            if candidate.is_file():
                return root, candidate
        raise NotFoundError(f'Can\'t find file "{path}".')
