#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
CSS and JavaScript minification.
"""

import rcssmin
import rjsmin

from ..errors import AssetError


class Minifier:
    """Dispatches to rcssmin / rjsmin by extension."""

    def minify(self, source: str, ext: str) -> str:
        if ext == "css":
            return rcssmin.cssmin(source)
        if ext == "js":
            return rjsmin.jsmin(source)
        raise AssetError(f'Not able to minify ".{ext}" content.')
