#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Text helpers: slugs for cache file names.
"""

import re
import unicodedata

# Anything that is not a lowercase letter, digit, '.', '_' or '/' becomes '-'
_SLUG_PATTERN = re.compile(r"(^/|[^._a-z0-9/]|-)+")
_UNSAFE = re.compile(r'[<>:"\\|?*]')


def slugify(value: str) -> str:
    """Turn a string into a lowercase, filesystem-safe slug keeping '/' and '.'."""
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = _SLUG_PATTERN.sub("-", value.lower())
    return value.strip("-")


def sanitize(value: str) -> str:
    """Replace characters that are unsafe in file names by '_'."""
    return _UNSAFE.sub("_", value)
