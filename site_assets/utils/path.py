#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Path utility functions for the asset pipeline.
"""

import os
import re
from pathlib import Path


def ensure_dir(p: Path) -> None:
    """Ensure directory exists, creating it if necessary."""
    p.mkdir(parents=True, exist_ok=True)


def join_path(*parts: str) -> str:
    """Join public path segments with '/', collapsing duplicate separators."""
    joined = "/".join(str(p).replace("\\", "/").strip("/") for p in parts if str(p).strip("/"))
    return re.sub(r"/{2,}", "/", joined)


def output_file(root: Path, public_path: str) -> Path:
    """Map a public path onto a file below ``root``."""
    return Path(root) / public_path.lstrip("/")


def relative_to(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with '/' separators, or '' if outside."""
    rel = os.path.relpath(Path(path), Path(root))
    if rel.startswith(".."):
        return ""
    return rel.replace(os.sep, "/")
