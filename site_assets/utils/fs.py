#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Filesystem helpers shared by the cache store, the remote cache and the publisher.
"""

import os
import tempfile
from pathlib import Path
from typing import Union

from .path import ensure_dir


def dump_file(path: Path, content: Union[bytes, str]) -> None:
    """Write ``content`` to ``path`` atomically.

    Data goes to a temporary file in the target directory first and is then
    renamed over the destination, so readers never see a partial file.
    """
    path = Path(path)
    ensure_dir(path.parent)
    if isinstance(content, str):
        content = content.encode("utf-8")
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def file_size(path: Path) -> int:
    return Path(path).stat().st_size
