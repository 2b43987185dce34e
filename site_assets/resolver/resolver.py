#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File resolution: turns a logical asset path or URL into a loaded source file.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..errors import AssetError
from ..models.asset_record import FileInfo, MissingFile
from ..utils.fs import dump_file
from ..utils.path import join_path, relative_to
from .locator import FileLocator
from .metadata import get_mime_type
from .remote import is_url, remote_cache_name

logger = logging.getLogger(__name__)


class FileResolver:
    """Locates local or remote sources and loads them with their media type."""

    def __init__(self, context):
        self.context = context
        self.locator = FileLocator(context)

    def resolve(self, path: str, ignore_missing: bool = False,
                remote_fallback: Optional[str] = None,
                force_slash: bool = True) -> Union[FileInfo, MissingFile]:
        """Resolve ``path``.

        Args:
            path: Path relative to the assets/static directories, or a URL
            ignore_missing: Return a MissingFile instead of raising
            remote_fallback: Local path used when a remote file can't be fetched
            force_slash: Prefix the public path with '/'

        Returns:
            FileInfo for the loaded file, or MissingFile when tolerated
        """
        try:
            root, filepath = self._find(path, remote_fallback)
        except AssetError as e:
            if ignore_missing:
                logger.debug("Asset %s is missing: %s", path, e)
                return MissingFile(path=path)
            raise AssetError(f'Can\'t load asset file "{path}" ({e}).') from e

        url = None
        public_path = path
        if is_url(path):
            url = path
            public_path = join_path(self.context.config.target, relative_to(filepath, root))
            force_slash = True
        if force_slash:
            public_path = "/" + public_path.lstrip("/")

        content = filepath.read_bytes()
        file_type, subtype = get_mime_type(filepath, content)
        return FileInfo(
            filepath=filepath,
            path=public_path,
            content=content,
            ext=_extension(public_path),
            type=file_type,
            subtype=subtype,
            size=len(content),
            url=url,
        )

    def _find(self, path: str, remote_fallback: Optional[str]) -> Tuple[Path, Path]:
        """Return ``(root, filepath)``: remote cache first for URLs, then local layers."""
        if not is_url(path):
            return self.locator.locate(path)

        remote_root = self.context.cache_assets_remote_path
        filepath = remote_root / remote_cache_name(path)
        if filepath.is_file():
            return remote_root, filepath
        try:
            content = self.context.fetcher.fetch(path)
        except AssetError:
            if remote_fallback:
                logger.debug("Falling back to %s for %s", remote_fallback, path)
                return self.locator.locate(remote_fallback)
            raise
        dump_file(filepath, content)
        logger.debug("Remote asset %s cached as %s", path, filepath)
        return remote_root, filepath


def _extension(public_path: str) -> str:
    name = public_path.rsplit("/", 1)[-1]
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""
