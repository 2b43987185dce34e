#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Publishing of asset content to the output tree.
"""

from pathlib import Path
from typing import Callable, Optional

from .cdn import CdnRedirector
from .errors import AssetError
from .models.asset_record import AssetRecord
from .utils.fs import dump_file
from .utils.path import output_file


class Publisher:
    """Writes records to ``output_path/<path>``.

    A file already present in the output tree is never overwritten, so a
    static file takes precedence over a generated asset of the same name.
    """

    def __init__(self, context):
        self.context = context
        self.cdn = CdnRedirector(context)

    def target(self, record: AssetRecord) -> Path:
        return output_file(self.context.output_path, record.path)

    def publish(self, record: AssetRecord, tolerate_missing: bool = False,
                on_written: Optional[Callable[[Path], None]] = None) -> Optional[Path]:
        """Write ``record``; returns the written file or None when skipped."""
        logger = self.context.logger
        filepath = self.target(record)
        if self.context.dry_run or record.missing or self.cdn.is_eligible(record):
            return None
        if filepath.exists():
            return None

        try:
            dump_file(filepath, record.content)
        except OSError as e:
            if not tolerate_missing:
                raise AssetError(f'Can\'t save asset "{filepath}".') from e
            logger.error('Can\'t save asset "%s": %s', filepath, e)
            return None

        logger.debug('Asset "%s" saved', filepath)
        if on_written is not None:
            on_written(filepath)
        return filepath
