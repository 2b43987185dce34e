#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Audio and video stream information through mutagen.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import mutagen

from ..errors import AssetError


@dataclass(frozen=True)
class MediaInfo:
    """Stream properties of an audio or video file."""
    duration: float            # seconds
    bitrate: int               # bits per second, 0 if unknown
    sample_rate: int
    channels: int
    codec: Optional[str] = None
    mime: Optional[str] = None


class MediaBackend:
    """Reads stream information of MP3, MP4 and the other formats mutagen knows."""

    def info(self, filepath: Path) -> MediaInfo:
        try:
            media = mutagen.File(str(filepath))
        except (mutagen.MutagenError, OSError) as e:
            raise AssetError(f'Not able to read media infos of "{filepath}": {e}') from e
        if media is None or media.info is None:
            raise AssetError(f'Not able to read media infos of "{filepath}": unsupported format.')

        stream = media.info
        return MediaInfo(
            duration=float(getattr(stream, "length", 0.0) or 0.0),
            bitrate=int(getattr(stream, "bitrate", 0) or 0),
            sample_rate=int(getattr(stream, "sample_rate", 0) or 0),
            channels=int(getattr(stream, "channels", 0) or 0),
            codec=getattr(stream, "codec", None),
            mime=media.mime[0] if media.mime else None,
        )
