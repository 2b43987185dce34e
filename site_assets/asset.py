#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Asset: a (possibly bundled) source reference resolved to one published file.
"""

import base64
import copy
import hashlib
import math
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Union

from . import transforms
from .backends.media import MediaInfo
from .cache.key import CacheKey, key_for_paths, key_for_record
from .cdn import CdnRedirector, canonical_url
from .config import BUNDLE_FILENAMES, MINIFY_EXT, SASS_EXT
from .errors import AssetError, BundleError
from .models.asset_record import AssetRecord, FileInfo
from .publisher import Publisher
from .resolver.metadata import image_size
from .resolver.resolver import FileResolver
from .utils.fs import dump_file


def _validate_paths(paths: Sequence[Any]) -> None:
    for path in paths:
        if not isinstance(path, str):
            raise AssetError(f'The path of an asset must be a string ("{type(path).__name__}" given).')
        if not path:
            raise AssetError("The path of an asset can't be empty.")
        if path.startswith(".."):
            raise AssetError(
                f'The path of asset "{path}" is wrong: it must be directly relative '
                'to "assets" or "static" directory, or a remote URL.'
            )


class Asset:
    """Loads source file(s) and applies the transformation chain.

    ``fingerprint()``, ``compile()`` and ``minify()`` update this asset in
    place and are no-ops once applied. ``resize()``, ``convert()`` and
    ``webp()`` return a new Asset and leave this one untouched.
    ``str(asset)`` publishes the file and returns its public URL.
    """

    def __init__(
        self,
        context,
        paths: Union[str, Sequence[str]],
        fingerprint: Optional[bool] = None,
        minify: Optional[bool] = None,
        optimize: Optional[bool] = None,
        filename: str = "",
        ignore_missing: bool = False,
        remote_fallback: Optional[str] = None,
        force_slash: bool = True,
    ):
        self.context = context
        self.config = context.config
        self.cache = context.cache
        self.cdn = CdnRedirector(context)
        self.ignore_missing = ignore_missing

        paths = list(paths) if isinstance(paths, (list, tuple)) else [paths]
        _validate_paths(paths)
        self.record = self._load(paths, filename, ignore_missing, remote_fallback, force_slash)

        self.optimize_on_save = self.config.optimize if optimize is None else optimize
        if self.config.fingerprint if fingerprint is None else fingerprint:
            self.fingerprint()
        if self.config.compile:
            self.compile()
        if self.config.minify if minify is None else minify:
            self.minify()

    # -- loading ---------------------------------------------------------

    def _load(self, paths: List[str], filename: str, ignore_missing: bool,
              remote_fallback: Optional[str], force_slash: bool) -> AssetRecord:
        key = key_for_paths(filename or "_".join(paths), self.context.version)
        if self.cache.has(key):
            return self.cache.get(key)

        resolver = FileResolver(self.context)
        loaded: List[FileInfo] = []
        missing_path = None
        for path in paths:
            info = resolver.resolve(path, ignore_missing, remote_fallback, force_slash)
            if info.missing:
                missing_path = info.path
                continue
            # bundle: same type only
            if loaded and info.type != loaded[-1].type:
                raise BundleError(f"Asset bundle type error ({info.type} != {loaded[-1].type}).")
            loaded.append(info)

        if not loaded:
            return AssetRecord(missing=True, path=missing_path or paths[0], filename=filename)

        record = self._build_record(loaded, filename, multiple=len(paths) > 1)
        if missing_path is not None:
            return record.derive(missing=True, path=missing_path)

        self.cache.set(key, record)
        return record

    def _build_record(self, loaded: List[FileInfo], filename: str, multiple: bool) -> AssetRecord:
        first = loaded[0]
        content = b"".join(info.content for info in loaded)
        width = height = 0
        exif = {}
        if first.type == "image":
            width, height = image_size(first.content, first.subtype, first.path, self.context.backends.image)
            if first.subtype == "image/jpeg":
                exif = self.context.backends.image.exif(first.content)

        # bundle: default filename
        if multiple and not filename:
            if first.ext not in BUNDLE_FILENAMES:
                raise BundleError("Asset bundle supports .scss, .css and .js files only.")
            filename = BUNDLE_FILENAMES[first.ext]

        path = first.path
        public_filename = first.path
        if filename:
            public_filename = filename
            path = "/" + filename.lstrip("/")

        return AssetRecord(
            files=tuple(str(info.filepath) for info in loaded),
            file=str(first.filepath),
            filename=public_filename,
            path_source=first.path,
            path=path,
            url=first.url,
            ext=first.ext,
            type=first.type,
            subtype=first.subtype,
            size=sum(info.size for info in loaded),
            content_source=content,
            content=content,
            width=width,
            height=height,
            exif=exif,
        )

    def _cached(self, key: CacheKey, compute: Callable[[], AssetRecord]) -> AssetRecord:
        if self.cache.has(key):
            return self.cache.get(key)
        record = compute()
        self.cache.set(key, record)
        return record

    def _spawn(self, record: AssetRecord) -> "Asset":
        derived = copy.copy(self)
        derived.record = record
        return derived

    # -- record access ---------------------------------------------------

    @property
    def path(self) -> str:
        return self.record.path

    @property
    def content(self) -> bytes:
        return self.record.content

    def __getitem__(self, name: str) -> Any:
        """Field access for templates; unknown fields read as None."""
        return getattr(self.record, name, None)

    # -- transformations -------------------------------------------------

    def fingerprint(self) -> "Asset":
        """Fingerprint the public path with the md5 of the source content."""
        if self.record.fingerprinted or self.record.missing:
            return self
        self.record = transforms.fingerprint(self.record)
        return self

    def compile(self) -> "Asset":
        """Compile Sass/SCSS to CSS."""
        record = self.record
        if record.compiled or record.ext not in SASS_EXT:
            return self
        transforms.compile_style(self.context)
        key = key_for_record(record, self.context.version, ["compiled"])
        self.record = self._cached(key, lambda: transforms.compile_sass(record, self.context))
        return self

    def minify(self) -> "Asset":
        """Minify CSS or JavaScript."""
        # keep the inline source map
        if self.context.sourcemap:
            return self
        if self.record.minified or self.record.missing:
            return self
        if self.record.ext in SASS_EXT:
            self.compile()
            if self.record.ext not in MINIFY_EXT:
                raise AssetError(f'Not able to minify "{self.record.path}".')
        record = self.record
        if record.ext not in MINIFY_EXT:
            return self
        if record.path.lower().endswith((".min.css", ".min.js")):
            return self
        key = key_for_record(record, self.context.version, ["minified"])
        self.record = self._cached(key, lambda: transforms.minify(record, self.context))
        return self

    def optimize(self, filepath: Path) -> "Asset":
        """Optimize the image already written at ``filepath``."""
        record = self.record
        if not record.is_image:
            return self
        quality = self.config.quality
        tags = [f"q{quality}", "optimized"]
        if record.width:
            tags.insert(0, f"{record.width}x")
        key = key_for_record(record, self.context.version, tags)
        filepath = Path(filepath)

        cached = self.cache.get(key)
        if cached is not None:
            if filepath.read_bytes() != cached.content:
                dump_file(filepath, cached.content)
            self.record = cached
            return self

        size_before = filepath.stat().st_size
        self.context.backends.optimizer.optimize(filepath, quality)
        size_after = filepath.stat().st_size
        message = str(filepath)
        if size_after < size_before:
            message = f"{message} ({math.ceil(size_before / 1000)} Ko -> {math.ceil(size_after / 1000)} Ko)"
        self.record = record.derive("optimized", content=filepath.read_bytes(), size=size_after)
        self.cache.set(key, self.record)
        self.context.logger.debug('Asset "%s" optimized', message)
        return self

    def resize(self, width: int) -> "Asset":
        """Return a copy of this image resized to ``width`` (never upscaled)."""
        record = self.record
        if record.missing:
            raise AssetError(f'Not able to resize "{record.path}": file not found.')
        if not record.is_image:
            raise AssetError(f'Not able to resize "{record.path}": not an image.')
        if width >= record.width:
            return self

        if self.cdn.is_eligible(record):
            # the CDN does the rest of the job
            return self._spawn(record.derive(width=width))

        quality = self.config.quality
        key = key_for_record(record, self.context.version, [f"{width}x", f"q{quality}"])
        resized = self._cached(key, lambda: transforms.resize(record, width, quality, self.context))
        return self._spawn(resized)

    def convert(self, fmt: str, quality: Optional[int] = None) -> "Asset":
        """Return a copy of this image encoded as ``fmt``."""
        record = self.record
        if not record.is_image:
            raise AssetError(f'Not able to convert "{record.path}" ({record.type}) to {fmt}: not an image.')
        if quality is None:
            quality = self.config.quality

        converted = record.derive(ext=fmt)
        if self.cdn.is_eligible(converted):
            return self._spawn(converted)

        key = key_for_record(record, self.context.version, [f"q{quality}", fmt])
        result = self._cached(
            key, lambda: transforms.convert(converted, fmt, quality, record.ext, self.context)
        )
        return self._spawn(result)

    def webp(self, quality: Optional[int] = None) -> "Asset":
        return self.convert("webp", quality)

    # -- media infos -----------------------------------------------------

    def audio(self) -> MediaInfo:
        """Stream infos (duration, bitrate, ...) of an audio file."""
        if self.record.type != "audio":
            raise AssetError(f'Not able to get audio infos of "{self.record.path}".')
        return self.context.backends.media.info(Path(self.record.file))

    def video(self) -> MediaInfo:
        if self.record.type != "video":
            raise AssetError(f'Not able to get video infos of "{self.record.path}".')
        return self.context.backends.media.info(Path(self.record.file))

    # -- outputs ---------------------------------------------------------

    def integrity(self, algo: str = "sha384") -> str:
        """Subresource Integrity hash of the current content."""
        digest = hashlib.new(algo, self.record.content).digest()
        return f"{algo}-{base64.b64encode(digest).decode('ascii')}"

    def data_url(self) -> str:
        """Content as a base64 data URL."""
        record = self.record
        if record.is_image and not record.is_svg:
            return self.context.backends.image.data_url(record, self.config.quality)
        return f"data:{record.subtype};base64,{base64.b64encode(record.content).decode('ascii')}"

    def save(self) -> Optional[Path]:
        """Write the file to the output tree (an existing file is kept)."""
        on_written = self.optimize if self.optimize_on_save else None
        return Publisher(self.context).publish(self.record, tolerate_missing=self.ignore_missing,
                                               on_written=on_written)

    def __str__(self) -> str:
        try:
            self.save()
        except AssetError as e:
            self.context.logger.error(str(e))

        if self.cdn.is_eligible(self.record):
            return self.cdn.build_url(self.record)
        if self.config.canonicalurl:
            return canonical_url(self.config.baseurl, self.record.path)
        return self.record.path

    def __repr__(self) -> str:
        return f"Asset({self.record.path!r})"
