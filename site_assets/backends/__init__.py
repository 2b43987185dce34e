"""Transformation backends: Sass compiler, minifier, image processing, optimization and media infos."""

from dataclasses import dataclass, field

from .image import ImageBackend
from .media import MediaBackend, MediaInfo
from .minifier import Minifier
from .optimizer import ImageOptimizer
from .sass import SassCompiler, SassError


@dataclass
class Backends:
    """The set of external capabilities the pipeline calls into."""
    compiler: SassCompiler = field(default_factory=SassCompiler)
    minifier: Minifier = field(default_factory=Minifier)
    image: ImageBackend = field(default_factory=ImageBackend)
    optimizer: ImageOptimizer = field(default_factory=ImageOptimizer)
    media: MediaBackend = field(default_factory=MediaBackend)


__all__ = ['Backends', 'ImageBackend', 'ImageOptimizer', 'MediaBackend', 'MediaInfo', 'Minifier',
           'SassCompiler', 'SassError']
