"""Utility functions for the asset pipeline."""

from .path import ensure_dir, join_path, output_file, relative_to
from .fs import dump_file, file_size
from .text import slugify, sanitize

__all__ = [
    'ensure_dir', 'join_path', 'output_file', 'relative_to',
    'dump_file', 'file_size', 'slugify', 'sanitize',
]
