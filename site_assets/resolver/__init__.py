"""Source file resolution: local layered search and remote fetch-and-cache."""

from .locator import FileLocator
from .metadata import get_mime_type, image_size
from .remote import RemoteFetcher, is_url, remote_cache_name
from .resolver import FileResolver

__all__ = [
    'FileLocator',
    'FileResolver',
    'RemoteFetcher',
    'get_mime_type',
    'image_size',
    'is_url',
    'remote_cache_name',
]
