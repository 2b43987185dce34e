"""Cache store and keys for the asset pipeline."""

from .key import CacheKey, key_for_paths, key_for_record
from .store import CacheStore

__all__ = ['CacheKey', 'CacheStore', 'key_for_paths', 'key_for_record']
