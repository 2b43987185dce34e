"""Asset pipeline for static sites: resolve, transform, cache and publish assets."""

__version__ = "1.0.0"
__author__ = "Site Assets Team"

# Import key classes for convenient top-level access
from .asset import Asset
from .backends import MediaInfo
from .batch import build_assets
from .cache import CacheKey, CacheStore
from .cdn import CdnRedirector
from .config import AssetsConfig, CdnConfig
from .context import BuildContext
from .errors import AssetError, BundleError, ConfigError, EmptyError, NotFoundError
from .models import AssetRecord, FileInfo, MissingFile
from .publisher import Publisher
from .resolver import FileResolver, RemoteFetcher

__all__ = [
    # Core classes
    'Asset',
    'BuildContext',
    'build_assets',

    # Pipeline components
    'CacheKey',
    'CacheStore',
    'CdnRedirector',
    'FileResolver',
    'Publisher',
    'RemoteFetcher',

    # Configuration
    'AssetsConfig',
    'CdnConfig',

    # Data models
    'AssetRecord',
    'FileInfo',
    'MediaInfo',
    'MissingFile',

    # Errors
    'AssetError',
    'BundleError',
    'ConfigError',
    'EmptyError',
    'NotFoundError',

    # Package metadata
    '__version__',
    '__author__'
]
