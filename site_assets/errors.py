#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions raised by the asset pipeline.
"""


class AssetError(RuntimeError):
    """An asset can't produce a valid path/content pair."""


class NotFoundError(AssetError):
    """Source file (local or remote) can't be found."""


class EmptyError(AssetError):
    """Remote file was fetched but has no usable content."""


class BundleError(AssetError):
    """Files of a bundle can't be combined."""


class ConfigError(ValueError):
    """Invalid configuration value."""
