"""Data models for the asset pipeline."""

from .asset_record import AssetRecord, FileInfo, MissingFile

__all__ = ['AssetRecord', 'FileInfo', 'MissingFile']
