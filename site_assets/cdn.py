#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Image CDN redirection.
"""

from .models.asset_record import AssetRecord


def canonical_url(baseurl: str, path: str) -> str:
    """Absolute URL of a public path."""
    if not baseurl:
        return path
    return baseurl.rstrip("/") + "/" + path.lstrip("/")


class CdnRedirector:
    """Decides when an image is served by the CDN and builds its URL."""

    def __init__(self, context):
        self.context = context
        self.cdn = context.config.cdn

    def is_eligible(self, record: AssetRecord) -> bool:
        if not record.is_image or not self.cdn.enabled:
            return False
        if record.is_svg and not self.cdn.svg:
            return False
        # remote image?
        if record.url is not None and not self.cdn.remote:
            return False
        return True

    def build_url(self, record: AssetRecord) -> str:
        """Substitute the placeholders of the configured URL template."""
        config = self.context.config
        if record.url is not None:
            image_url = record.url
        elif self.cdn.canonical:
            image_url = canonical_url(config.baseurl, record.path)
        else:
            image_url = record.path
        replacements = {
            "%account%": self.cdn.account,
            "%image_url%": image_url.lstrip("/"),
            "%width%": str(record.width),
            "%quality%": str(config.quality),
            "%format%": record.ext,
        }
        url = self.cdn.url
        for placeholder, value in replacements.items():
            url = url.replace(placeholder, value)
        return url
