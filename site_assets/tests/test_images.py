#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for image metadata, resize, format conversion and optimization.
"""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from PIL import Image

from site_assets import Asset
from site_assets.errors import AssetError


def decoded_size(content: bytes):
    with Image.open(BytesIO(content)) as img:
        return img.size


class TestImageMetadata:

    def test_raster_dimensions(self, context):
        record = Asset(context, "images/photo.jpg").record
        assert (record.type, record.subtype) == ("image", "image/jpeg")
        assert (record.width, record.height) == (200, 100)

    def test_jpeg_exif(self, context):
        assert Asset(context, "images/photo.jpg").record.exif.get("Make") == "TestMake"

    def test_png_has_no_exif(self, context):
        assert Asset(context, "images/logo.png").record.exif == {}

    def test_svg_dimensions(self, context):
        record = Asset(context, "images/icon.svg").record
        assert (record.width, record.height) == (64, 32)

    def test_corrupted_image_is_an_error(self, context, site):
        (site / "assets/images/broken.png").write_bytes(b"\x89PNG not really")
        with pytest.raises(AssetError, match="broken.png"):
            Asset(context, "images/broken.png")


class TestResize:

    def test_resize_returns_new_asset(self, context):
        original = Asset(context, "images/photo.jpg")
        resized = original.resize(50)

        assert resized is not original
        assert (resized.record.width, resized.record.height) == (50, 25)
        assert resized.path == "/assets/thumbnails/50/images/photo.jpg"
        assert decoded_size(resized.content) == (50, 25)
        assert resized.record.size == len(resized.content)
        # the base image is untouched
        assert original.record.width == 200
        assert original.path == "/images/photo.jpg"

    def test_several_widths_from_one_base(self, context):
        base = Asset(context, "images/logo.png")
        widths = [base.resize(w).record.width for w in (30, 60, 90)]
        assert widths == [30, 60, 90]
        assert base.record.width == 120

    def test_never_upscales(self, context):
        asset = Asset(context, "images/logo.png")
        entries = len(list(context.cache_assets_path.glob("*.pkl")))
        assert asset.resize(120) is asset
        assert asset.resize(500) is asset
        assert len(list(context.cache_assets_path.glob("*.pkl"))) == entries

    def test_resize_is_cached(self, context):
        Asset(context, "images/logo.png").resize(60)
        context.backends.image = MagicMock(wraps=context.backends.image)
        again = Asset(context, "images/logo.png").resize(60)
        context.backends.image.resize.assert_not_called()
        assert again.record.width == 60

    def test_svg_resize_keeps_ratio(self, context):
        resized = Asset(context, "images/icon.svg").resize(32)
        assert (resized.record.width, resized.record.height) == (32, 16)

    def test_missing_source(self, context):
        with pytest.raises(AssetError, match="file not found"):
            Asset(context, "nope.png", ignore_missing=True).resize(10)

    def test_not_an_image(self, context):
        with pytest.raises(AssetError, match="not an image"):
            Asset(context, "css/style.css").resize(10)


class TestConvert:

    def test_webp(self, context):
        original = Asset(context, "images/logo.png")
        webp = original.webp()
        assert webp.path == "/images/logo.webp"
        assert (webp.record.ext, webp.record.subtype) == ("webp", "image/webp")
        assert webp.content[:4] == b"RIFF"
        assert webp.record.size == len(webp.content)
        assert original.record.ext == "png"

    def test_resized_then_converted(self, context):
        webp = Asset(context, "images/photo.jpg").resize(100).webp(quality=50)
        assert webp.path == "/assets/thumbnails/100/images/photo.webp"
        assert decoded_size(webp.content) == (100, 50)
        assert webp.record.history[-2:] == ("q50", "webp")

    def test_not_an_image(self, context):
        with pytest.raises(AssetError, match="not an image"):
            Asset(context, "js/app.js").webp()


class TestOptimize:

    def test_optimize_after_save(self, context):
        asset = Asset(context, "images/logo.png", optimize=True)
        assert str(asset) == "/images/logo.png"
        written = context.output_path / "images/logo.png"
        assert written.exists()
        assert "optimized" in asset.record.history
        assert asset.content == written.read_bytes()
        assert asset.record.size == written.stat().st_size

    def test_optimize_ignores_non_images(self, context, site):
        asset = Asset(context, "css/style.css")
        before = asset.record
        assert asset.optimize(site / "assets/css/style.css").record is before

    def test_optimize_logs_reduction(self, context, caplog):
        optimizer = MagicMock()

        def shrink(filepath, quality):
            filepath.write_bytes(filepath.read_bytes()[:100])
            return True

        optimizer.optimize.side_effect = shrink
        context.backends.optimizer = optimizer
        asset = Asset(context, "images/photo.jpg", optimize=True)
        with caplog.at_level("DEBUG", logger="site_assets"):
            asset.save()
        optimizer.optimize.assert_called_once()
        assert asset.record.size == 100
        assert "Ko ->" in caplog.text


class TestDataUrl:

    def test_raster(self, context):
        assert Asset(context, "images/logo.png").data_url().startswith("data:image/png;base64,")

    def test_svg_is_not_reencoded(self, context):
        assert Asset(context, "images/icon.svg").data_url().startswith("data:image/svg+xml;base64,")
