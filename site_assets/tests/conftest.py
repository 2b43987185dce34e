#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Shared fixtures: a throw-away site tree with assets, static files and a theme.
"""

from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from site_assets.context import BuildContext
from site_assets.resolver.remote import RemoteFetcher

SVG_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="64" height="32" viewBox="0 0 64 32">'
    '<rect width="64" height="32" fill="#c00"/></svg>'
)


def write(root: Path, relative: str, content) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def make_image(path: Path, size=(200, 100), fmt="PNG", color=(200, 30, 30), exif=None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", size, color)
    # a gradient keeps encoders from producing trivially small files
    for x in range(size[0]):
        img.putpixel((x, x % size[1]), (x % 256, 120, 255 - x % 256))
    kwargs = {}
    if exif is not None:
        kwargs["exif"] = exif.tobytes()
    img.save(path, format=fmt, **kwargs)
    return path


def png_bytes(size=(40, 20)) -> bytes:
    out = BytesIO()
    Image.new("RGB", size, (0, 128, 255)).save(out, format="PNG")
    return out.getvalue()


def mp3_bytes(frames: int = 40) -> bytes:
    """Silent MPEG-1 Layer III stream: 128 kbps, 44.1 kHz, joint stereo."""
    header = b"\xff\xfb\x90\x64"
    # 144 * 128000 // 44100 bytes per frame, no padding
    frame = header + bytes(417 - len(header))
    return frame * frames


@pytest.fixture
def site(tmp_path):
    """Create a site tree under a temporary directory."""
    root = tmp_path / "site"
    write(root, "assets/css/style.css", "body {\n  color: red;\n}\n")
    write(root, "assets/css/extra.css", "p {\n  margin: 0;\n}\n")
    write(root, "assets/css/shared.css", "/* project */\n")
    write(root, "assets/js/app.js", "function add(a, b) {\n  return a + b;\n}\n")
    write(root, "assets/js/util.js", "var answer = 42;\n")
    write(root, "assets/js/lib.min.js", "var x=1;")
    write(root, "assets/scss/_vars.scss", "$color: #333 !default;\n")
    write(root, "assets/scss/main.scss", '@import "vars";\nbody {\n  color: $color;\n}\n')
    write(root, "assets/scss/other.scss", "a {\n  b {\n    color: blue;\n  }\n}\n")
    write(root, "assets/images/icon.svg", SVG_ICON)
    make_image(root / "assets/images/logo.png", size=(120, 60))
    make_image(root / "assets/images/other.png", size=(30, 30))

    exif = Image.Exif()
    exif[0x010F] = "TestMake"
    make_image(root / "assets/images/photo.jpg", size=(200, 100), fmt="JPEG", exif=exif)

    write(root, "themes/hyde/assets/css/shared.css", "/* theme */\n")
    write(root, "themes/hyde/assets/css/theme.css", ".hyde {}\n")
    write(root, "themes/hyde/assets/css/order.css", "/* theme assets */\n")
    write(root, "themes/hyde/static/humans.txt", "hyde team\n")
    write(root, "static/css/order.css", "/* static */\n")
    write(root, "static/robots.txt", "User-agent: *\n")
    return root


@pytest.fixture
def http_session():
    """A requests-like session returning a PNG for every URL."""
    session = MagicMock()
    response = MagicMock()
    response.content = png_bytes()
    session.get.return_value = response
    return session


@pytest.fixture
def make_context(site, http_session):
    """Factory building a BuildContext over the test site."""

    def _make(site_config=None, **kwargs):
        config = {
            "assets": {
                "fingerprint": {"enabled": False},
                "minify": {"enabled": False},
            }
        }
        for key, value in (site_config or {}).items():
            if key == "assets":
                config["assets"].update(value)
            else:
                config[key] = value
        kwargs.setdefault("themes", ("hyde",))
        kwargs.setdefault("fetcher", RemoteFetcher(session=http_session))
        return BuildContext.create(site, config, **kwargs)

    return _make


@pytest.fixture
def context(make_context):
    return make_context()


@pytest.fixture
def png_data():
    return png_bytes()
