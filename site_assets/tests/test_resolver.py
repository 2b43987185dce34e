#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for local layered lookup, remote fetching and metadata detection.
"""

import threading

import pytest
import requests

from site_assets.errors import AssetError, EmptyError, NotFoundError
from site_assets.resolver import FileResolver, RemoteFetcher, get_mime_type, remote_cache_name
from site_assets.resolver.locator import FileLocator


class TestLocalLookup:
    """Search order: assets, theme assets, static, theme static."""

    def test_project_assets_win_over_theme(self, context):
        info = FileResolver(context).resolve("css/shared.css")
        assert info.content == b"/* project */\n"
        assert info.path == "/css/shared.css"

    def test_theme_assets_before_static(self, context):
        info = FileResolver(context).resolve("css/order.css")
        assert info.content == b"/* theme assets */\n"

    def test_static_and_theme_static(self, context):
        resolver = FileResolver(context)
        assert resolver.resolve("robots.txt").content == b"User-agent: *\n"
        assert resolver.resolve("humans.txt").content == b"hyde team\n"

    def test_theme_precedence_follows_configuration(self, site, make_context):
        (site / "themes/zen/assets/css").mkdir(parents=True)
        (site / "themes/zen/assets/css/theme.css").write_text(".zen {}\n")
        first = make_context(themes=("zen", "hyde"))
        assert FileResolver(first).resolve("css/theme.css").content == b".zen {}\n"
        second = make_context(themes=("hyde", "zen"))
        assert FileResolver(second).resolve("css/theme.css").content == b".hyde {}\n"

    def test_search_roots_order(self, context):
        roots = list(FileLocator(context).search_roots())
        assert roots == [
            context.assets_path,
            context.theme_dir("hyde", "assets"),
            context.static_path,
            context.theme_dir("hyde", "static"),
        ]

    def test_not_found(self, context):
        with pytest.raises(AssetError, match="Can't load asset file"):
            FileResolver(context).resolve("css/nope.css")

    def test_ignore_missing_returns_marker(self, context):
        marker = FileResolver(context).resolve("missing.png", ignore_missing=True)
        assert marker.missing is True
        assert marker.path == "missing.png"

    def test_force_slash(self, context):
        assert FileResolver(context).resolve("css/style.css", force_slash=False).path == "css/style.css"
        assert FileResolver(context).resolve("/css/style.css").path == "/css/style.css"

    def test_metadata(self, context):
        resolver = FileResolver(context)
        css = resolver.resolve("css/style.css")
        assert (css.ext, css.type, css.subtype) == ("css", "text", "text/css")
        assert css.size == len(css.content)
        png = resolver.resolve("images/logo.png")
        assert (png.type, png.subtype) == ("image", "image/png")
        svg = resolver.resolve("images/icon.svg")
        assert svg.subtype == "image/svg+xml"


class TestRemote:
    """Remote files are fetched once and cached under a slugified name."""

    URL = "https://example.com/img/Logo.png"

    def test_cache_name(self):
        assert remote_cache_name(self.URL) == "example.com/img/logo.png"
        assert (remote_cache_name("https://fonts.googleapis.com/css2?family=Roboto")
                == "fonts.googleapis.com/css2-family-roboto.css")

    def test_cache_name_drops_dot_segments(self):
        assert remote_cache_name("https://h/a/../../../x.png") == "h/a/x.png"
        assert remote_cache_name("https://h/./a//b.png") == "h/a/b.png"

    def test_dot_segments_stay_in_remote_cache(self, context, png_data):
        info = FileResolver(context).resolve("https://example.com/a/../../../escape.png")
        remote_root = context.cache_assets_remote_path
        assert info.filepath == remote_root / "example.com/a/escape.png"
        assert info.filepath.read_bytes() == png_data
        assert info.path == "/assets/example.com/a/escape.png"

    def test_fetch_once_then_reuse_cache(self, context, http_session, png_data):
        resolver = FileResolver(context)
        first = resolver.resolve(self.URL)
        second = resolver.resolve(self.URL)

        assert http_session.get.call_count == 1
        assert first.content == second.content == png_data
        assert first.url == self.URL
        assert first.path == "/assets/example.com/img/logo.png"
        assert (context.cache_assets_remote_path / "example.com/img/logo.png").read_bytes() == png_data

    def test_google_fonts_stylesheet_is_css(self, context, http_session):
        http_session.get.return_value.content = b"@font-face { font-family: Roboto; }"
        info = FileResolver(context).resolve("https://fonts.googleapis.com/css2?family=Roboto")
        assert info.ext == "css"
        assert info.subtype == "text/css"

    def test_http_error_is_not_found(self, http_session):
        http_session.get.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        with pytest.raises(NotFoundError):
            RemoteFetcher(session=http_session).fetch(self.URL)

    def test_connection_error_is_not_found(self, http_session):
        http_session.get.side_effect = requests.exceptions.ConnectionError("down")
        with pytest.raises(NotFoundError):
            RemoteFetcher(session=http_session).fetch(self.URL)

    def test_session_per_thread(self):
        fetcher = RemoteFetcher()
        main = fetcher.session
        assert fetcher.session is main

        seen = []
        worker = threading.Thread(target=lambda: seen.append(fetcher.session))
        worker.start()
        worker.join()
        assert isinstance(seen[0], requests.Session)
        assert seen[0] is not main

    def test_injected_session_is_used_everywhere(self, http_session):
        fetcher = RemoteFetcher(session=http_session)
        seen = []
        worker = threading.Thread(target=lambda: seen.append(fetcher.session))
        worker.start()
        worker.join()
        assert seen == [http_session]
        assert fetcher.session is http_session

    def test_empty_content(self, http_session):
        http_session.get.return_value.content = b"x"
        with pytest.raises(EmptyError):
            RemoteFetcher(session=http_session).fetch(self.URL)

    def test_fallback_to_local_file(self, context, http_session):
        http_session.get.side_effect = requests.exceptions.Timeout("slow")
        info = FileResolver(context).resolve(self.URL, remote_fallback="images/logo.png")
        assert info.filepath == context.assets_path / "images/logo.png"
        assert info.url == self.URL
        assert info.path == "/assets/images/logo.png"

    def test_missing_fallback_fails(self, context, http_session):
        http_session.get.side_effect = requests.exceptions.Timeout("slow")
        with pytest.raises(AssetError):
            FileResolver(context).resolve(self.URL, remote_fallback="images/nope.png")

    def test_failed_fetch_with_ignore_missing(self, context, http_session):
        http_session.get.side_effect = requests.exceptions.ConnectionError("down")
        marker = FileResolver(context).resolve(self.URL, ignore_missing=True)
        assert marker.missing is True
        assert marker.path == self.URL


class TestMimeType:

    @pytest.mark.parametrize("name,expected", [
        ("a.css", ("text", "text/css")),
        ("a.scss", ("text", "text/x-scss")),
        ("a.js", ("application", "application/javascript")),
        ("a.svg", ("image", "image/svg+xml")),
        ("a.webp", ("image", "image/webp")),
    ])
    def test_by_extension(self, tmp_path, name, expected):
        assert get_mime_type(tmp_path / name, b"") == expected

    def test_sniffs_unknown_extension(self, tmp_path, png_data):
        assert get_mime_type(tmp_path / "image.bin123", png_data) == ("image", "image/png")

    def test_unknown_binary(self, tmp_path):
        assert get_mime_type(tmp_path / "blob.bin123", b"\x00\x01") == ("application", "application/octet-stream")
