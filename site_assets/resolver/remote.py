#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Remote assets: fetching over HTTP and the local cache file naming.
"""

import logging
import threading
from typing import Optional
from urllib.parse import urlparse

import requests

from ..config import DEFAULT_REMOTE_TIMEOUT
from ..errors import EmptyError, NotFoundError
from ..utils.text import sanitize, slugify

logger = logging.getLogger(__name__)


def is_url(path: str) -> bool:
    parsed = urlparse(path)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def url_extension(url: str) -> str:
    path = urlparse(url).path
    # Google Fonts style stylesheets have no extension
    if path.endswith("/css") or path.endswith("/css2"):
        return "css"
    name = path.rsplit("/", 1)[-1]
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def remote_cache_name(url: str) -> str:
    """Deterministic relative file name caching ``url`` locally."""
    parsed = urlparse(url)
    ext = url_extension(url)
    name = f"{parsed.hostname or ''}{sanitize(parsed.path)}"
    if parsed.query:
        name += f"-{parsed.query}"
        if ext:
            name += f".{ext}"
    # no "." or ".." segments: the name must stay below the cache directory
    segments = slugify(name).split("/")
    return "/".join(s for s in segments if s not in ("", ".", ".."))


class RemoteFetcher:
    """Downloads remote files over HTTP.

    Without an explicit ``session`` each thread gets its own
    ``requests.Session``, so batch workers never share one.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_REMOTE_TIMEOUT):
        self._session = session
        self._local = threading.local()
        self.timeout = timeout

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def fetch(self, url: str) -> bytes:
        """Return the body of ``url``.

        Raises NotFoundError when the resource can't be fetched and
        EmptyError when it has one byte or less.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.debug("Fetching %s failed: %s", url, e)
            raise NotFoundError(f'File "{url}" doesn\'t exist.') from e

        content = response.content
        if len(content) <= 1:
            raise EmptyError(f'File "{url}" is empty.')
        return content
