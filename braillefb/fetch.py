#!/usr/bin/env python3
# braillefb/fetch.py
"""
Image loading from disk or HTTP.

- Local paths open through Pillow.
- http(s) URLs download through a requests Session with urllib3 Retry.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from PIL import Image

__all__ = ["ImageFetchError", "load_image", "make_session", "is_url"]

log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "braillefb/1.0"


class ImageFetchError(RuntimeError):
    """Remote image could not be downloaded."""


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def make_session(user_agent: str = DEFAULT_USER_AGENT, retries: int = 3) -> requests.Session:
    """HTTP session with retry on 429/5xx."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _download(
    url: str,
    session: requests.Session,
    connect_timeout: float,
    read_timeout: float,
) -> bytes:
    try:
        r = session.get(url, timeout=(connect_timeout, read_timeout))
        r.raise_for_status()
    except requests.RequestException as e:
        raise ImageFetchError(f"failed to download {url}: {e}") from e
    if not r.content:
        raise ImageFetchError(f"empty response from {url}")
    log.debug("Downloaded %d bytes from %s", len(r.content), url)
    return r.content


def load_image(
    source: str,
    user_agent: str = DEFAULT_USER_AGENT,
    connect_timeout: float = 5.0,
    read_timeout: float = 15.0,
    retries: int = 3,
    session: Optional[requests.Session] = None,
) -> Image.Image:
    """
    Return a Pillow image for a file path or http(s) URL.
    Raises ImageFetchError on download failure; decode errors come from Pillow.
    """
    if is_url(source):
        sess = session or make_session(user_agent, retries)
        try:
            data = _download(source, sess, connect_timeout, read_timeout)
        finally:
            if session is None:
                sess.close()
        img = Image.open(io.BytesIO(data))
        img.load()
        return img

    log.debug("Opening image file %s", source)
    with Image.open(source) as img:
        img.load()
        return img.copy()
