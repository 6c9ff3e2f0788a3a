"""Page download helpers shared by the extractors."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import cloudscraper
import requests

from . import cache

logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; ReleaseCalendarBot/0.1)"}
TIMEOUT = 20

# Shared session that handles Cloudflare challenges
scraper = cloudscraper.create_scraper()


def get_scraper() -> requests.Session:
    return scraper


def fetch_page(url: str, session: Optional[requests.Session] = None) -> Optional[str]:
    """Return the body of *url*, using today's cache when possible.

    Network errors and non-2xx responses are logged and yield ``None``.
    """

    cached = cache.get_cached(url)
    if cached is not None:
        logger.debug("Using cached page %s", url)
        return cached

    getter = session or requests
    try:
        logger.debug("Requesting %s", url)
        resp = getter.get(url, headers=HEADERS, timeout=TIMEOUT)
        logger.debug("Response status %s for %s", resp.status_code, url)
        resp.raise_for_status()
    except Exception:  # noqa: BLE001 - cloudscraper raises its own error types
        logger.exception("Fetching %s failed", url)
        return None

    cache.set_cached(url, resp.text)
    return resp.text


def fetch_pages(urls: Iterable[str], session: Optional[requests.Session] = None) -> List[str]:
    """Fetch every URL in *urls*, skipping the ones that fail."""

    pages: List[str] = []
    for url in urls:
        body = fetch_page(url, session=session)
        if body is not None:
            pages.append(body)
    return pages


__all__ = ["HEADERS", "get_scraper", "fetch_page", "fetch_pages"]
