"""Simple JSON cache for downloaded source pages.

Store each fetched page body once per day so repeated runs on the same day
reuse it and do not hammer the sources while iterating on extractors.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional


CATALOG_PATH = Path(os.getenv("RC_CACHE_PATH", Path(__file__).parent / "catalog.json"))


# Set RC_SKIP_CACHE=1 to ignore cached pages (useful for debugging or force-refresh)
SKIP_CACHE = os.getenv("RC_SKIP_CACHE", "0").lower() in {"1", "true", "yes"}

# Guards the catalog read-modify-write across fetch threads
_LOCK = threading.Lock()


def _load_catalog() -> Dict[str, Any]:
    """Return the full JSON catalog ({} if missing or corrupted)."""

    if CATALOG_PATH.exists():
        try:
            return json.loads(CATALOG_PATH.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            pass
    return {}


def _save_catalog(catalog: Dict[str, Any]) -> None:
    """Write *catalog* back to disk, replacing the old file atomically."""

    CATALOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=CATALOG_PATH.parent, prefix=".catalog-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(catalog, fh, ensure_ascii=False)
        os.replace(tmp_name, CATALOG_PATH)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def get_cached(url: str) -> Optional[str]:
    """Return today's cached body for *url* (or *None* if absent/disabled)."""

    if SKIP_CACHE:
        return None

    today_iso = date.today().isoformat()
    with _LOCK:
        return _load_catalog().get(today_iso, {}).get(url)


def set_cached(url: str, body: str) -> None:
    """Store today's *body* for *url* in ``catalog.json``.

    Only today's bucket is kept; older days are dropped on write:

    {
        "YYYY-MM-DD": {
            "https://en.wikipedia.org/wiki/2024_in_video_games": "<html>…",
            ...
        }
    }
    """

    if SKIP_CACHE:
        return

    today_iso = date.today().isoformat()
    with _LOCK:
        bucket = _load_catalog().get(today_iso, {})
        bucket[url] = body
        _save_catalog({today_iso: bucket})


__all__ = [
    "get_cached",
    "set_cached",
]
