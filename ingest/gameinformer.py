"""Game Informer yearly release calendar.

Each ``.calendar_entry`` element reads like::

    Hades II (PC, Switch) – September 25
"""

from __future__ import annotations

import logging
import os
import re
from datetime import date
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup

from etl.platforms import PlatformCatalog
from etl.video_game import VideoGame

from .web import fetch_pages
from .parsing import parse_month_day, split_platforms

logger = logging.getLogger(__name__)

NAME = "Game Informer"
HOMEPAGE_URL = "https://www.gameinformer.com/"
URL_TEMPLATE = "https://www.gameinformer.com/{year}"

_RE_ENTRY = re.compile(
    r"(.+?)\s+(\(.+\))\s+[–—-]\s+"
    r"((?:january|february|march|april|may|june|july|august|september|october|november|december)\s+\d+)",
    re.IGNORECASE,
)


def _year() -> int:
    return int(os.getenv("RC_YEAR", date.today().year))


def fetch(year: Optional[int] = None) -> List[str]:
    url = URL_TEMPLATE.format(year=year or _year())
    logger.info("Fetching %s", url)
    return fetch_pages([url])


def _platform_names(text: str) -> List[str]:
    names: List[str] = []
    for name in split_platforms(text):
        # "Xbox Series X/S" is one console family but listed as two spellings
        if name == "Xbox Series X/S":
            names.extend(["Xbox Series X", "Xbox Series S"])
        else:
            names.append(name)
    return names


def extract(pages: List[str], catalog: PlatformCatalog, ids: Iterator[int], year: Optional[int] = None) -> List[VideoGame]:
    year = year or _year()
    games: List[VideoGame] = []

    for page in pages:
        soup = BeautifulSoup(page, "lxml")
        for entry in soup.select(".calendar_entry"):
            text = " ".join(entry.get_text(" ").split())
            m = _RE_ENTRY.search(text)
            if m is None:
                continue
            name, platform_text, date_text = m.group(1).strip(), m.group(2), m.group(3)
            release_date = parse_month_day(date_text, year)
            platforms = catalog.resolve_many(_platform_names(platform_text), source=NAME)
            if not name or release_date is None or not platforms:
                continue

            game = VideoGame(next(ids), name)
            for platform in platforms:
                game.add_release_date(platform, release_date)
            games.append(game)

    logger.info("%s - extracted %d games", NAME, len(games))
    return games


__all__ = ["NAME", "HOMEPAGE_URL", "fetch", "extract"]
