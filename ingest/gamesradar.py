"""GamesRadar "video game release dates" listicle.

Games are ``<li>`` items in the ``<ul>`` following each
``<h2 id="<month>-<year>-video-game-releases">`` heading::

    Hades 2 [PC, Switch] – September 25
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

NAME = "GamesRadar"
HOMEPAGE_URL = "https://www.gamesradar.com/"
URL = "https://www.gamesradar.com/uk/video-game-release-dates/"

_RE_ITEM = re.compile(
    r"(.+?)\s+(\[.+\])\s+[–—-]\s+"
    r"((?:january|february|march|april|may|june|july|august|september|october|november|december)\s+\d+)",
    re.IGNORECASE,
)


def _year() -> int:
    return int(os.getenv("RC_YEAR", date.today().year))


def fetch() -> List[str]:
    logger.info("Fetching %s", URL)
    return fetch_pages([URL])


def extract(pages: List[str], catalog: PlatformCatalog, ids: Iterator[int], year: Optional[int] = None) -> List[VideoGame]:
    year = year or _year()
    games: List[VideoGame] = []

    for page in pages:
        soup = BeautifulSoup(page, "lxml")
        for heading in soup.select('[id$="-video-game-releases"]'):
            game_list = heading.find_next_sibling("ul")
            if game_list is None:
                continue
            for item in game_list.find_all("li"):
                # TBC dates and rows without a month are ignored
                m = _RE_ITEM.search(" ".join(item.get_text(" ").split()))
                if m is None:
                    continue
                name = m.group(1).strip()
                release_date = parse_month_day(m.group(3), year)
                platforms = catalog.resolve_many(split_platforms(m.group(2)), source=NAME)
                if not name or release_date is None or not platforms:
                    continue

                game = VideoGame(next(ids), name)
                for platform in platforms:
                    game.add_release_date(platform, release_date)
                games.append(game)

    logger.info("%s - extracted %d games", NAME, len(games))
    return games


__all__ = ["NAME", "HOMEPAGE_URL", "fetch", "extract"]
