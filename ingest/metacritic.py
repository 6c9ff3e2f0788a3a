"""Metacritic "release date" browse pages (condensed view).

Metacritic sits behind Cloudflare, so pages are downloaded through the shared
cloudscraper session.  Every row is one game *on one platform*; the resolver
later folds the per-platform rows of a game together.  Metascore and user
score are kept as scores on the record.

Only releases inside the calendar year are kept.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup

from etl.platforms import PlatformCatalog
from etl.video_game import VideoGame

from .web import fetch_pages, get_scraper

logger = logging.getLogger(__name__)

NAME = "Metacritic"
HOMEPAGE_URL = "https://www.metacritic.com/"
URL_TEMPLATE = "https://www.metacritic.com/browse/games/release-date/{state}/{platform}/date?view=condensed"

# PC is skipped: far too many small releases
PLATFORM_SLUGS = ["ps5", "ps4", "xbox-series-x", "xboxone", "switch", "ios"]
STATES = ["available", "coming-soon"]


def _year() -> int:
    return int(os.getenv("RC_YEAR", date.today().year))


def urls() -> List[str]:
    return [URL_TEMPLATE.format(state=state, platform=slug) for slug in PLATFORM_SLUGS for state in STATES]


def fetch() -> List[str]:
    page_urls = urls()
    logger.info("Fetching %d Metacritic pages", len(page_urls))
    return fetch_pages(page_urls, session=get_scraper())


def _parse_date(text: str) -> Optional[date]:
    for fmt in ("%B %d, %Y", "%b %d, %Y"):
        try:
            return datetime.strptime(text.strip(), fmt).date()
        except ValueError:
            continue
    return None


def _parse_score(text: Optional[str], cast=float) -> Optional[float]:
    if not text:
        return None
    text = text.strip()
    if not text or text.lower() == "tbd":
        return None
    try:
        return cast(text)
    except ValueError:
        return None


def _text(node) -> Optional[str]:
    return node.get_text(strip=True) if node is not None else None


def extract(pages: List[str], catalog: PlatformCatalog, ids: Iterator[int], year: Optional[int] = None) -> List[VideoGame]:
    year = year or _year()
    games: List[VideoGame] = []

    for page in pages:
        soup = BeautifulSoup(page, "lxml")
        for row in soup.select("tr.expand_collapse"):
            name = _text(row.select_one(".title h3"))
            platform_name = _text(row.select_one(".platform .data"))
            date_text = _text(row.select_one("td.details > span"))
            if not name or not platform_name or not date_text:
                continue

            release_date = _parse_date(date_text)
            if release_date is None or release_date.year != year:
                continue

            platforms = catalog.resolve_many([platform_name], source=NAME)
            if not platforms:
                continue

            game = VideoGame(next(ids), name)
            game.add_release_date(platforms[0], release_date)

            metascore = _parse_score(_text(row.select_one(":scope > .score .game")), int)
            if metascore is not None:
                game.add_score("metacritic", metascore)
            user_score = _parse_score(_text(row.select_one(":scope > .details .score .game")))
            if user_score is not None:
                game.add_score("user", user_score)
            games.append(game)

    logger.info("%s - extracted %d games", NAME, len(games))
    return games


__all__ = ["NAME", "HOMEPAGE_URL", "urls", "fetch", "extract"]
