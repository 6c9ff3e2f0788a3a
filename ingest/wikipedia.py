"""Wikipedia "<year> in video games" release tables.

The release section is a series of ``table.wikitable`` blocks (one per
quarter) with the columns::

    Month | Day | Title | Platform(s) | Genre(s) | Developer(s) | Publisher(s) | Ref.

Month and day cells span several rows.  ``pandas.read_html`` expands the
row spans for us, so every parsed row carries its own month and day.  Rows
whose day is "TBA" are skipped.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from io import StringIO
from typing import Iterator, List, Optional

import pandas as pd
from bs4 import BeautifulSoup

from etl.platforms import PlatformCatalog
from etl.video_game import VideoGame

from .web import fetch_pages
from .parsing import clean_title, parse_month_day, split_platforms

logger = logging.getLogger(__name__)

NAME = "Wikipedia"
HOMEPAGE_URL = "https://en.wikipedia.org/"
URL_TEMPLATE = "https://en.wikipedia.org/wiki/{year}_in_video_games"


def _year() -> int:
    return int(os.getenv("RC_YEAR", date.today().year))


def fetch(year: Optional[int] = None) -> List[str]:
    """Download the "<year> in video games" article."""

    url = URL_TEMPLATE.format(year=year or _year())
    logger.info("Fetching %s", url)
    return fetch_pages([url])


def _column(df: pd.DataFrame, prefix: str) -> Optional[str]:
    for col in df.columns:
        if str(col).lower().startswith(prefix):
            return col
    return None


def _release_tables(page: str) -> Iterator[pd.DataFrame]:
    soup = BeautifulSoup(page, "lxml")
    for table in soup.select("table.wikitable"):
        try:
            frames = pd.read_html(StringIO(str(table)))
        except ValueError:
            continue
        for df in frames:
            if isinstance(df.columns, pd.MultiIndex):
                df.columns = df.columns.get_level_values(-1)
            if all(_column(df, c) is not None for c in ("month", "day", "title", "platform")):
                yield df


def extract(pages: List[str], catalog: PlatformCatalog, ids: Iterator[int], year: Optional[int] = None) -> List[VideoGame]:
    """Turn the release tables of *pages* into :class:`VideoGame` records."""

    year = year or _year()
    games: List[VideoGame] = []

    for page in pages:
        for df in _release_tables(page):
            month_col, day_col = _column(df, "month"), _column(df, "day")
            title_col, platform_col = _column(df, "title"), _column(df, "platform")
            developer_col, publisher_col = _column(df, "developer"), _column(df, "publisher")

            for _, row in df.iterrows():
                day = pd.to_numeric(row[day_col], errors="coerce")
                if pd.isna(day):
                    continue
                release_date = parse_month_day(f"{int(day)} {str(row[month_col]).title()}", year)
                name = clean_title(str(row[title_col])) if pd.notna(row[title_col]) else ""
                if not name or release_date is None:
                    logger.debug("%s - skipping row %r", NAME, row.to_dict())
                    continue

                platforms = catalog.resolve_many(split_platforms(str(row[platform_col])), source=NAME)
                if not platforms:
                    continue

                game = VideoGame(next(ids), name)
                for platform in platforms:
                    game.add_release_date(platform, release_date)
                if developer_col is not None and pd.notna(row[developer_col]):
                    game.add_developer(clean_title(str(row[developer_col])))
                if publisher_col is not None and pd.notna(row[publisher_col]):
                    game.add_publisher(clean_title(str(row[publisher_col])))
                games.append(game)

    logger.info("%s - extracted %d games", NAME, len(games))
    return games


__all__ = ["NAME", "HOMEPAGE_URL", "fetch", "extract"]
