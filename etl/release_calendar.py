"""Project resolved games onto a twelve-month release calendar."""

from __future__ import annotations

import bisect
import copy
import logging
import unicodedata
from datetime import date
from typing import Dict, Iterable, Iterator, List, Tuple

from .platforms import PlatformCatalog
from .video_game import VideoGame

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def _collation_key(name: str) -> str:
    """Accent-insensitive, case-insensitive form of *name* ('Édith' sorts with 'edith')."""

    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def _sort_key(entry: Dict) -> Tuple[str, str, str]:
    name = entry["name"] or ""
    return entry["releaseDate"], _collation_key(name), name


class ReleaseCalendar:
    """Games bucketed by month, each month ordered by date then name.

    Entries are inserted in sorted position, so ``to_month_json`` and
    ``to_json`` always read the same ordering.
    """

    def __init__(self, catalog: PlatformCatalog) -> None:
        self.catalog = catalog
        self._months: List[List[Dict]] = [[] for _ in MONTH_NAMES]
        self._keys: List[List[Tuple[str, str, str]]] = [[] for _ in MONTH_NAMES]

    @classmethod
    def from_games(cls, games: Iterable[VideoGame], catalog: PlatformCatalog) -> "ReleaseCalendar":
        calendar = cls(catalog)
        calendar.add_games(games)
        return calendar

    def add_games(self, games: Iterable[VideoGame]) -> None:
        for game in games:
            self.add_game(game)

    def add_game(self, game: VideoGame) -> None:
        entries = game.to_calendar_entries()
        if not entries:
            logger.debug("%r has no release date, left off the calendar", game)
        for raw in entries:
            entry = self._materialise(raw)
            month_index = raw["release_date"].month - 1
            key = _sort_key(entry)
            position = bisect.bisect_right(self._keys[month_index], key)
            self._keys[month_index].insert(position, key)
            self._months[month_index].insert(position, entry)

    def _materialise(self, raw: Dict) -> Dict:
        platforms = []
        for platform_id in raw["platform_ids"]:
            platform = self.catalog.resolve_by_id(platform_id)
            if platform is None:
                raise KeyError(f"Unknown platform id {platform_id} for {raw['name']!r}")
            platforms.append(platform)
        platforms.sort(key=lambda p: p.short_name.casefold())

        return {
            "name": raw["name"],
            "developer": raw["developer"],
            "publisher": raw["publisher"],
            "platforms": [p.to_json() for p in platforms],
            "releaseDate": raw["release_date"].isoformat(),
            "scores": [
                {"label": label.capitalize(), "value": value}
                for label, value in sorted(raw["scores"].items(), key=lambda kv: kv[0].capitalize())
            ],
        }

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def _check_index(self, month_index: int) -> None:
        if not 0 <= month_index < len(MONTH_NAMES):
            raise IndexError(f"Month index must be from 0 to {len(MONTH_NAMES) - 1}, got {month_index}")

    def month(self, month_index: int) -> List[Dict]:
        """Ordered entries of one month (copies)."""

        self._check_index(month_index)
        return copy.deepcopy(self._months[month_index])

    def days(self, month_index: int) -> List[Tuple[date, List[Dict]]]:
        """Day sections of a month: ``[(date, entries), …]`` in date order."""

        sections: List[Tuple[date, List[Dict]]] = []
        for entry in self.month(month_index):
            day = date.fromisoformat(entry["releaseDate"])
            if sections and sections[-1][0] == day:
                sections[-1][1].append(entry)
            else:
                sections.append((day, [entry]))
        return sections

    def to_month_json(self, month_index: int) -> Dict:
        self._check_index(month_index)
        return {
            "name": MONTH_NAMES[month_index],
            "index": month_index,
            "entries": self.month(month_index),
        }

    def months(self) -> Iterator[Dict]:
        for index in range(len(MONTH_NAMES)):
            yield self.to_month_json(index)

    def to_json(self) -> Dict:
        return {"months": list(self.months())}

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._months)


__all__ = ["MONTH_NAMES", "ReleaseCalendar"]
