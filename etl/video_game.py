"""Video game entity record.

A :class:`VideoGame` is one candidate game as seen by one or more sources.
Extractors create one record per scraped row; the resolver later merges the
records it judges to be the same title.  All evidence is kept as
:class:`~etl.aliases.AliasLedger` votes so that merging never discards an
observation.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Union

from .aliases import AliasLedger
from .platforms import Platform

Names = Union[str, Iterable[str]]
ReleaseDate = Union[date, datetime, str]


def _to_iso_date(release_date: ReleaseDate) -> str:
    """Return the ISO-8601 calendar date for *release_date*."""

    # datetime is a subclass of date, check it first
    if isinstance(release_date, datetime):
        return release_date.date().isoformat()
    if isinstance(release_date, date):
        return release_date.isoformat()
    if isinstance(release_date, str):
        return date.fromisoformat(release_date[:10]).isoformat()
    raise TypeError(f"Unsupported release date: {release_date!r}")


def _platform_id(platform: Union[Platform, int]) -> int:
    if isinstance(platform, Platform):
        return platform.id
    # bool is an int subclass but never a valid platform id
    if isinstance(platform, int) and not isinstance(platform, bool):
        return platform
    raise TypeError(f"Unknown platform for release dates: {platform!r}")


class VideoGame:
    """One game and all the evidence collected about it.

    Parameters
    ----------
    game_id : int
        Identifier handed out by the caller's id sequence (``itertools.count``).
        It never changes and is never reused within a run.
    names : str or iterable of str, optional
        Initial title alias(es).
    """

    def __init__(self, game_id: int, names: Optional[Names] = None) -> None:
        self._id = game_id
        self._aliases = AliasLedger()
        self._developers = AliasLedger()
        self._publishers = AliasLedger()
        self._release_dates: Dict[int, AliasLedger] = {}
        self._scores: Dict[str, List[float]] = defaultdict(list)
        if names is not None:
            self.add_alias(names)

    @property
    def id(self) -> int:
        return self._id

    # ------------------------------------------------------------------
    # Evidence
    # ------------------------------------------------------------------

    def add_alias(self, names: Names, count: int = 1) -> None:
        self._aliases.add(names, count)

    def add_developer(self, names: Names, count: int = 1) -> None:
        self._developers.add(names, count)

    def add_publisher(self, names: Names, count: int = 1) -> None:
        self._publishers.add(names, count)

    def add_release_date(self, platform: Union[Platform, int], release_date: ReleaseDate, count: int = 1) -> None:
        """Vote for *release_date* on *platform* (a :class:`Platform` or its id)."""

        platform_id = _platform_id(platform)
        ledger = self._release_dates.setdefault(platform_id, AliasLedger())
        ledger.add(_to_iso_date(release_date), count)

    def add_score(self, label: str, value: float) -> None:
        """Record a review score (e.g. ``"metacritic"``); not used for matching."""

        self._scores[label].append(float(value))

    def is_alias(self, name: str) -> bool:
        return name in self._aliases

    # ------------------------------------------------------------------
    # Matching & merging
    # ------------------------------------------------------------------

    def compare(self, other: "VideoGame") -> float:
        """Name similarity against *other*; the only identity signal."""

        return self._aliases.compare(other._aliases)

    def merge(self, other: "VideoGame") -> None:
        """Absorb every observation of *other* into this record.

        *other* is left untouched.  Merging the same record twice counts its
        evidence twice.
        """

        self._aliases.merge(other._aliases)
        self._developers.merge(other._developers)
        self._publishers.merge(other._publishers)
        for platform_id, ledger in other._release_dates.items():
            for iso_date, count in ledger.items():
                self.add_release_date(platform_id, iso_date, count)
        for label, values in other._scores.items():
            self._scores[label].extend(values)

    # ------------------------------------------------------------------
    # Resolved values
    # ------------------------------------------------------------------

    @property
    def name(self) -> Optional[str]:
        return self._aliases.resolve()

    @property
    def developer(self) -> Optional[str]:
        return self._developers.resolve()

    @property
    def publisher(self) -> Optional[str]:
        return self._publishers.resolve()

    @property
    def aliases(self) -> List[str]:
        return list(self._aliases)

    @property
    def developers(self) -> List[str]:
        return list(self._developers)

    @property
    def publishers(self) -> List[str]:
        return list(self._publishers)

    @property
    def release_dates(self) -> Dict[int, date]:
        """Resolved release date per platform id."""

        resolved: Dict[int, date] = {}
        for platform_id, ledger in self._release_dates.items():
            top = ledger.top_alias()
            if top is not None:
                resolved[platform_id] = date.fromisoformat(top)
        return resolved

    def release_date_votes(self, platform: Union[Platform, int]) -> Dict[str, int]:
        ledger = self._release_dates.get(_platform_id(platform))
        return dict(ledger.items()) if ledger is not None else {}

    @property
    def scores(self) -> Dict[str, float]:
        """Mean observed score per label."""

        return {label: sum(values) / len(values) for label, values in self._scores.items() if values}

    def to_calendar_entries(self) -> List[Dict]:
        """One entry per distinct resolved release date.

        Platforms sharing a date are listed on the same entry.  A game without
        any release date yields no entries.
        """

        by_date: Dict[date, List[int]] = {}
        for platform_id, release_date in self.release_dates.items():
            by_date.setdefault(release_date, []).append(platform_id)

        scores = self.scores
        return [
            {
                "name": self.name,
                "developer": self.developer,
                "publisher": self.publisher,
                "release_date": release_date,
                "platform_ids": platform_ids,
                "scores": dict(scores),
            }
            for release_date, platform_ids in sorted(by_date.items())
        ]

    def __repr__(self) -> str:
        return f"VideoGame(id={self._id}, name={self.name!r})"


__all__ = ["VideoGame"]
