"""Entity resolution: fuzzy merge of games seen by several sources.

Current data quirks
-------------------
• **Wikipedia** – titles are clean but platforms use short codes (Win, NS, XBS).
• **Game Informer / GamesRadar** – free-text list items; subtitles and sequel
  numbers vary ("Hades II" vs "Hades 2", "Final Fantasy VII Rebirth").
• **Metacritic** – one row *per platform*, so the same game arrives several
  times from one source.

Merging relies on a single signal: the similarity of the title alias ledgers
(bigram Dice coefficient over normalised names, Roman numerals converted to
digits).  Developer, publisher and date evidence only travels along once a
match has been decided.

Matching policy
---------------
The pool scans its live records in discovery order and merges the incoming
record into the **first** one scoring at least ``SIMILAR_GAME_THRESHOLD``.
First-match rather than best-match makes the outcome depend only on input
order.  Calls are not thread-safe: add records from one thread, after all
fetching is done.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .utils import normalize_alias
from .video_game import VideoGame

logger = logging.getLogger(__name__)

SIMILAR_GAME_THRESHOLD = 0.85


class GamePool:
    """Authoritative collection of distinct games."""

    def __init__(self, threshold: float = SIMILAR_GAME_THRESHOLD) -> None:
        self.threshold = threshold
        self._games: Dict[int, VideoGame] = {}
        # retired id -> id of the live record that absorbed it
        self._merged: Dict[int, int] = {}
        # normalised alias -> game id (last writer wins)
        self._alias_cache: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add(self, games: Iterable[VideoGame], merge: bool = False) -> None:
        """Add *games* in order; earlier games are merge targets for later ones."""

        games = list(games)
        before = len(self._games)
        for game in games:
            self.add_one(game, merge=merge)
        logger.info(
            "Pool: %d incoming, %d new, %d total (merge=%s)",
            len(games), len(self._games) - before, len(self._games), merge,
        )

    def add_one(self, game: VideoGame, merge: bool = False) -> VideoGame:
        """Add a single record and return the pooled record holding its evidence."""

        if game.id in self._games:
            return self._games[game.id]
        if game.id in self._merged:
            return self._games[self._merged[game.id]]

        if merge:
            match = self._find_match(game)
            if match is not None:
                match.merge(game)
                self._merged[game.id] = match.id
                self.reindex(match)
                logger.debug("Merged %r into %r", game, match)
                return match

        self._games[game.id] = game
        self.reindex(game)
        return game

    def _find_match(self, game: VideoGame) -> Optional[VideoGame]:
        for existing in self._games.values():
            score = existing.compare(game)
            if score >= self.threshold:
                logger.debug("%r ~ %r (%.3f)", game, existing, score)
                return existing
        return None

    # ------------------------------------------------------------------
    # Alias cache
    # ------------------------------------------------------------------

    def add_alias(self, game: Union[VideoGame, int], names: Union[str, Iterable[str]], count: int = 1) -> None:
        """Add title aliases to a pooled game and refresh its cache entries."""

        record = self._require(game)
        record.add_alias(names, count)
        self.reindex(record)

    def reindex(self, game: Union[VideoGame, int]) -> None:
        """Re-derive the cache entries for every alias *game* currently has."""

        record = self._require(game)
        for alias in record.aliases:
            key = normalize_alias(alias)
            if key:
                self._alias_cache[key] = record.id

    def find_by_alias(self, alias: str) -> Optional[VideoGame]:
        """Exact (normalised) alias lookup; never fuzzy."""

        game_id = self._alias_cache.get(normalize_alias(alias))
        if game_id is None:
            return None
        return self._games.get(game_id)

    def _require(self, game: Union[VideoGame, int]) -> VideoGame:
        game_id = game.id if isinstance(game, VideoGame) else game
        record = self._games.get(game_id)
        if record is None:
            raise KeyError(f"Game {game_id} is not live in this pool")
        return record

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get(self, game_id: int) -> Optional[VideoGame]:
        return self._games.get(game_id)

    def games(self) -> Tuple[VideoGame, ...]:
        """Snapshot of the live games in discovery order."""

        return tuple(self._games.values())

    def merged_into(self, game_id: int) -> Optional[int]:
        """Id of the record that absorbed *game_id*, or ``None``."""

        return self._merged.get(game_id)

    def is_merged(self, game_id: int) -> bool:
        return game_id in self._merged

    def __contains__(self, game: object) -> bool:
        game_id = game.id if isinstance(game, VideoGame) else game
        return game_id in self._games

    def __len__(self) -> int:
        return len(self._games)


def resolve_entities(games: Iterable[VideoGame], merge: bool = True) -> List[VideoGame]:
    """Deduplicate *games* and return the distinct records in discovery order."""

    pool = GamePool()
    pool.add(games, merge=merge)
    return list(pool.games())


__all__ = ["SIMILAR_GAME_THRESHOLD", "GamePool", "resolve_entities"]
