"""Gaming platforms and the catalog extractors use to recognise them.

Each source spells platforms its own way ("PS5", "PlayStation 5",
"Playstation5" …).  Extractors call :meth:`PlatformCatalog.resolve_by_name`,
which is an *exact* lookup over the known spellings.  Fuzzy matching is only
used to suggest a spelling in the "unknown platform" log line.
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from rapidfuzz import process

from .aliases import AliasLedger

logger = logging.getLogger(__name__)


class Platform:
    """An immutable gaming platform."""

    def __init__(self, platform_id: int, name: str, short_name: str, aliases: Iterable[str] = ()) -> None:
        self._id = platform_id
        self._name = name
        self._short_name = short_name
        self._aliases = AliasLedger(name)
        self._aliases.add(aliases)

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def short_name(self) -> str:
        return self._short_name

    @property
    def aliases(self) -> List[str]:
        return list(self._aliases)

    def is_alias(self, name: str) -> bool:
        return name in self._aliases

    def to_json(self) -> Dict[str, str]:
        return {"name": self._name, "shortName": self._short_name}

    def __repr__(self) -> str:
        return f"Platform(id={self._id}, name={self._name!r})"


class PlatformCatalog:
    """Registry of platforms owning its own id sequence."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._platforms: Dict[int, Platform] = {}

    def add(self, name: str, short_name: str, aliases: Iterable[str] = ()) -> Platform:
        platform = Platform(next(self._ids), name, short_name, aliases)
        self._platforms[platform.id] = platform
        return platform

    def resolve_by_id(self, platform_id: int) -> Optional[Platform]:
        return self._platforms.get(platform_id)

    def resolve_by_name(self, name: str) -> Optional[Platform]:
        """Return the platform that lists *name* as a spelling, else ``None``."""

        name = name.strip()
        for platform in self._platforms.values():
            if platform.is_alias(name):
                return platform
        return None

    def resolve_many(self, names: Iterable[str], source: str = "") -> List[Platform]:
        """Resolve every name in *names*, logging and skipping unknown ones."""

        platforms: List[Platform] = []
        for name in names:
            platform = self.resolve_by_name(name)
            if platform is None:
                logger.info("%s - Unknown platform: %r (closest: %r)", source, name, self.suggest(name))
                continue
            if platform not in platforms:
                platforms.append(platform)
        return platforms

    def suggest(self, name: str) -> Optional[str]:
        """Closest known spelling to *name* (for diagnostics only)."""

        choices = [alias for platform in self._platforms.values() for alias in platform.aliases]
        if not choices or not name.strip():
            return None
        match = process.extractOne(name, choices)
        return match[0] if match else None

    def __iter__(self) -> Iterator[Platform]:
        return iter(list(self._platforms.values()))

    def __len__(self) -> int:
        return len(self._platforms)


# name, short name, alternate spellings
DEFAULT_PLATFORMS = [
    ("Playstation 5", "PS5", ["PS5", "Playstation5", "PlayStation 5"]),
    ("Playstation 4", "PS4", ["PS4", "Playstation4", "PlayStation 4"]),
    ("Playstation VR", "PSVR", ["PSVR", "PS VR", "PlayStation VR"]),
    ("Playstation VR 2", "PSVR2", ["PSVR2", "PSVR 2", "PlayStation VR 2", "PlayStation VR2"]),
    ("Nintendo Switch", "NS", ["Switch", "NS"]),
    ("Xbox Series X/S", "XBS", ["XBS", "XSX", "Xbox Series S", "Xbox Series X", "XSS", "Xbox Series X|S"]),
    ("Xbox One", "XBO", ["XBO", "XOne"]),
    ("Google Stadia", "GS", ["Stadia"]),
    ("Android", "Droid", ["Droid"]),
    ("iOS", "iOS", ["iPhone/iPad"]),
    ("Oculus Quest", "OQ", ["Quest 3", "Quest 2", "Quest", "Meta Quest"]),
    ("Microsoft Windows", "Win", ["Win", "PC"]),
    ("Linux", "Lin", ["Lin"]),
    ("Macintosh", "Mac", ["Mac", "macOS"]),
]


def default_catalog() -> PlatformCatalog:
    """Return a fresh catalog holding the standard platform list."""

    catalog = PlatformCatalog()
    for name, short_name, aliases in DEFAULT_PLATFORMS:
        catalog.add(name, short_name, aliases)
    return catalog


__all__ = ["Platform", "PlatformCatalog", "DEFAULT_PLATFORMS", "default_catalog"]
