from . import gameinformer, gamesradar, metacritic, wikipedia

# Source key -> extractor module (each exposes fetch() and extract())
SOURCES = {
    "wikipedia": wikipedia,
    "gameinformer": gameinformer,
    "gamesradar": gamesradar,
    "metacritic": metacritic,
}

__all__ = [
    "SOURCES",
    "gameinformer",
    "gamesradar",
    "metacritic",
    "wikipedia",
]
