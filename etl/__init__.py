from .aliases import AliasLedger
from .entity_resolution import SIMILAR_GAME_THRESHOLD, GamePool, resolve_entities
from .platforms import Platform, PlatformCatalog, default_catalog
from .release_calendar import ReleaseCalendar
from .video_game import VideoGame

__all__ = [
    "AliasLedger",
    "SIMILAR_GAME_THRESHOLD",
    "GamePool",
    "resolve_entities",
    "Platform",
    "PlatformCatalog",
    "default_catalog",
    "ReleaseCalendar",
    "VideoGame",
]
