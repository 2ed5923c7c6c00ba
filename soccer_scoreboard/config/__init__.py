"""Configuration and constants for the soccer scoreboard."""

from .constants import HOME, LEAGUE_CATALOG_LIMIT, CycleStatus, EventState
from .settings import Settings, get_settings

__all__ = [
    "HOME",
    "LEAGUE_CATALOG_LIMIT",
    "CycleStatus",
    "EventState",
    "Settings",
    "get_settings",
]
