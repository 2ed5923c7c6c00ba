"""
Constants for the soccer scoreboard.
"""
from enum import Enum
from typing import Final


class EventState(str, Enum):
    """ESPN event status states. Only IN has special meaning."""

    PRE = "pre"
    IN = "in"
    POST = "post"


class CycleStatus(str, Enum):
    """Status of the most recent refresh cycle."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


# Bounds the scoreboard fan-out
LEAGUE_CATALOG_LIMIT: Final[int] = 26

HOME: Final[str] = "home"
