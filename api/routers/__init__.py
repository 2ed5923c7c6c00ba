"""API routers for the Soccer Scoreboard."""

from . import health, scoreboard

__all__ = [
    "health",
    "scoreboard",
]
