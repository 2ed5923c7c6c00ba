"""
Dashboard interfaces for the soccer scoreboard.

Example:
    >>> from soccer_scoreboard.dashboard import TerminalDashboard
    >>> dashboard = TerminalDashboard(pipeline, window)
    >>> await dashboard.run(shutdown_event)
"""

from .terminal import TerminalDashboard
from .view import ScoreboardView, build_scoreboard_view

__all__ = [
    "ScoreboardView",
    "TerminalDashboard",
    "build_scoreboard_view",
]
