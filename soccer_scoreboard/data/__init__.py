"""
Data layer for the soccer scoreboard.

Provides the aggregation pipeline and its stages:
- League catalog (ESPN core API)
- Per-league scoreboards (ESPN site API)
- Live event selection
- Moneyline odds for live events
- Render-time event window
"""
from .leagues import LeagueCatalogFetcher
from .live import select_live_events
from .models import AggregateView, League, LiveEvent, OddsQuote, RefreshState
from .odds import OddsAggregator, parse_odds_response
from .pipeline import AggregationPipeline
from .scoreboards import ScoreboardAggregator
from .time_window import TimeWindow, parse_timestamp

__all__ = [
    # Pipeline
    "AggregationPipeline",
    "LeagueCatalogFetcher",
    "ScoreboardAggregator",
    "OddsAggregator",
    "select_live_events",
    "parse_odds_response",
    # Model
    "AggregateView",
    "League",
    "LiveEvent",
    "OddsQuote",
    "RefreshState",
    # Window
    "TimeWindow",
    "parse_timestamp",
]
