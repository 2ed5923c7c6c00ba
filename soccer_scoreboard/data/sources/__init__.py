"""
Data source clients for the soccer scoreboard.

Available sources:
- ESPNClient: ESPN public APIs for leagues, scoreboards and odds
"""
from .base import (
    BaseDataSource,
    DataNotAvailableError,
    DataSourceError,
    DataSourceHealth,
    DataSourceStatus,
)
from .espn_client import ESPNClient

__all__ = [
    # Base classes
    "BaseDataSource",
    "DataNotAvailableError",
    "DataSourceError",
    "DataSourceHealth",
    "DataSourceStatus",
    # Clients
    "ESPNClient",
]
