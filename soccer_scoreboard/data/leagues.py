"""
League catalog fetcher.
"""
from typing import Any

from loguru import logger

from ..config.constants import LEAGUE_CATALOG_LIMIT
from .models import League
from .sources.base import DataSourceError


class LeagueCatalogFetcher:
    """
    Fetches and normalizes the league catalog.

    The catalog is capped to the first `limit` entries (upstream order kept)
    to bound the scoreboard fan-out. Transport failures and a non-list payload
    yield an empty catalog, malformed items are skipped, and anything else
    propagates to the caller.
    """

    def __init__(self, client: Any, limit: int = LEAGUE_CATALOG_LIMIT):
        self.client = client
        self.limit = limit
        self.logger = logger.bind(component="leagues")

    async def fetch(self) -> list[League]:
        try:
            items = await self.client.get_leagues()
        except DataSourceError as e:
            self.logger.warning(f"League catalog unavailable: {e}")
            return []

        if not isinstance(items, list):
            self.logger.warning(f"League catalog is not a list: {type(items).__name__}")
            return []

        leagues = []
        for item in items[: self.limit]:
            try:
                leagues.append(League.from_catalog_item(item))
            except (KeyError, TypeError) as e:
                self.logger.warning(f"Skipping malformed league catalog item: {e!r}")

        self.logger.debug(f"Loaded {len(leagues)} of {len(items)} leagues")
        return leagues
