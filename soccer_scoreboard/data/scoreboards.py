"""
Per-league scoreboard aggregation.
"""
from typing import Any

from loguru import logger

from .fanout import fan_out
from .models import League


class ScoreboardAggregator:
    """
    Fetches every league's events concurrently.

    The result always has one entry per input league; a league whose fetch
    fails (or returns something other than a list) maps to an empty list.
    """

    def __init__(self, client: Any):
        self.client = client
        self.logger = logger.bind(component="scoreboards")

    async def _fetch_league(self, league: League) -> list[dict[str, Any]]:
        events = await self.client.get_scoreboard(league.slug)
        if not isinstance(events, list):
            self.logger.warning(
                f"Scoreboard for {league.slug} is not a list: {type(events).__name__}"
            )
            return []
        return events

    async def fetch_all(self, leagues: list[League]) -> dict[str, list[dict[str, Any]]]:
        """
        Fetch scoreboards for all leagues.

        Args:
            leagues: Leagues from the catalog

        Returns:
            Dict mapping league id to its event list, in league order
        """
        results = await fan_out(
            leagues,
            self._fetch_league,
            fallback=lambda league: [],
            label="Scoreboard",
        )

        scores = {league.id: events for league, events in zip(leagues, results)}
        self.logger.info(
            f"Fetched {sum(len(e) for e in scores.values())} events "
            f"across {len(scores)} leagues"
        )
        return scores
