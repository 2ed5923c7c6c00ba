"""
Moneyline odds aggregation for live events.
"""
from typing import Any, Optional

from loguru import logger

from .fanout import fan_out
from .models import LiveEvent, OddsQuote, moneyline


def parse_odds_response(payload: Any) -> Optional[OddsQuote]:
    """
    Extract the moneyline quote from an ESPN odds response.

    Only the first provider item is used. Either side may be missing
    upstream and is passed through as None.

    Returns:
        OddsQuote, or None when the response carries no items
    """
    items = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(items, list) or not items:
        return None

    first = items[0]
    if not isinstance(first, dict):
        return None

    return OddsQuote(
        home=moneyline(first.get("homeTeamOdds")),
        away=moneyline(first.get("awayTeamOdds")),
    )


class OddsAggregator:
    """
    Fetches odds for live events concurrently.

    A failed or empty odds fetch is "no odds" for that event only; such
    events are left out of the result rather than stored as None.
    """

    def __init__(self, client: Any):
        self.client = client
        self.logger = logger.bind(component="odds")

    async def _fetch_event(self, live: LiveEvent) -> Optional[OddsQuote]:
        payload = await self.client.get_event_odds(live.league.slug, str(live.event["id"]))
        return parse_odds_response(payload)

    async def fetch_all(self, live_events: list[LiveEvent]) -> dict[str, OddsQuote]:
        """
        Fetch odds for every live event.

        Args:
            live_events: (league, event) pairs selected as in progress

        Returns:
            Dict mapping event id to its quote, only for events with a quote
        """
        quotes = await fan_out(
            live_events,
            self._fetch_event,
            fallback=lambda live: None,
            label="Odds",
        )

        odds = {
            str(live.event["id"]): quote
            for live, quote in zip(live_events, quotes)
            if quote is not None
        }
        self.logger.info(f"Fetched odds for {len(odds)} of {len(live_events)} live events")
        return odds
