"""
Aggregation pipeline orchestration layer.

Runs one refresh cycle end to end:
- Fetch the league catalog
- Fetch all scoreboards concurrently (barrier 1)
- Select live events
- Fetch odds for the live events concurrently (barrier 2)
- Publish the merged snapshot

Consumers only ever observe complete snapshots through `state`.
"""
from __future__ import annotations

import asyncio
import contextlib
from datetime import datetime, timezone
from typing import Any, Optional

from loguru import logger

from ..config.constants import LEAGUE_CATALOG_LIMIT, CycleStatus
from .leagues import LeagueCatalogFetcher
from .live import select_live_events
from .models import AggregateView, RefreshState
from .odds import OddsAggregator
from .scoreboards import ScoreboardAggregator
from .sources.espn_client import ESPNClient


class AggregationPipeline:
    """
    Unified data access layer for the soccer scoreboard.

    Example:
        >>> pipeline = AggregationPipeline.from_settings(settings)
        >>> state = await pipeline.refresh()
        >>> state.view.odds_by_event
    """

    def __init__(
        self,
        client: Any,
        league_limit: int = LEAGUE_CATALOG_LIMIT,
    ):
        self.client = client
        self.leagues = LeagueCatalogFetcher(client, limit=league_limit)
        self.scoreboards = ScoreboardAggregator(client)
        self.odds = OddsAggregator(client)

        # Logger
        self.logger = logger.bind(component="pipeline")

        self._state = RefreshState()
        self._in_flight: Optional[asyncio.Task] = None
        self._cycle_count = 0

    @classmethod
    def from_settings(cls, settings) -> AggregationPipeline:
        """Create a pipeline backed by ESPN from application settings."""
        return cls(
            client=ESPNClient.from_settings(settings),
            league_limit=settings.espn.league_limit,
        )

    @property
    def state(self) -> RefreshState:
        """The most recently published refresh state."""
        return self._state

    @property
    def is_refreshing(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    async def run_cycle(self) -> AggregateView:
        """
        Run one full aggregation cycle.

        Per-item failures are contained by the fetchers; anything raised
        from here is a cycle-level failure.

        Returns:
            A new AggregateView
        """
        leagues = await self.leagues.fetch()
        scores_by_league = await self.scoreboards.fetch_all(leagues)

        live_events = select_live_events(leagues, scores_by_league)
        self.logger.debug(f"{len(live_events)} live event(s) selected")

        odds_by_event = await self.odds.fetch_all(live_events)

        return AggregateView(
            leagues=tuple(leagues),
            scores_by_league=scores_by_league,
            odds_by_event=odds_by_event,
            refreshed_at=datetime.now(timezone.utc),
        )

    async def refresh(self) -> RefreshState:
        """
        Run a refresh cycle and publish its outcome.

        A call made while a cycle is already in flight joins that cycle
        instead of starting another one.

        Returns:
            The state published by the cycle
        """
        if self.is_refreshing:
            self.logger.info("Refresh already in flight, joining it")
            return await asyncio.shield(self._in_flight)

        task = self._in_flight = asyncio.ensure_future(self._refresh())
        try:
            return await asyncio.shield(task)
        finally:
            if self._in_flight is task and task.done():
                self._in_flight = None

    async def _refresh(self) -> RefreshState:
        self._cycle_count += 1
        cycle = self._cycle_count
        started = datetime.now(timezone.utc)

        self._publish(RefreshState(status=CycleStatus.LOADING, view=self._state.view))
        self.logger.info(f"Refresh cycle {cycle} started")

        try:
            view = await self.run_cycle()
        except Exception as e:
            self.logger.exception(f"Refresh cycle {cycle} failed: {e}")
            return self._publish(
                RefreshState(status=CycleStatus.ERROR, error=str(e) or type(e).__name__)
            )

        elapsed = (datetime.now(timezone.utc) - started).total_seconds()
        self.logger.info(
            f"Refresh cycle {cycle} complete in {elapsed:.2f}s: "
            f"{len(view.leagues)} leagues, {view.event_count} events, "
            f"{len(view.odds_by_event)} odds"
        )
        return self._publish(RefreshState(status=CycleStatus.READY, view=view))

    def _publish(self, state: RefreshState) -> RefreshState:
        self._state = state
        return state

    async def health_check(self):
        """Check the upstream data source."""
        return await self.client.health_check()

    async def close(self) -> None:
        """Cancel any in-flight cycle, then release the upstream client's resources."""
        task = self._in_flight
        if task is not None and not task.done():
            self.logger.info("Cancelling in-flight refresh")
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._in_flight = None

        close = getattr(self.client, "close", None)
        if close is not None:
            await close()
