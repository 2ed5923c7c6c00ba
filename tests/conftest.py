"""
Shared fixtures: an in-memory stand-in for ESPNClient and event builders.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from soccer_scoreboard.data.sources.base import (
    DataSourceError,
    DataSourceHealth,
    DataSourceStatus,
)


def make_event(
    event_id: str,
    state: str = "pre",
    date: str | None = None,
    detail: str = "FT",
    home: str = "Home FC",
    away: str = "Away FC",
    home_score: str = "0",
    away_score: str = "0",
) -> dict[str, Any]:
    """Build an ESPN-shaped scoreboard event."""
    return {
        "id": event_id,
        "date": date or datetime.now(timezone.utc).isoformat(),
        "status": {"type": {"state": state, "shortDetail": detail}},
        "competitions": [
            {
                "competitors": [
                    {
                        "id": f"{event_id}-h",
                        "homeAway": "home",
                        "team": {"displayName": home},
                        "score": home_score,
                    },
                    {
                        "id": f"{event_id}-a",
                        "homeAway": "away",
                        "team": {"displayName": away},
                        "score": away_score,
                    },
                ]
            }
        ],
    }


def make_odds(home: Any = None, away: Any = None) -> dict[str, Any]:
    """Build an ESPN-shaped odds response with a single provider item."""
    return {
        "items": [
            {
                "homeTeamOdds": {"current": {"moneyLine": {"american": home}}},
                "awayTeamOdds": {"current": {"moneyLine": {"american": away}}},
            }
        ]
    }


def league_item(league_id: str, slug: str, name: str | None = None) -> dict[str, Any]:
    return {
        "id": league_id,
        "name": name or f"League {league_id}",
        "abbreviation": slug.upper(),
        "slug": slug,
        "season": {"year": 2024},
    }


class FakeESPNClient:
    """
    Records calls and serves canned payloads.

    A payload that is an Exception instance is raised instead of returned.
    """

    def __init__(
        self,
        leagues: Any = None,
        scoreboards: dict[str, Any] | None = None,
        odds: dict[str, Any] | None = None,
    ) -> None:
        self.leagues = leagues if leagues is not None else []
        self.scoreboards = scoreboards or {}
        self.odds = odds or {}
        self.calls: list[tuple] = []
        self.closed = False

    @staticmethod
    def _serve(payload: Any) -> Any:
        if isinstance(payload, BaseException):
            raise payload
        return payload

    async def get_leagues(self):
        self.calls.append(("leagues",))
        return self._serve(self.leagues)

    async def get_scoreboard(self, slug):
        self.calls.append(("scoreboard", slug))
        if slug not in self.scoreboards:
            raise DataSourceError(f"no scoreboard for {slug}", "fake")
        return self._serve(self.scoreboards[slug])

    async def get_event_odds(self, slug, event_id):
        self.calls.append(("odds", slug, event_id))
        if event_id not in self.odds:
            raise DataSourceError(f"404 for {event_id}", "fake")
        return self._serve(self.odds[event_id])

    async def health_check(self):
        self.calls.append(("health",))
        try:
            self._serve(self.leagues)
        except DataSourceError as e:
            return DataSourceHealth("fake", DataSourceStatus.UNHEALTHY, error_message=str(e))
        return DataSourceHealth("fake", DataSourceStatus.HEALTHY, last_success=datetime.now())

    async def close(self):
        self.closed = True

    def calls_of(self, kind: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 8, 17, 14, 0, tzinfo=timezone.utc)
