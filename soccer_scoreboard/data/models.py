"""
Data model for the aggregation pipeline.

Events stay in their upstream (ESPN) shape as plain dicts; the helpers below
are the only places that reach into that shape.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional

from ..config.constants import HOME, CycleStatus, EventState


@dataclass(frozen=True)
class League:
    """A league from the catalog. Identity is `id`."""

    id: str
    name: str
    abbreviation: str
    slug: str

    @classmethod
    def from_catalog_item(cls, item: Mapping[str, Any]) -> League:
        """
        Build a League from an upstream catalog item, discarding other fields.

        Raises:
            KeyError: If a required field is missing
            TypeError: If the item is not a mapping
        """
        return cls(
            id=str(item["id"]),
            name=item["name"],
            abbreviation=item["abbreviation"],
            slug=item["slug"],
        )


@dataclass(frozen=True)
class OddsQuote:
    """American moneyline values for the two sides of one event."""

    home: Optional[Any] = None
    away: Optional[Any] = None

    def for_side(self, home_away: Optional[str]) -> Optional[Any]:
        """Get the quote for a competitor's homeAway value."""
        return self.home if home_away == HOME else self.away


class LiveEvent(NamedTuple):
    """An in-progress event paired with the league it was fetched under."""

    league: League
    event: dict[str, Any]


@dataclass(frozen=True)
class AggregateView:
    """One refresh cycle's snapshot: leagues x events x live odds."""

    leagues: tuple[League, ...]
    scores_by_league: Mapping[str, list[dict[str, Any]]]
    odds_by_event: Mapping[str, OddsQuote]
    refreshed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "leagues", tuple(self.leagues))
        object.__setattr__(
            self, "scores_by_league", MappingProxyType(dict(self.scores_by_league))
        )
        object.__setattr__(
            self, "odds_by_event", MappingProxyType(dict(self.odds_by_event))
        )

    def events_for(self, league_id: str) -> list[dict[str, Any]]:
        return list(self.scores_by_league.get(league_id, []))

    @property
    def event_count(self) -> int:
        return sum(len(events) for events in self.scores_by_league.values())


@dataclass(frozen=True)
class RefreshState:
    """
    The published result of the latest refresh cycle.

    Replaced wholesale on every transition; `view` is the last complete
    snapshot (kept while loading, dropped on error).
    """

    status: CycleStatus = CycleStatus.IDLE
    view: Optional[AggregateView] = None
    error: Optional[str] = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _dig(obj: Any, *keys: Any) -> Any:
    """Walk nested dicts/lists, returning None on any missing step."""
    for key in keys:
        if isinstance(obj, dict):
            obj = obj.get(key)
        elif isinstance(obj, list) and isinstance(key, int):
            obj = obj[key] if -len(obj) <= key < len(obj) else None
        else:
            return None
    return obj


def event_state(event: Any) -> Optional[str]:
    """Get `status.type.state` of an event."""
    return _dig(event, "status", "type", "state")


def is_live(event: Any) -> bool:
    return event_state(event) == EventState.IN.value


def event_detail(event: Any) -> Optional[str]:
    """Get the display string `status.type.shortDetail`."""
    return _dig(event, "status", "type", "shortDetail")


def event_competitors(event: Any) -> list[dict[str, Any]]:
    """Get `competitions[0].competitors`, or an empty list."""
    competitors = _dig(event, "competitions", 0, "competitors")
    if not isinstance(competitors, list):
        return []
    return [c for c in competitors if isinstance(c, dict)]


def moneyline(side_odds: Any) -> Optional[Any]:
    """Get `current.moneyLine.american` from a team odds block."""
    return _dig(side_odds, "current", "moneyLine", "american")
