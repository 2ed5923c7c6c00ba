"""
Presentation view model built from the published refresh state.

The time window is applied here, at render time, and implied probabilities
are only attached to competitors of live events.
"""
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Optional

from ..betting.odds_converter import american_to_percentage
from ..config.constants import CycleStatus
from ..data.models import (
    AggregateView,
    OddsQuote,
    RefreshState,
    event_competitors,
    event_detail,
    event_state,
    is_live,
)
from ..data.time_window import TimeWindow, parse_timestamp


@dataclass(frozen=True)
class CompetitorRow:
    name: str
    score: Optional[str]
    home_away: Optional[str]
    probability: Optional[str] = None


@dataclass(frozen=True)
class EventRow:
    event_id: str
    date: str
    time: str
    detail: Optional[str]
    state: Optional[str]
    competitors: tuple[CompetitorRow, ...]


@dataclass(frozen=True)
class LeagueSection:
    league_id: str
    name: str
    abbreviation: str
    events: tuple[EventRow, ...]


@dataclass(frozen=True)
class ScoreboardView:
    """Everything a renderer needs for one frame."""

    status: CycleStatus
    sections: tuple[LeagueSection, ...] = field(default_factory=tuple)
    error: Optional[str] = None
    refreshed_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "error": self.error,
            "refreshed_at": self.refreshed_at.isoformat() if self.refreshed_at else None,
            "leagues": [
                {
                    "id": section.league_id,
                    "name": section.name,
                    "abbreviation": section.abbreviation,
                    "events": [
                        {
                            "id": row.event_id,
                            "date": row.date,
                            "time": row.time,
                            "detail": row.detail,
                            "state": row.state,
                            "competitors": [
                                {
                                    "name": c.name,
                                    "score": c.score,
                                    "home_away": c.home_away,
                                    "probability": c.probability,
                                }
                                for c in row.competitors
                            ],
                        }
                        for row in section.events
                    ],
                }
                for section in self.sections
            ],
        }


def format_date(moment: datetime) -> str:
    """Format like "Aug 17"."""
    return f"{moment.strftime('%b')} {moment.day}"


def format_time(moment: datetime) -> str:
    """Format like "2:00 PM"."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def _competitor_row(competitor: dict, quote: Optional[OddsQuote], live: bool) -> CompetitorRow:
    home_away = competitor.get("homeAway")
    team = competitor.get("team") or {}
    score = competitor.get("score")

    probability = None
    if live and quote is not None:
        probability = american_to_percentage(quote.for_side(home_away))

    return CompetitorRow(
        name=team.get("displayName", "") if isinstance(team, dict) else "",
        score=None if score is None else str(score),
        home_away=home_away,
        probability=probability,
    )


def _event_row(event: dict, quote: Optional[OddsQuote], tz: Optional[tzinfo]) -> Optional[EventRow]:
    competitors = event_competitors(event)
    if not competitors:
        return None

    moment = parse_timestamp(event.get("date")).astimezone(tz)
    live = is_live(event)

    return EventRow(
        event_id=str(event.get("id")),
        date=format_date(moment),
        time=format_time(moment),
        detail=event_detail(event),
        state=event_state(event),
        competitors=tuple(_competitor_row(c, quote, live) for c in competitors),
    )


def build_sections(
    view: AggregateView,
    window: TimeWindow,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> tuple[LeagueSection, ...]:
    """
    Filter a snapshot down to what should be displayed.

    Leagues keep catalog order; leagues with no event inside the window are
    dropped, as are events without a competition.
    """
    sections = []
    for league in view.leagues:
        rows = []
        for event in view.events_for(league.id):
            if not isinstance(event, dict) or not window.contains(event.get("date"), now):
                continue
            row = _event_row(event, view.odds_by_event.get(str(event.get("id"))), tz)
            if row is not None:
                rows.append(row)

        if rows:
            sections.append(
                LeagueSection(
                    league_id=league.id,
                    name=league.name,
                    abbreviation=league.abbreviation,
                    events=tuple(rows),
                )
            )

    return tuple(sections)


def build_scoreboard_view(
    state: RefreshState,
    window: TimeWindow,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> ScoreboardView:
    """
    Build the display view for a refresh state.

    Args:
        state: Published refresh state
        window: Time window applied at render time
        now: Reference moment (defaults to the current time)
        tz: Display timezone (defaults to the local timezone)
    """
    if state.status == CycleStatus.ERROR or state.view is None:
        return ScoreboardView(status=state.status, error=state.error)

    return ScoreboardView(
        status=state.status,
        sections=build_sections(state.view, window, now=now, tz=tz),
        refreshed_at=state.view.refreshed_at,
    )
