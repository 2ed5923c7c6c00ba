from datetime import datetime, timedelta, timezone

from rich.console import Console

from conftest import make_event
from soccer_scoreboard.config.constants import CycleStatus
from soccer_scoreboard.dashboard.terminal import TerminalDashboard
from soccer_scoreboard.dashboard.view import (
    build_scoreboard_view,
    format_date,
    format_time,
)
from soccer_scoreboard.data.models import AggregateView, League, OddsQuote, RefreshState
from soccer_scoreboard.data.time_window import TimeWindow

EPL = League("1", "English Premier League", "EPL", "eng.1")
LIGA = League("2", "LALIGA", "LL", "esp.1")


def _state(now, odds=None):
    iso = lambda delta: (now + delta).isoformat()
    view = AggregateView(
        leagues=(EPL, LIGA),
        scores_by_league={
            "1": [
                make_event("live", "in", date=iso(timedelta(0)), detail="67'",
                           home="Arsenal", away="Chelsea", home_score="2", away_score="1"),
                make_event("old", "post", date=iso(timedelta(days=-5))),
                make_event("soon", "pre", date=iso(timedelta(days=2))),
                {"id": "nocomp", "date": iso(timedelta(0)), "competitions": []},
            ],
            "2": [make_event("far", "pre", date=iso(timedelta(days=9)))],
        },
        odds_by_event=odds if odds is not None else {"live": OddsQuote(home=-150, away=130)},
    )
    return RefreshState(status=CycleStatus.READY, view=view)


def test_out_of_window_events_and_empty_leagues_are_hidden(now):
    view = build_scoreboard_view(_state(now), TimeWindow(), now=now, tz=timezone.utc)

    assert [s.name for s in view.sections] == ["English Premier League"]
    assert [row.event_id for row in view.sections[0].events] == ["live", "soon"]


def test_live_event_shows_probabilities_per_side(now):
    view = build_scoreboard_view(_state(now), TimeWindow(), now=now, tz=timezone.utc)
    live = view.sections[0].events[0]

    assert live.detail == "67'"
    assert live.date == "Aug 17"
    assert live.time == "2:00 PM"
    assert [(c.name, c.score, c.probability) for c in live.competitors] == [
        ("Arsenal", "2", "60.0%"),
        ("Chelsea", "1", "43.5%"),
    ]


def test_huge_moneyline_does_not_break_the_view(now):
    odds = {"live": OddsQuote(home="1e1000000", away=130)}
    view = build_scoreboard_view(_state(now, odds), TimeWindow(), now=now, tz=timezone.utc)
    live = view.sections[0].events[0]

    assert [c.probability for c in live.competitors] == ["0.0%", "43.5%"]


def test_probabilities_are_gated_on_live_state(now):
    odds = {"soon": OddsQuote(home=-150, away=130)}
    view = build_scoreboard_view(_state(now, odds), TimeWindow(), now=now, tz=timezone.utc)

    for row in view.sections[0].events:
        assert all(c.probability is None for c in row.competitors)


def test_error_state_has_no_sections(now):
    state = RefreshState(status=CycleStatus.ERROR, error="boom")

    view = build_scoreboard_view(state, TimeWindow(), now=now)

    assert view.status == CycleStatus.ERROR
    assert view.error == "boom"
    assert view.sections == ()


def test_to_dict_is_serializable(now):
    data = build_scoreboard_view(_state(now), TimeWindow(), now=now, tz=timezone.utc).to_dict()

    assert data["status"] == "ready"
    assert data["leagues"][0]["events"][0]["competitors"][0]["probability"] == "60.0%"


def test_formatting_helpers(now):
    assert format_date(now) == "Aug 17"
    assert format_time(now.replace(hour=0, minute=5)) == "12:05 AM"
    assert format_time(now.replace(hour=12, minute=30)) == "12:30 PM"


def test_terminal_renders_each_state(now):
    console = Console(record=True, width=120)

    class _Pipeline:
        state = _state(datetime.now(timezone.utc))

    dashboard = TerminalDashboard(_Pipeline(), TimeWindow(), console=console)
    dashboard.render_once()
    text = console.export_text()
    assert "English Premier League" in text
    assert "Arsenal" in text

    _Pipeline.state = RefreshState(status=CycleStatus.ERROR, error="Failed to load leagues")
    dashboard.render_once()
    assert "Failed to load leagues" in console.export_text()
