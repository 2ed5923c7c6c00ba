"""
Live event selection.
"""
from typing import Any, Iterable, Mapping

from .models import League, LiveEvent, is_live


def select_live_events(
    leagues: Iterable[League],
    scores_by_league: Mapping[str, list[dict[str, Any]]],
) -> list[LiveEvent]:
    """
    Select every in-progress event across all leagues.

    Keeps league order, then event order within each league. Events that
    are not dicts or lack a status are simply not selected.
    """
    return [
        LiveEvent(league, event)
        for league in leagues
        for event in scores_by_league.get(league.id) or []
        if is_live(event)
    ]
