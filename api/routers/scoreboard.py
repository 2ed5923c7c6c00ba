"""Scoreboard endpoints - time-windowed view of the latest refresh cycle."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from soccer_scoreboard.dashboard.view import build_scoreboard_view

logger = logging.getLogger(__name__)

router = APIRouter()


def _render(app_state: Any, state: Any) -> dict[str, Any]:
    return build_scoreboard_view(state, app_state.window).to_dict()


@router.get("/scoreboard")
async def get_scoreboard(request: Request) -> dict[str, Any]:
    """
    Get the current scoreboard.

    The event window is evaluated at request time against the most
    recently published snapshot.
    """
    app_state = request.app.state.app_state
    if app_state.pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialized")

    return _render(app_state, app_state.pipeline.state)


@router.post("/refresh")
async def refresh_scoreboard(request: Request) -> dict[str, Any]:
    """
    Run a refresh cycle now and return the resulting scoreboard.

    Joins the in-flight cycle if one is already running.
    """
    app_state = request.app.state.app_state
    if app_state.pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialized")

    logger.info("Manual refresh requested")
    state = await app_state.pipeline.refresh()
    return _render(app_state, state)
