"""Health check endpoints."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """
    Health check endpoint.

    Returns status of all system components.
    """
    app_state = request.app.state.app_state

    components = app_state.get_health_status()

    is_healthy = components.get("initialized", False) and components.get("cycle_status") != "error"

    return {
        "status": "healthy" if is_healthy else "degraded",
        "timestamp": datetime.now().isoformat(),
        "components": components,
    }


@router.get("/health/upstream")
async def upstream_check(request: Request) -> dict[str, Any]:
    """
    Check the upstream scores provider on demand.

    Returns 503 if no pipeline is available.
    """
    app_state = request.app.state.app_state
    if app_state.pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialized")

    health = await app_state.pipeline.health_check()

    return {
        "source": health.source_name,
        "status": health.status.value,
        "error": health.error_message,
        "last_success": health.last_success.isoformat() if health.last_success else None,
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/health/live")
async def liveness_check() -> dict[str, Any]:
    """
    Kubernetes-style liveness probe.

    Returns 200 if the service is alive (even if not fully ready).
    """
    return {
        "alive": True,
        "timestamp": datetime.now().isoformat(),
    }
