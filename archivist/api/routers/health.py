"""Health and monitoring endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import httpx
from fastapi import APIRouter

from ..config import config
from ..models.health import HealthResponse

router = APIRouter(tags=["health"])


def get_app_state() -> Any:
    """Get application state from the FastAPI app module."""
    from ..main import state

    return state


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check health of the service and the campaign backend.

    Returns:
        HealthResponse with overall status and individual service statuses.
    """
    state = get_app_state()

    services: Dict[str, str] = {
        "api": "up",
        "graph_client": "up" if state.client is not None else "down",
        "backend": "unknown",
    }

    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            r = await client.get(f"{config.ARCHIVIST_API_URL}/health")
            services["backend"] = "up" if r.status_code < 500 else "down"
    except httpx.HTTPError:
        services["backend"] = "down"

    overall = "healthy" if all(v == "up" for v in services.values()) else "degraded"

    return HealthResponse(
        status=overall,
        services=services,
        backend_url=config.ARCHIVIST_API_URL,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
