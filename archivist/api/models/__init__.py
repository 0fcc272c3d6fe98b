"""API request and response models."""

from __future__ import annotations

from .error import ErrorResponse
from .graph import (
    GraphViewResponse,
    LegendResponse,
    NodeRouteResponse,
    ShareLinkResponse,
    StyleRow,
)
from .health import HealthResponse

__all__ = [
    "ErrorResponse",
    "GraphViewResponse",
    "HealthResponse",
    "LegendResponse",
    "NodeRouteResponse",
    "ShareLinkResponse",
    "StyleRow",
]
