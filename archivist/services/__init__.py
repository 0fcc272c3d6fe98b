"""Services layer for external integrations."""

from __future__ import annotations

from .graph_client import GraphApiClient

__all__ = [
    "GraphApiClient",
]
