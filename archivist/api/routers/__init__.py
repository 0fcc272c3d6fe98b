"""API routers for the mind map service."""

from __future__ import annotations

from . import graph, health

__all__ = [
    "graph",
    "health",
]
