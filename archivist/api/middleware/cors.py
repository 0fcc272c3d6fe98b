"""CORS middleware configuration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import config


def setup_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the FastAPI application.

    Args:
        app: FastAPI application instance to configure.

    Note:
        Origins come from ALLOWED_ORIGINS; the mind map renderer only reads,
        so GET is the only method allowed.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
        allow_credentials=True,
    )
