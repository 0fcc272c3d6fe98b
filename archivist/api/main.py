"""
Mind map view service.

Fetches relationship graphs from the campaign backend and serves them to the
browser renderer already styled and laid out.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from archivist.services.graph_client import GraphApiClient
from archivist.utils.logging_config import setup_logging

from .config import config
from .middleware import setup_cors, setup_error_handlers
from .routers import graph, health


# ==================== Application State ====================


class AppState:
    """Global application state container."""

    client: Optional[GraphApiClient] = None  # Campaign backend graph client


state = AppState()


# ==================== Lifespan ====================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup resources.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    setup_logging(level=config.LOG_LEVEL)
    config.validate_production_config()

    print(f"[*] Connecting graph client to {config.ARCHIVIST_API_URL}...")
    state.client = GraphApiClient(
        base_url=config.ARCHIVIST_API_URL,
        token=config.ARCHIVIST_API_TOKEN,
        timeout=config.GRAPH_REQUEST_TIMEOUT,
    )
    if config.ARCHIVIST_API_TOKEN:
        print(f"[+] Using API token {config.mask_sensitive(config.ARCHIVIST_API_TOKEN)}")
    else:
        print("[i] No ARCHIVIST_API_TOKEN set, requests are unauthenticated")
    print("[+] Graph client ready")

    yield

    print("[*] Shutting down gracefully...")
    if state.client:
        await state.client.close()
        state.client = None
    print("[+] Shutdown complete")


# ==================== FastAPI App ====================

app = FastAPI(
    title="RPG Archivist Mind Map",
    description="Relationship graph views for worlds, campaigns and their entities",
    version="1.0.0",
    lifespan=lifespan,
)

setup_cors(app)
setup_error_handlers(app)

app.include_router(health.router)
app.include_router(graph.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("archivist.api.main:app", host="0.0.0.0", port=8000, reload=False)
