"""Campaign backend client for relationship graph endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from archivist.api.config import config
from archivist.models.graph import GraphData, GraphEnvelope, GraphQueryParams
from archivist.utils.exceptions import (
    AuthenticationError,
    GraphFetchError,
    GraphSchemaError,
)

logger = logging.getLogger(__name__)


class GraphApiClient:
    """Client for the backend ``/graph`` endpoints.

    Every call returns a freshly validated ``GraphData``; nothing is cached
    between requests. Timeouts come from the HTTP client and no retries are
    attempted.

    Attributes:
        base_url: Backend API base URL (including the ``/api`` prefix).
        client: Async HTTP client for API requests.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the graph client.

        Args:
            base_url: Backend base URL. Defaults to ``ARCHIVIST_API_URL``.
            token: Bearer token sent with every request, if any.
            timeout: Request timeout in seconds.
            client: Pre-built HTTP client (used by tests to inject a transport).
        """
        self.base_url = (base_url or config.ARCHIVIST_API_URL).rstrip("/")
        self.token = token if token is not None else config.ARCHIVIST_API_TOKEN
        self.timeout = timeout or config.GRAPH_REQUEST_TIMEOUT
        self.client = client or httpx.AsyncClient(timeout=self.timeout)

    async def __aenter__(self) -> "GraphApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, path: str, params: GraphQueryParams) -> GraphData:
        """Issue a GET and unwrap the ``{success, data}`` envelope.

        Raises:
            AuthenticationError: If the backend answers 401.
            GraphFetchError: On transport failures, HTTP errors or ``success: false``.
            GraphSchemaError: If the payload does not match the graph schema.
        """
        query = params.to_query()
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, query)

        try:
            response = await self.client.get(url, params=query, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Graph request to {path} failed: {e}")
            raise GraphFetchError(f"Request to {path} failed: {e}") from e

        if response.status_code == 401:
            logger.warning("Graph backend rejected credentials for %s", path)
            raise AuthenticationError("Backend rejected credentials", status_code=401)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Graph backend error on {path}: {response.status_code}")
            raise GraphFetchError(
                f"Backend returned {response.status_code} for {path}",
                status_code=response.status_code,
            ) from e

        try:
            envelope = GraphEnvelope.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise GraphSchemaError(f"Malformed response envelope from {path}") from e

        if not envelope.success:
            message = (envelope.error or {}).get("message", "Backend reported failure")
            raise GraphFetchError(f"{message} ({path})", status_code=response.status_code)

        try:
            graph = GraphData.model_validate(envelope.data or {})
        except PydanticValidationError as e:
            logger.error(f"Invalid graph payload from {path}: {e.error_count()} errors")
            raise GraphSchemaError(f"Invalid graph payload from {path}") from e

        logger.info(
            "Fetched graph from %s: %d nodes, %d edges",
            path,
            len(graph.nodes),
            len(graph.edges),
        )
        return graph

    async def get_graph_data(self, params: GraphQueryParams) -> GraphData:
        """Get graph data for the given parameters from ``GET /graph``."""
        return await self._get("/graph", params)

    async def get_world_graph(self, world_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "world_id", world_id))

    async def get_campaign_graph(self, campaign_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "campaign_id", campaign_id))

    async def get_session_graph(self, session_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "session_id", session_id))

    async def get_character_graph(self, character_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "character_id", character_id))

    async def get_location_graph(self, location_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "location_id", location_id))

    async def get_item_graph(self, item_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "item_id", item_id))

    async def get_event_graph(self, event_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "event_id", event_id))

    async def get_power_graph(self, power_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self.get_graph_data(_scoped(params, "power_id", power_id))

    async def get_mind_map_graph(self, params: Optional[GraphQueryParams] = None) -> GraphData:
        """Get the unscoped mind map from ``GET /graph/mind-map``."""
        return await self._get("/graph/mind-map", _scoped(params, None, None))

    async def get_hierarchy_graph(self, params: Optional[GraphQueryParams] = None) -> GraphData:
        """Get the containment tree from ``GET /graph/hierarchy``."""
        return await self._get("/graph/hierarchy", params or GraphQueryParams())

    async def get_world_hierarchy_graph(self, world_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self._get("/graph/hierarchy", _scoped(params, "world_id", world_id))

    async def get_campaign_hierarchy_graph(self, campaign_id: str, params: Optional[GraphQueryParams] = None) -> GraphData:
        return await self._get("/graph/hierarchy", _scoped(params, "campaign_id", campaign_id))

    async def fetch(self, params: GraphQueryParams) -> GraphData:
        """Fetch the graph for whichever scope id is set.

        Falls back to the mind map when no scope id is set.
        """
        scope = params.scope
        if scope is None:
            return await self.get_mind_map_graph(params)
        field_name, entity_id = scope
        fetcher = {
            "world_id": self.get_world_graph,
            "campaign_id": self.get_campaign_graph,
            "session_id": self.get_session_graph,
            "character_id": self.get_character_graph,
            "location_id": self.get_location_graph,
            "item_id": self.get_item_graph,
            "event_id": self.get_event_graph,
            "power_id": self.get_power_graph,
        }[field_name]
        return await fetcher(entity_id, params)

    async def fetch_hierarchy(self, params: GraphQueryParams) -> GraphData:
        """Fetch the hierarchy tree, scoped to a world or campaign when set."""
        if params.world_id:
            return await self.get_world_hierarchy_graph(params.world_id, params)
        if params.campaign_id:
            return await self.get_campaign_hierarchy_graph(params.campaign_id, params)
        return await self.get_hierarchy_graph(params.with_scope(None, None))


def _scoped(
    params: Optional[GraphQueryParams], field_name: Optional[str], entity_id: Optional[str]
) -> GraphQueryParams:
    return (params or GraphQueryParams()).with_scope(field_name, entity_id)
