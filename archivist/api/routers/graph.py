"""Mind map graph view endpoints."""

from __future__ import annotations

from typing import Any, Optional, Type

from fastapi import APIRouter, HTTPException, Query, Request

from archivist.visualization.navigation import route_for
from archivist.visualization.share import (
    SOCIAL_SHARE_URLS,
    build_share_url,
    build_social_link,
    parse_bool,
    parse_share_query,
)
from archivist.visualization.styles import legend
from archivist.visualization.view import GraphView, HierarchyTreeView, ViewStatus

from ..config import config
from ..models.graph import (
    GraphViewResponse,
    LegendResponse,
    NodeRouteResponse,
    ShareLinkResponse,
)

router = APIRouter(prefix="/api/v1/graph", tags=["graph"])


def get_app_state() -> Any:
    """Get application state from the FastAPI app module."""
    from ..main import state

    return state


def _get_client() -> Any:
    state = get_app_state()
    if state.client is None:
        raise HTTPException(status_code=503, detail="Graph client not initialized")
    return state.client


async def _render_view(view_cls: Type[GraphView], request: Request) -> GraphViewResponse:
    query = request.url.query
    params, warnings = parse_share_query(query)
    raw = request.query_params
    show_labels = parse_bool(raw.get("showLabels"), "showLabels", True, warnings)
    show_images = parse_bool(
        raw.get("showImages"), "showImages", params.include_images, warnings
    )

    view = view_cls(
        _get_client(),
        params=params,
        show_labels=show_labels,
        show_images=show_images,
        warnings=warnings,
    )
    status = await view.load()
    if status == ViewStatus.ERROR:
        raise HTTPException(status_code=502, detail=view.error)
    return GraphViewResponse(**view.snapshot())


@router.get("/view", response_model=GraphViewResponse)
async def get_graph_view(request: Request) -> GraphViewResponse:
    """Fetch, adapt and lay out the relationship graph.

    Accepts the share-link query format (one scope id, depth, nodeTypes,
    edgeTypes, layout, includeImages) plus showLabels/showImages. Values
    that fail to parse are defaulted and reported in ``warnings``.

    Returns:
        GraphViewResponse with positioned nodes and styled edges.

    Raises:
        HTTPException: 502 when the backend graph cannot be loaded.
    """
    return await _render_view(GraphView, request)


@router.get("/hierarchy/view", response_model=GraphViewResponse)
async def get_hierarchy_view(request: Request) -> GraphViewResponse:
    """Containment tree for a world or campaign, laid out top-down."""
    return await _render_view(HierarchyTreeView, request)


@router.get("/route", response_model=NodeRouteResponse)
async def get_node_route(
    type: str = Query(..., description="Node type"),
    id: str = Query(..., description="Entity id"),
) -> NodeRouteResponse:
    """Resolve the detail page a node click navigates to.

    Raises:
        HTTPException: 404 if the node type has no detail page.
    """
    route = route_for(type, id)
    if route is None:
        raise HTTPException(status_code=404, detail=f"No detail page for type '{type}'")
    return NodeRouteResponse(type=type, id=id, route=route)


@router.get("/share", response_model=ShareLinkResponse)
async def get_share_link(
    request: Request,
    include_filters: bool = Query(True, alias="includeFilters"),
    base_url: Optional[str] = Query(None, alias="baseUrl"),
) -> ShareLinkResponse:
    """Build a shareable link for the graph described by the query."""
    params, warnings = parse_share_query(request.url.query)
    url = build_share_url(
        base_url or config.MIND_MAP_PUBLIC_URL, params, include_filters=include_filters
    )
    social = {platform: build_social_link(platform, url) for platform in SOCIAL_SHARE_URLS}
    return ShareLinkResponse(
        url=url, include_filters=include_filters, warnings=warnings, social=social
    )


@router.get("/legend", response_model=LegendResponse)
async def get_legend() -> LegendResponse:
    """Colors and icons for every node and edge type."""
    return LegendResponse(**legend())
