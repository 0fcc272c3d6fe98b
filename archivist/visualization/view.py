"""Relationship graph view: fetch, adapt, lay out, and react to interaction.

A view instance moves through ``idle -> loading -> ready | error``. Every
parameter change and every refresh re-runs the whole fetch, adapt and layout
chain. Each dispatch is numbered; a response arriving after a newer dispatch
has started is discarded so stale data never overwrites fresher state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from archivist.api.config import config
from archivist.models.flow import FlowEdge, FlowNode
from archivist.models.graph import (
    EdgeType,
    GraphData,
    GraphEdge,
    GraphNode,
    GraphQueryParams,
    LayoutType,
    NodeType,
)
from archivist.services.graph_client import GraphApiClient
from archivist.utils.constants import GRAPH_LOAD_ERROR_MESSAGE, MIN_GRAPH_DEPTH
from archivist.utils.exceptions import GraphFetchError, ValidationError

from .adapter import adapt_graph
from .annotations import AnnotationEditor, DeleteCallback, SaveCallback
from .layout import apply_layout
from .navigation import resolve_node_route
from .share import QueryInput, parse_share_query

logger = logging.getLogger(__name__)


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class GraphView:
    """State of one relationship graph on screen.

    Args:
        client: Backend graph client.
        params: Initial query parameters.
        show_labels: Display node and edge labels.
        show_images: Display node thumbnails.
        navigate: Called with a detail route when a node is clicked and no
            ``on_node_click`` override is given.
        on_node_click: Optional override receiving the clicked ``GraphNode``.
        on_edge_click: Optional callback receiving the clicked ``GraphEdge``.
        warnings: Non-blocking messages to surface alongside the graph.
    """

    def __init__(
        self,
        client: GraphApiClient,
        params: Optional[GraphQueryParams] = None,
        show_labels: bool = True,
        show_images: bool = True,
        navigate: Optional[Callable[[str], Any]] = None,
        on_node_click: Optional[Callable[[GraphNode], Any]] = None,
        on_edge_click: Optional[Callable[[GraphEdge], Any]] = None,
        warnings: Optional[Sequence[str]] = None,
    ):
        self.client = client
        self.params = params or GraphQueryParams()
        self.show_labels = show_labels
        self.show_images = show_images
        self.navigate = navigate
        self.on_node_click = on_node_click
        self.on_edge_click = on_edge_click
        self.warnings: List[str] = list(warnings or [])

        self.status = ViewStatus.IDLE
        self.error: Optional[str] = None
        self.graph: Optional[GraphData] = None
        self.nodes: List[FlowNode] = []
        self.edges: List[FlowEdge] = []
        self._generation = 0

    @classmethod
    def from_query(cls, client: GraphApiClient, query: QueryInput, **kwargs: Any) -> "GraphView":
        """Build a view from share-link query parameters.

        Values that fail to parse are defaulted and reported in ``warnings``.
        """
        params, warnings = parse_share_query(query)
        return cls(client, params=params, warnings=warnings, **kwargs)

    @property
    def layout_type(self) -> LayoutType:
        return self.params.layout

    @property
    def is_empty(self) -> bool:
        return self.status == ViewStatus.READY and not self.nodes

    async def _fetch(self, params: GraphQueryParams) -> GraphData:
        return await self.client.fetch(params)

    async def load(self) -> ViewStatus:
        """Run fetch, adapt and layout for the current parameters."""
        self._generation += 1
        generation = self._generation
        params = self.params
        show_labels, show_images = self.show_labels, self.show_images
        layout_type = self.layout_type

        self.status = ViewStatus.LOADING
        self.error = None

        try:
            graph = await self._fetch(params)
        except GraphFetchError as e:
            if generation != self._generation:
                logger.debug("Ignoring failure of superseded request %d", generation)
                return self.status
            logger.error(f"Error fetching graph data: {e}")
            return self._fail()

        if generation != self._generation:
            logger.debug(
                "Discarding stale graph response %d (latest %d)",
                generation,
                self._generation,
            )
            return self.status

        try:
            flow = adapt_graph(graph, show_labels=show_labels, show_images=show_images)
            nodes = apply_layout(flow.nodes, flow.edges, layout_type)
        except Exception as e:
            logger.error(f"Error preparing graph view: {e}", exc_info=True)
            return self._fail()

        self.graph = graph
        self.nodes = nodes
        self.edges = flow.edges
        self.status = ViewStatus.READY
        return self.status

    def _fail(self) -> ViewStatus:
        self.status = ViewStatus.ERROR
        self.error = GRAPH_LOAD_ERROR_MESSAGE
        self.graph = None
        self.nodes = []
        self.edges = []
        return self.status

    async def refresh(self) -> ViewStatus:
        """Manual refresh; the only way out of the error state."""
        return await self.load()

    async def update_params(self, **changes: Any) -> ViewStatus:
        """Apply parameter changes (python field names) and reload."""
        merged = {**self.params.model_dump(), **changes}
        try:
            self.params = GraphQueryParams.model_validate(merged)
        except ValueError as e:
            raise ValidationError(f"Invalid graph parameters: {e}") from e
        return await self.load()

    async def set_depth(self, depth: int) -> ViewStatus:
        if not MIN_GRAPH_DEPTH <= depth <= config.GRAPH_MAX_DEPTH:
            raise ValidationError(
                f"Depth must be between {MIN_GRAPH_DEPTH} and {config.GRAPH_MAX_DEPTH}"
            )
        return await self.update_params(depth=depth)

    async def set_node_types(self, node_types: Sequence[NodeType]) -> ViewStatus:
        return await self.update_params(node_types=list(node_types))

    async def set_edge_types(self, edge_types: Sequence[EdgeType]) -> ViewStatus:
        return await self.update_params(edge_types=list(edge_types))

    async def set_layout(self, layout: LayoutType) -> ViewStatus:
        return await self.update_params(layout=layout)

    async def set_scope(self, field_name: Optional[str], entity_id: Optional[str]) -> ViewStatus:
        """Switch the scope entity; the previous graph is dropped."""
        self.params = self.params.with_scope(field_name, entity_id)
        self.graph = None
        self.nodes = []
        self.edges = []
        return await self.load()

    async def set_show_labels(self, show_labels: bool) -> ViewStatus:
        self.show_labels = show_labels
        return await self.load()

    async def set_show_images(self, show_images: bool) -> ViewStatus:
        """Toggle thumbnails; also asks the backend whether to include images."""
        self.show_images = show_images
        return await self.update_params(include_images=show_images)

    def click_node(self, node_id: str) -> Optional[str]:
        """Handle a node click.

        Returns:
            The detail route for the node, or None for unknown nodes or types.
        """
        node = self.graph.find_node(node_id) if self.graph else None
        if node is None:
            return None
        route = resolve_node_route(node)
        if self.on_node_click is not None:
            self.on_node_click(node)
        elif route is not None and self.navigate is not None:
            logger.debug("Navigating to %s", route)
            self.navigate(route)
        return route

    def click_edge(self, edge_id: str) -> Optional[GraphEdge]:
        edge = self.graph.find_edge(edge_id) if self.graph else None
        if edge is not None and self.on_edge_click is not None:
            self.on_edge_click(edge)
        return edge

    def edit_annotation(
        self, node_id: str, on_save: SaveCallback, on_delete: DeleteCallback
    ) -> AnnotationEditor:
        """Open an annotation editor for a node.

        The editor calls the supplied callbacks to persist changes and keeps
        this view's copy of the node in step.

        Raises:
            ValidationError: If the node is not in the current graph.
        """
        node = self.graph.find_node(node_id) if self.graph else None
        if node is None:
            raise ValidationError(f"Node not in current graph: {node_id}")

        def save(saved_id: str, text: str) -> None:
            on_save(saved_id, text)
            self._set_annotation(saved_id, text)

        def delete(deleted_id: str) -> None:
            on_delete(deleted_id)
            self._set_annotation(deleted_id, None)

        editor = AnnotationEditor(node, on_save=save, on_delete=delete)
        editor.open()
        return editor

    def _set_annotation(self, node_id: str, text: Optional[str]) -> None:
        if self.graph is None:
            return
        self.graph.nodes = [
            node.model_copy(update={"annotation": text}) if node.id == node_id else node
            for node in self.graph.nodes
        ]
        for flow_node in self.nodes:
            if flow_node.id == node_id:
                flow_node.data["annotation"] = text

    def snapshot(self) -> Dict[str, Any]:
        """Serializable state for the renderer."""
        return {
            "status": self.status.value,
            "error": self.error,
            "warnings": list(self.warnings),
            "params": self.params.to_query(),
            "showLabels": self.show_labels,
            "showImages": self.show_images,
            "nodes": [node.model_dump() for node in self.nodes],
            "edges": [edge.model_dump() for edge in self.edges],
        }


class HierarchyTreeView(GraphView):
    """Containment tree of a world or campaign, always laid out top-down."""

    @property
    def layout_type(self) -> LayoutType:
        return LayoutType.HIERARCHY

    async def _fetch(self, params: GraphQueryParams) -> GraphData:
        return await self.client.fetch_hierarchy(params)
