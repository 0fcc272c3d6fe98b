"""Conversion of backend graph records into flow renderer records."""

from __future__ import annotations

from typing import Iterable, List

from archivist.models.flow import FlowEdge, FlowGraph, FlowNode
from archivist.models.graph import EdgeType, GraphData, GraphEdge, GraphNode
from archivist.utils.constants import FLOW_EDGE_TYPE, FLOW_FALLBACK_NODE_TYPE

from .styles import edge_style, node_style


def adapt_node(node: GraphNode, show_labels: bool, show_images: bool) -> FlowNode:
    """Convert one backend node.

    The node payload keeps every backend field so click handlers can hand the
    original record back to callers.
    """
    style = node_style(node.type)
    data = node.model_dump(by_alias=True)
    data.update(
        {
            "label": node.label,
            "showLabel": show_labels,
            "showImage": show_images,
            "icon": style.icon,
        }
    )
    return FlowNode(
        id=node.id,
        type=node.type if node.node_type is not None else FLOW_FALLBACK_NODE_TYPE,
        data=data,
        style={"background": style.color},
    )


def adapt_edge(edge: GraphEdge, show_labels: bool) -> FlowEdge:
    """Convert one backend edge. Only RELATED_TO edges are animated."""
    return FlowEdge(
        id=edge.id,
        source=edge.source,
        target=edge.target,
        type=FLOW_EDGE_TYPE,
        label=edge.display_label if show_labels else None,
        data=edge.model_dump(by_alias=True),
        style={"stroke": edge_style(edge.type).color},
        animated=edge.type == EdgeType.RELATED_TO.value,
    )


def adapt_nodes(nodes: Iterable[GraphNode], show_labels: bool, show_images: bool) -> List[FlowNode]:
    return [adapt_node(node, show_labels, show_images) for node in nodes]


def adapt_edges(edges: Iterable[GraphEdge], show_labels: bool) -> List[FlowEdge]:
    return [adapt_edge(edge, show_labels) for edge in edges]


def adapt_graph(graph: GraphData, show_labels: bool = True, show_images: bool = True) -> FlowGraph:
    """Convert a whole graph one-to-one, preserving order.

    Args:
        graph: Backend graph response.
        show_labels: Whether node and edge labels are displayed.
        show_images: Whether node thumbnails are displayed.

    Returns:
        FlowGraph with every node at the origin; positions are assigned by
        the layout step.
    """
    return FlowGraph(
        nodes=adapt_nodes(graph.nodes, show_labels, show_images),
        edges=adapt_edges(graph.edges, show_labels),
    )
