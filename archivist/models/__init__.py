"""Domain models for relationship graphs."""

from __future__ import annotations

from .flow import FlowEdge, FlowGraph, FlowNode, Position
from .graph import (
    SCOPE_FIELDS,
    SCOPE_NODE_TYPES,
    EdgeType,
    GraphData,
    GraphEdge,
    GraphEnvelope,
    GraphNode,
    GraphQueryParams,
    LayoutType,
    NodeType,
    parse_edge_type,
    parse_node_type,
)

__all__ = [
    "SCOPE_FIELDS",
    "SCOPE_NODE_TYPES",
    "EdgeType",
    "FlowEdge",
    "FlowGraph",
    "FlowNode",
    "GraphData",
    "GraphEdge",
    "GraphEnvelope",
    "GraphNode",
    "GraphQueryParams",
    "LayoutType",
    "NodeType",
    "Position",
    "parse_edge_type",
    "parse_node_type",
]
