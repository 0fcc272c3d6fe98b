"""Graph shaping, layout and interaction for the mind map views."""

from __future__ import annotations

from .adapter import adapt_edge, adapt_graph, adapt_node
from .annotations import AnnotationEditor
from .layout import (
    ForceLayout,
    GridLayout,
    HierarchyLayout,
    LayoutStrategy,
    RadialLayout,
    apply_layout,
    get_layout,
    grid_columns,
)
from .navigation import resolve_node_route, route_for
from .share import build_email_link, build_share_url, build_social_link, parse_share_query
from .styles import StyleEntry, edge_style, legend, node_style
from .view import GraphView, HierarchyTreeView, ViewStatus

__all__ = [
    "AnnotationEditor",
    "ForceLayout",
    "GraphView",
    "GridLayout",
    "HierarchyLayout",
    "HierarchyTreeView",
    "LayoutStrategy",
    "RadialLayout",
    "StyleEntry",
    "ViewStatus",
    "adapt_edge",
    "adapt_graph",
    "adapt_node",
    "apply_layout",
    "build_email_link",
    "build_share_url",
    "build_social_link",
    "edge_style",
    "get_layout",
    "grid_columns",
    "legend",
    "node_style",
    "parse_share_query",
    "resolve_node_route",
    "route_for",
]
