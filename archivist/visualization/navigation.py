"""Mapping of graph nodes to entity detail routes."""

from __future__ import annotations

from typing import Any, Dict, Optional

from archivist.models.graph import GraphNode, NodeType, parse_node_type

NODE_ROUTES: Dict[NodeType, str] = {
    NodeType.WORLD: "/worlds/{id}",
    NodeType.CAMPAIGN: "/campaigns/{id}",
    NodeType.SESSION: "/sessions/{id}",
    NodeType.CHARACTER: "/characters/{id}",
    NodeType.LOCATION: "/locations/{id}",
    NodeType.ITEM: "/items/{id}",
    NodeType.EVENT: "/events/{id}",
    NodeType.POWER: "/powers/{id}",
}


def route_for(node_type: Any, entity_id: str) -> Optional[str]:
    """Detail route for an entity, or None when the type has no page."""
    parsed = parse_node_type(node_type)
    if parsed is None or not entity_id:
        return None
    return NODE_ROUTES[parsed].format(id=entity_id)


def resolve_node_route(node: GraphNode) -> Optional[str]:
    return route_for(node.type, node.id)
