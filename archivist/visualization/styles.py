"""Static color and icon tables for node and edge types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from archivist.utils.constants import (
    DEFAULT_EDGE_COLOR,
    DEFAULT_EDGE_ICON,
    DEFAULT_NODE_COLOR,
    DEFAULT_NODE_ICON,
)

DEFAULT_KEY = "default"


@dataclass(frozen=True)
class StyleEntry:
    """Color and Material icon name for one type."""

    color: str
    icon: str


NODE_STYLES: Dict[str, StyleEntry] = {
    "world": StyleEntry("#3f51b5", "public"),  # Indigo
    "campaign": StyleEntry("#2196f3", "campaign"),  # Blue
    "session": StyleEntry("#00bcd4", "event"),  # Cyan
    "character": StyleEntry("#4caf50", "person"),  # Green
    "location": StyleEntry("#ff9800", "location_on"),  # Orange
    "item": StyleEntry("#f44336", "inventory"),  # Red
    "event": StyleEntry("#9c27b0", "event_note"),  # Purple
    "power": StyleEntry("#ffc107", "auto_fix_high"),  # Amber
    DEFAULT_KEY: StyleEntry(DEFAULT_NODE_COLOR, DEFAULT_NODE_ICON),
}

EDGE_STYLES: Dict[str, StyleEntry] = {
    "PART_OF": StyleEntry("#9e9e9e", "call_split"),  # Gray
    "CONTAINS": StyleEntry("#607d8b", "account_tree"),  # Blue Gray
    "LOCATED_AT": StyleEntry("#ff9800", "place"),  # Orange
    "PARTICIPATED_IN": StyleEntry("#4caf50", "groups"),  # Green
    "RELATED_TO": StyleEntry("#9c27b0", "sync_alt"),  # Purple
    "PARENT_OF": StyleEntry("#795548", "arrow_downward"),  # Brown
    "CHILD_OF": StyleEntry("#8d6e63", "arrow_upward"),  # Light Brown
    "OWNS": StyleEntry("#f44336", "key"),  # Red
    "CREATED": StyleEntry("#2196f3", "build"),  # Blue
    "HAS_POWER": StyleEntry("#ffc107", "bolt"),  # Amber
    "OCCURRED_AT": StyleEntry("#00bcd4", "schedule"),  # Cyan
    DEFAULT_KEY: StyleEntry(DEFAULT_EDGE_COLOR, DEFAULT_EDGE_ICON),
}


def _lookup(table: Dict[str, StyleEntry], type_value: Any) -> StyleEntry:
    key = getattr(type_value, "value", type_value)
    if not isinstance(key, str) or key == DEFAULT_KEY:
        return table[DEFAULT_KEY]
    return table.get(key, table[DEFAULT_KEY])


def node_style(node_type: Any) -> StyleEntry:
    """Style for a node type; unknown or missing types get the default entry."""
    return _lookup(NODE_STYLES, node_type)


def edge_style(edge_type: Any) -> StyleEntry:
    """Style for an edge type; unknown or missing types get the default entry."""
    return _lookup(EDGE_STYLES, edge_type)


def legend() -> Dict[str, List[Dict[str, str]]]:
    """Legend rows for the mind map page, one per known node and edge type."""
    return {
        "nodes": [
            {"type": key, "label": key.capitalize(), "color": entry.color, "icon": entry.icon}
            for key, entry in NODE_STYLES.items()
            if key != DEFAULT_KEY
        ],
        "edges": [
            {"type": key, "label": key.replace("_", " "), "color": entry.color, "icon": entry.icon}
            for key, entry in EDGE_STYLES.items()
            if key != DEFAULT_KEY
        ],
    }
