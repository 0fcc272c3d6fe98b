"""Relationship graph models returned by the campaign backend."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from archivist.api.config import config


class NodeType(str, Enum):
    """Entity kinds that can appear as graph nodes."""

    WORLD = "world"
    CAMPAIGN = "campaign"
    SESSION = "session"
    CHARACTER = "character"
    LOCATION = "location"
    ITEM = "item"
    EVENT = "event"
    POWER = "power"


class EdgeType(str, Enum):
    """Relationship kinds that can appear as graph edges."""

    PART_OF = "PART_OF"
    CONTAINS = "CONTAINS"
    LOCATED_AT = "LOCATED_AT"
    PARTICIPATED_IN = "PARTICIPATED_IN"
    RELATED_TO = "RELATED_TO"
    PARENT_OF = "PARENT_OF"
    CHILD_OF = "CHILD_OF"
    OWNS = "OWNS"
    CREATED = "CREATED"
    HAS_POWER = "HAS_POWER"
    OCCURRED_AT = "OCCURRED_AT"


class LayoutType(str, Enum):
    """Layout algorithms selectable from the filter panel."""

    FORCE = "force"
    HIERARCHY = "hierarchy"
    RADIAL = "radial"
    GRID = "grid"


# Scope fields in dispatch order, mapped to their wire names
SCOPE_FIELDS: Dict[str, str] = {
    "world_id": "worldId",
    "campaign_id": "campaignId",
    "session_id": "sessionId",
    "character_id": "characterId",
    "location_id": "locationId",
    "item_id": "itemId",
    "event_id": "eventId",
    "power_id": "powerId",
}

SCOPE_NODE_TYPES: Dict[str, NodeType] = {
    "world_id": NodeType.WORLD,
    "campaign_id": NodeType.CAMPAIGN,
    "session_id": NodeType.SESSION,
    "character_id": NodeType.CHARACTER,
    "location_id": NodeType.LOCATION,
    "item_id": NodeType.ITEM,
    "event_id": NodeType.EVENT,
    "power_id": NodeType.POWER,
}


def parse_node_type(value: Any) -> Optional[NodeType]:
    """Return the matching NodeType, or None for unknown values."""
    try:
        return NodeType(value)
    except ValueError:
        return None


def parse_edge_type(value: Any) -> Optional[EdgeType]:
    """Return the matching EdgeType, or None for unknown values."""
    try:
        return EdgeType(value)
    except ValueError:
        return None


class GraphNode(BaseModel):
    """Entity node as delivered by the backend.

    ``type`` keeps the raw string so that nodes of unknown kinds still render
    with the default style instead of failing validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str = ""
    type: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    properties: Dict[str, Any] = Field(default_factory=dict)
    annotation: Optional[str] = None

    @field_validator("properties", mode="before")
    @classmethod
    def _none_properties(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def node_type(self) -> Optional[NodeType]:
        return parse_node_type(self.type)


class GraphEdge(BaseModel):
    """Relationship edge as delivered by the backend."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    source: str
    target: str
    type: str
    label: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("properties", mode="before")
    @classmethod
    def _none_properties(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def edge_type(self) -> Optional[EdgeType]:
        return parse_edge_type(self.type)

    @property
    def display_label(self) -> str:
        """Override label, falling back to the relationship type."""
        return self.label or self.type


class GraphData(BaseModel):
    """Flat node/edge list for one graph response."""

    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)

    @field_validator("nodes", "edges", mode="before")
    @classmethod
    def _none_lists(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _unique_node_ids(self) -> "GraphData":
        """Node ids are unique within one response."""
        seen: set = set()
        duplicates: List[str] = []
        for node in self.nodes:
            if node.id in seen and node.id not in duplicates:
                duplicates.append(node.id)
            seen.add(node.id)
        if duplicates:
            raise ValueError(f"Duplicate node ids: {', '.join(duplicates)}")
        return self

    def find_node(self, node_id: str) -> Optional[GraphNode]:
        return next((node for node in self.nodes if node.id == node_id), None)

    def find_edge(self, edge_id: str) -> Optional[GraphEdge]:
        return next((edge for edge in self.edges if edge.id == edge_id), None)


class GraphEnvelope(BaseModel):
    """Standard ``{success, data}`` envelope used by every backend endpoint."""

    success: bool
    data: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None


class GraphQueryParams(BaseModel):
    """Request-shaping parameters for a graph fetch.

    At most one scope id may be set. With none set the unscoped mind map is
    requested.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    world_id: Optional[str] = Field(None, alias="worldId")
    campaign_id: Optional[str] = Field(None, alias="campaignId")
    session_id: Optional[str] = Field(None, alias="sessionId")
    character_id: Optional[str] = Field(None, alias="characterId")
    location_id: Optional[str] = Field(None, alias="locationId")
    item_id: Optional[str] = Field(None, alias="itemId")
    event_id: Optional[str] = Field(None, alias="eventId")
    power_id: Optional[str] = Field(None, alias="powerId")
    depth: int = Field(default_factory=lambda: config.GRAPH_DEFAULT_DEPTH, ge=1)
    node_types: List[NodeType] = Field(
        default_factory=lambda: list(NodeType), alias="nodeTypes"
    )
    edge_types: List[EdgeType] = Field(
        default_factory=lambda: list(EdgeType), alias="edgeTypes"
    )
    include_images: bool = Field(True, alias="includeImages")
    layout: LayoutType = LayoutType.FORCE

    @model_validator(mode="after")
    def _single_scope(self) -> "GraphQueryParams":
        scopes = [name for name in SCOPE_FIELDS if getattr(self, name)]
        if len(scopes) > 1:
            raise ValueError(
                f"Only one scope id may be set, got: {', '.join(scopes)}"
            )
        return self

    @property
    def scope(self) -> Optional[Tuple[str, str]]:
        """Return ``(field_name, entity_id)`` for the active scope, if any."""
        for name in SCOPE_FIELDS:
            value = getattr(self, name)
            if value:
                return name, value
        return None

    def with_scope(self, field_name: Optional[str], entity_id: Optional[str]) -> "GraphQueryParams":
        """Copy with exactly the given scope set and every other scope cleared."""
        if field_name is not None and field_name not in SCOPE_FIELDS:
            raise ValueError(f"Unknown scope field: {field_name}")
        update: Dict[str, Any] = {name: None for name in SCOPE_FIELDS}
        if field_name is not None:
            update[field_name] = entity_id or None
        return self.model_copy(update=update)

    def filters(self) -> Dict[str, Any]:
        """Wire form of the non-scope parameters."""
        return {
            "depth": str(self.depth),
            "nodeTypes": ",".join(t.value for t in self.node_types),
            "edgeTypes": ",".join(t.value for t in self.edge_types),
            "includeImages": "true" if self.include_images else "false",
            "layout": self.layout.value,
        }

    def to_query(self) -> Dict[str, str]:
        """Serialize to backend query parameters.

        Lists are comma-joined and booleans spelled ``true``/``false``, which is
        how the graph controller parses them. Unset scope ids are omitted.
        """
        query: Dict[str, str] = {}
        scope = self.scope
        if scope is not None:
            query[SCOPE_FIELDS[scope[0]]] = scope[1]
        query.update(self.filters())
        return query
