"""Node and edge records in the shape the flow renderer consumes."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from archivist.utils.constants import FLOW_EDGE_TYPE


class Position(BaseModel):
    """Canvas coordinates of a node."""

    x: float = 0.0
    y: float = 0.0


class FlowNode(BaseModel):
    """Renderer node: identity, renderer type, payload, placement and style."""

    id: str
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)
    position: Position = Field(default_factory=Position)
    style: Dict[str, str] = Field(default_factory=dict)


class FlowEdge(BaseModel):
    """Renderer edge between two flow nodes."""

    id: str
    source: str
    target: str
    type: str = FLOW_EDGE_TYPE
    label: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    style: Dict[str, str] = Field(default_factory=dict)
    animated: bool = False


class FlowGraph(BaseModel):
    """Adapted graph ready for layout and rendering."""

    nodes: List[FlowNode] = Field(default_factory=list)
    edges: List[FlowEdge] = Field(default_factory=list)
