"""Graph view response models."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from archivist.models.flow import FlowEdge, FlowNode


class GraphViewResponse(BaseModel):
    """Assembled graph view ready for the renderer."""

    status: str
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    params: Dict[str, str] = Field(default_factory=dict)
    showLabels: bool = True
    showImages: bool = True
    nodes: List[FlowNode] = Field(default_factory=list)
    edges: List[FlowEdge] = Field(default_factory=list)


class NodeRouteResponse(BaseModel):
    """Detail page route for a clicked node."""

    type: str
    id: str
    route: str


class ShareLinkResponse(BaseModel):
    """Shareable mind map link plus ready-made social intents."""

    url: str
    include_filters: bool
    warnings: List[str] = Field(default_factory=list)
    social: Dict[str, str] = Field(default_factory=dict)


class StyleRow(BaseModel):
    type: str
    label: str
    color: str
    icon: str


class LegendResponse(BaseModel):
    """Node and edge style tables."""

    nodes: List[StyleRow]
    edges: List[StyleRow]
