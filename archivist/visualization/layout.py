"""Node placement strategies keyed by the ``layout`` filter.

Every strategy takes the adapted node and edge lists and returns new nodes
with positions assigned; inputs are never mutated and the same input always
yields the same positions.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type, Union

import networkx as nx

from archivist.api.config import config
from archivist.models.flow import FlowEdge, FlowNode, Position
from archivist.models.graph import EdgeType, LayoutType, NodeType
from archivist.utils.constants import (
    DEFAULT_CANVAS_SCALE,
    DEFAULT_LAYER_SPACING,
    DEFAULT_RING_SPACING,
)
from archivist.utils.exceptions import LayoutError

logger = logging.getLogger(__name__)

Coordinates = Tuple[float, float]

# Edges that point from child to parent; reversed when building the tree
_UPWARD_EDGES = {EdgeType.PART_OF.value, EdgeType.CHILD_OF.value}

# Preferred root order for hierarchy and radial layouts
_TYPE_RANK = {node_type.value: rank for rank, node_type in enumerate(NodeType)}


def grid_columns(node_count: int) -> int:
    """Number of grid columns for ``node_count`` nodes (square-ish grid)."""
    if node_count <= 0:
        return 0
    return math.ceil(math.sqrt(node_count))


def _rank(node: FlowNode) -> int:
    return _TYPE_RANK.get(node.type, len(_TYPE_RANK))


def _build_digraph(nodes: Sequence[FlowNode], edges: Iterable[FlowEdge]) -> nx.DiGraph:
    """Directed graph over the node ids; dangling edges are skipped."""
    graph = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)
    for edge in edges:
        if edge.source in graph and edge.target in graph and edge.source != edge.target:
            graph.add_edge(edge.source, edge.target)
    return graph


class LayoutStrategy(ABC):
    """Base class for layout algorithms."""

    layout_type: LayoutType

    @abstractmethod
    def positions(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[Coordinates]:
        """Return one ``(x, y)`` pair per node, in node order."""

    def apply(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[FlowNode]:
        if not nodes:
            return []
        coords = self.positions(nodes, edges)
        return [
            node.model_copy(update={"position": Position(x=x, y=y)})
            for node, (x, y) in zip(nodes, coords)
        ]


class GridLayout(LayoutStrategy):
    """Square grid ignoring edge structure.

    ``columns = ceil(sqrt(n))``; node ``i`` sits at
    ``(i % columns * spacing, i // columns * spacing)``.
    """

    layout_type = LayoutType.GRID

    def __init__(self, spacing: Optional[float] = None):
        self.spacing = spacing if spacing is not None else config.GRAPH_GRID_SPACING

    def positions(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[Coordinates]:
        columns = grid_columns(len(nodes))
        return [
            ((index % columns) * self.spacing, (index // columns) * self.spacing)
            for index in range(len(nodes))
        ]


class ForceLayout(LayoutStrategy):
    """Force-directed placement (Fruchterman-Reingold via networkx).

    A fixed seed keeps repeated renders of the same graph identical.
    """

    layout_type = LayoutType.FORCE

    def __init__(
        self,
        seed: Optional[int] = None,
        scale: float = DEFAULT_CANVAS_SCALE,
        iterations: int = 50,
    ):
        self.seed = seed if seed is not None else config.GRAPH_LAYOUT_SEED
        self.scale = scale
        self.iterations = iterations

    def positions(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[Coordinates]:
        if len(nodes) == 1:
            return [(0.0, 0.0)]
        graph = _build_digraph(nodes, edges).to_undirected()
        layout = nx.spring_layout(
            graph,
            seed=self.seed,
            scale=self.scale,
            iterations=self.iterations,
        )
        return [
            (round(float(layout[node.id][0]), 2), round(float(layout[node.id][1]), 2))
            for node in nodes
        ]


class HierarchyLayout(LayoutStrategy):
    """Layered top-down tree.

    Containment edges are oriented parent to child (PART_OF and CHILD_OF are
    reversed). Roots are nodes without a parent, worlds first; nodes in
    cycles that no root reaches start their own subtree.
    """

    layout_type = LayoutType.HIERARCHY

    def __init__(
        self,
        node_spacing: Optional[float] = None,
        layer_spacing: float = DEFAULT_LAYER_SPACING,
    ):
        self.node_spacing = node_spacing if node_spacing is not None else config.GRAPH_GRID_SPACING
        self.layer_spacing = layer_spacing

    def _tree(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> nx.DiGraph:
        tree = nx.DiGraph()
        tree.add_nodes_from(node.id for node in nodes)
        for edge in edges:
            if edge.source not in tree or edge.target not in tree or edge.source == edge.target:
                continue
            edge_type = edge.data.get("type")
            if edge_type in _UPWARD_EDGES:
                tree.add_edge(edge.target, edge.source)
            else:
                tree.add_edge(edge.source, edge.target)
        return tree

    def layers(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[List[str]]:
        """Node ids grouped by depth from the roots."""
        tree = self._tree(nodes, edges)
        ordered = sorted(nodes, key=_rank)
        roots = list(dict.fromkeys(node.id for node in ordered if tree.in_degree(node.id) == 0))

        layers: List[List[str]] = []
        placed: set = set()
        total = len({node.id for node in nodes})
        while len(placed) < total:
            sources = [node_id for node_id in roots if node_id not in placed]
            if not sources:
                remaining = next((node.id for node in ordered if node.id not in placed), None)
                if remaining is None:
                    break
                sources = [remaining]
            for depth, layer in enumerate(nx.bfs_layers(tree, sources)):
                fresh = [node_id for node_id in layer if node_id not in placed]
                if not fresh:
                    continue
                while len(layers) <= depth:
                    layers.append([])
                layers[depth].extend(fresh)
                placed.update(fresh)
        return layers

    def positions(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[Coordinates]:
        coords: Dict[str, Coordinates] = {}
        for depth, layer in enumerate(self.layers(nodes, edges)):
            offset = (len(layer) - 1) / 2
            for index, node_id in enumerate(layer):
                coords[node_id] = ((index - offset) * self.node_spacing, depth * self.layer_spacing)
        return [coords[node.id] for node in nodes]


class RadialLayout(LayoutStrategy):
    """Concentric rings around the most connected node.

    Ring ``r`` holds nodes ``r`` hops from the center; disconnected
    components continue on the next free rings.
    """

    layout_type = LayoutType.RADIAL

    def __init__(self, ring_spacing: float = DEFAULT_RING_SPACING):
        self.ring_spacing = ring_spacing

    def rings(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[List[str]]:
        graph = _build_digraph(nodes, edges).to_undirected()
        # Stable sort keeps input order among equally connected nodes
        by_degree = sorted(nodes, key=lambda node: (-graph.degree(node.id), _rank(node)))

        rings: List[List[str]] = []
        placed: set = set()
        for candidate in by_degree:
            if candidate.id in placed:
                continue
            offset = len(rings)
            for depth, layer in enumerate(nx.bfs_layers(graph, [candidate.id])):
                fresh = [node_id for node_id in layer if node_id not in placed]
                while len(rings) <= offset + depth:
                    rings.append([])
                rings[offset + depth].extend(fresh)
                placed.update(fresh)
        return rings

    def positions(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> List[Coordinates]:
        coords: Dict[str, Coordinates] = {}
        for ring_index, ring in enumerate(self.rings(nodes, edges)):
            if ring_index == 0:
                coords[ring[0]] = (0.0, 0.0)
                continue
            radius = ring_index * self.ring_spacing
            for index, node_id in enumerate(ring):
                angle = 2 * math.pi * index / len(ring)
                coords[node_id] = (
                    round(radius * math.cos(angle), 2),
                    round(radius * math.sin(angle), 2),
                )
        return [coords[node.id] for node in nodes]


LAYOUT_STRATEGIES: Dict[LayoutType, Type[LayoutStrategy]] = {
    LayoutType.FORCE: ForceLayout,
    LayoutType.HIERARCHY: HierarchyLayout,
    LayoutType.RADIAL: RadialLayout,
    LayoutType.GRID: GridLayout,
}


def resolve_layout_type(layout: Union[LayoutType, str]) -> LayoutType:
    """Parse a layout name.

    Raises:
        LayoutError: If the name is not a known layout.
    """
    try:
        return LayoutType(layout)
    except ValueError as e:
        raise LayoutError(f"Unknown layout: {layout}") from e


def get_layout(layout: Union[LayoutType, str, None]) -> LayoutStrategy:
    """Strategy instance for a layout name; unknown names fall back to the grid."""
    if layout is None:
        return GridLayout()
    try:
        layout_type = resolve_layout_type(layout)
    except LayoutError:
        logger.warning("Unknown layout %r, falling back to grid", layout)
        return GridLayout()
    return LAYOUT_STRATEGIES[layout_type]()


def apply_layout(
    nodes: Sequence[FlowNode],
    edges: Sequence[FlowEdge],
    layout: Union[LayoutType, str, None] = LayoutType.FORCE,
) -> List[FlowNode]:
    """Position ``nodes`` with the strategy selected by ``layout``."""
    return get_layout(layout).apply(nodes, edges)
