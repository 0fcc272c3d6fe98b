import math

import pytest

from archivist.models.flow import FlowEdge, FlowNode
from archivist.models.graph import GraphData, GraphEdge, GraphNode, LayoutType
from archivist.utils.exceptions import LayoutError
from archivist.visualization.adapter import adapt_graph
from archivist.visualization.layout import (
    ForceLayout,
    GridLayout,
    HierarchyLayout,
    RadialLayout,
    apply_layout,
    get_layout,
    grid_columns,
    resolve_layout_type,
)


def _flow(nodes, edges=()):
    graph = GraphData(
        nodes=[GraphNode(id=node_id, label=node_id, type=node_type) for node_id, node_type in nodes],
        edges=[
            GraphEdge(id=f"{source}-{target}", source=source, target=target, type=edge_type)
            for source, target, edge_type in edges
        ],
    )
    flow = adapt_graph(graph)
    return flow.nodes, flow.edges


def _coords(nodes):
    return {node.id: (node.position.x, node.position.y) for node in nodes}


@pytest.mark.parametrize("count,columns", [(0, 0), (1, 1), (2, 2), (4, 2), (5, 3), (9, 3), (10, 4)])
def test_grid_columns(count: int, columns: int) -> None:
    assert grid_columns(count) == columns


def test_grid_places_nodes_row_by_row() -> None:
    nodes, edges = _flow([(f"n{i}", "character") for i in range(10)])
    placed = GridLayout(spacing=200).apply(nodes, edges)

    coords = _coords(placed)
    assert coords["n0"] == (0, 0)
    assert coords["n3"] == (600, 0)
    assert coords["n4"] == (0, 200)
    assert coords["n9"] == (200, 400)


@pytest.mark.parametrize("count", [1, 2, 3, 7, 16, 17, 40])
def test_grid_positions_are_unique(count: int) -> None:
    nodes, edges = _flow([(f"n{i}", "item") for i in range(count)])
    placed = GridLayout(spacing=200).apply(nodes, edges)

    positions = [(node.position.x, node.position.y) for node in placed]
    assert len(set(positions)) == count
    assert len({x for x, _ in positions}) == grid_columns(count)


@pytest.mark.parametrize("layout", list(LayoutType))
def test_empty_input_gives_empty_output(layout: LayoutType) -> None:
    assert apply_layout([], [], layout) == []


def test_layout_does_not_mutate_input() -> None:
    nodes, edges = _flow([("a", "world"), ("b", "campaign")], [("b", "a", "PART_OF")])
    GridLayout(spacing=100).apply(nodes, edges)
    assert all(node.position.x == 0 and node.position.y == 0 for node in nodes)


def test_force_layout_is_deterministic() -> None:
    nodes, edges = _flow(
        [("w1", "world"), ("c1", "campaign"), ("s1", "session"), ("p1", "character")],
        [("c1", "w1", "PART_OF"), ("s1", "c1", "PART_OF"), ("p1", "s1", "PARTICIPATED_IN")],
    )
    first = _coords(ForceLayout(seed=7).apply(nodes, edges))
    second = _coords(ForceLayout(seed=7).apply(nodes, edges))

    assert first == second
    assert len(set(first.values())) == len(nodes)


def test_force_layout_single_node_at_origin() -> None:
    nodes, edges = _flow([("w1", "world")])
    assert _coords(ForceLayout().apply(nodes, edges)) == {"w1": (0.0, 0.0)}


def test_hierarchy_layers_follow_containment() -> None:
    nodes, edges = _flow(
        [("s1", "session"), ("c1", "campaign"), ("w1", "world"), ("c2", "campaign")],
        [("c1", "w1", "PART_OF"), ("s1", "c1", "PART_OF"), ("w1", "c2", "CONTAINS")],
    )
    coords = _coords(HierarchyLayout(node_spacing=200, layer_spacing=180).apply(nodes, edges))

    assert coords["w1"] == (0, 0)
    assert coords["c1"][1] == 180
    assert coords["c2"][1] == 180
    assert coords["c1"][0] != coords["c2"][0]
    assert coords["s1"][1] == 360


def test_hierarchy_handles_cycles_and_isolated_nodes() -> None:
    nodes, edges = _flow(
        [("a", "character"), ("b", "character"), ("lonely", "item")],
        [("a", "b", "RELATED_TO"), ("b", "a", "RELATED_TO")],
    )
    placed = HierarchyLayout(node_spacing=100).apply(nodes, edges)

    positions = [(node.position.x, node.position.y) for node in placed]
    assert len(placed) == 3
    assert len(set(positions)) == 3


def test_radial_centers_most_connected_node() -> None:
    nodes, edges = _flow(
        [("a", "character"), ("hub", "location"), ("b", "character"), ("c", "item"), ("far", "event")],
        [("a", "hub", "LOCATED_AT"), ("b", "hub", "LOCATED_AT"), ("c", "hub", "LOCATED_AT")],
    )
    coords = _coords(RadialLayout(ring_spacing=220).apply(nodes, edges))

    assert coords["hub"] == (0.0, 0.0)
    for node_id in ("a", "b", "c"):
        assert math.hypot(*coords[node_id]) == pytest.approx(220, abs=0.05)
    assert math.hypot(*coords["far"]) == pytest.approx(440, abs=0.05)
    assert len(set(coords.values())) == 5


def test_get_layout_resolves_strategies() -> None:
    assert isinstance(get_layout("radial"), RadialLayout)
    assert isinstance(get_layout(LayoutType.HIERARCHY), HierarchyLayout)
    assert isinstance(get_layout("force"), ForceLayout)


def test_unknown_layout_falls_back_to_grid() -> None:
    assert isinstance(get_layout("spiral"), GridLayout)
    assert isinstance(get_layout(None), GridLayout)


def test_resolve_layout_type_rejects_unknown() -> None:
    with pytest.raises(LayoutError):
        resolve_layout_type("spiral")


def test_hierarchy_tolerates_repeated_node_ids() -> None:
    nodes = [
        FlowNode(id="n1", type="world"),
        FlowNode(id="n1", type="world"),
        FlowNode(id="n2", type="campaign"),
    ]
    edges = [FlowEdge(id="e1", source="n1", target="n2", data={"type": "CONTAINS"})]

    layout = HierarchyLayout(node_spacing=100, layer_spacing=180)
    assert layout.layers(nodes, edges) == [["n1"], ["n2"]]

    placed = layout.apply(nodes, edges)
    assert [node.id for node in placed] == ["n1", "n1", "n2"]
    assert placed[2].position.y == 180
