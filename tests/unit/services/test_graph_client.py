"""Tests for GraphApiClient using an in-memory HTTP transport."""

from typing import Any, Callable, Dict, List

import httpx
import pytest

from archivist.models.graph import SCOPE_FIELDS, EdgeType, GraphQueryParams, NodeType
from archivist.services.graph_client import GraphApiClient
from archivist.utils.exceptions import (
    AuthenticationError,
    GraphFetchError,
    GraphSchemaError,
)

BASE_URL = "http://backend.test/api"

SAMPLE_GRAPH: Dict[str, Any] = {
    "nodes": [
        {"id": "w1", "label": "Eldoria", "type": "world"},
        {"id": "c1", "label": "Shadows of the North", "type": "campaign"},
    ],
    "edges": [{"id": "e1", "source": "c1", "target": "w1", "type": "PART_OF"}],
}


def _ok(data: Dict[str, Any] = SAMPLE_GRAPH) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "data": data})


def _make_client(
    handler: Callable[[httpx.Request], httpx.Response],
    token: str = "t0k",
) -> GraphApiClient:
    transport = httpx.MockTransport(handler)
    return GraphApiClient(
        base_url=BASE_URL,
        token=token,
        client=httpx.AsyncClient(transport=transport),
    )


def _recording_handler(requests: List[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return _ok()

    return handler


@pytest.mark.asyncio
async def test_world_scope_dispatches_to_graph_endpoint() -> None:
    requests: List[httpx.Request] = []
    client = _make_client(_recording_handler(requests))

    try:
        graph = await client.fetch(GraphQueryParams(world_id="w1", depth=2))
    finally:
        await client.close()

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "GET"
    assert request.url.path == "/api/graph"
    assert request.url.params["worldId"] == "w1"
    assert request.url.params["depth"] == "2"
    for wire in SCOPE_FIELDS.values():
        if wire != "worldId":
            assert wire not in request.url.params
    assert [node.id for node in graph.nodes] == ["w1", "c1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("field_name,wire_name", list(SCOPE_FIELDS.items()))
async def test_each_scope_sends_only_its_own_id(field_name: str, wire_name: str) -> None:
    requests: List[httpx.Request] = []
    client = _make_client(_recording_handler(requests))

    try:
        await client.fetch(GraphQueryParams(**{field_name: "x1"}))
    finally:
        await client.close()

    params = requests[0].url.params
    assert requests[0].url.path == "/api/graph"
    assert params[wire_name] == "x1"
    assert [wire for wire in SCOPE_FIELDS.values() if wire in params] == [wire_name]


@pytest.mark.asyncio
async def test_no_scope_fetches_mind_map() -> None:
    requests: List[httpx.Request] = []
    client = _make_client(_recording_handler(requests))

    try:
        await client.fetch(GraphQueryParams())
    finally:
        await client.close()

    assert requests[0].url.path == "/api/graph/mind-map"
    assert not [wire for wire in SCOPE_FIELDS.values() if wire in requests[0].url.params]


@pytest.mark.asyncio
async def test_filters_are_comma_joined_strings() -> None:
    requests: List[httpx.Request] = []
    client = _make_client(_recording_handler(requests))
    params = GraphQueryParams(
        campaign_id="c1",
        node_types=[NodeType.CHARACTER, NodeType.LOCATION],
        edge_types=[EdgeType.LOCATED_AT, EdgeType.RELATED_TO],
        include_images=False,
    )

    try:
        await client.get_graph_data(params)
    finally:
        await client.close()

    sent = requests[0].url.params
    assert sent["nodeTypes"] == "character,location"
    assert sent["edgeTypes"] == "LOCATED_AT,RELATED_TO"
    assert sent["includeImages"] == "false"
    assert sent["layout"] == "force"


@pytest.mark.asyncio
async def test_bearer_token_is_sent() -> None:
    requests: List[httpx.Request] = []
    client = _make_client(_recording_handler(requests))

    try:
        await client.get_character_graph("c42")
    finally:
        await client.close()

    assert requests[0].headers["Authorization"] == "Bearer t0k"
    assert requests[0].url.params["characterId"] == "c42"


@pytest.mark.asyncio
async def test_no_token_sends_no_authorization_header() -> None:
    requests: List[httpx.Request] = []
    client = _make_client(_recording_handler(requests), token="")

    try:
        await client.get_world_graph("w1")
    finally:
        await client.close()

    assert "Authorization" not in requests[0].headers


@pytest.mark.asyncio
async def test_hierarchy_uses_hierarchy_endpoint() -> None:
    requests: List[httpx.Request] = []
    client = _make_client(_recording_handler(requests))

    try:
        await client.fetch_hierarchy(GraphQueryParams(campaign_id="c1"))
        await client.fetch_hierarchy(GraphQueryParams())
    finally:
        await client.close()

    assert requests[0].url.path == "/api/graph/hierarchy"
    assert requests[0].url.params["campaignId"] == "c1"
    assert requests[1].url.path == "/api/graph/hierarchy"
    assert "campaignId" not in requests[1].url.params


@pytest.mark.asyncio
async def test_unknown_types_are_tolerated() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _ok(
            {
                "nodes": [{"id": "n1", "label": "Mystery", "type": "unknowntype"}],
                "edges": [{"id": "e1", "source": "n1", "target": "n1", "type": "HAUNTS"}],
            }
        )

    client = _make_client(handler)
    try:
        graph = await client.get_graph_data(GraphQueryParams())
    finally:
        await client.close()

    assert graph.nodes[0].type == "unknowntype"
    assert graph.nodes[0].node_type is None
    assert graph.edges[0].edge_type is None


@pytest.mark.asyncio
async def test_server_error_raises_fetch_error() -> None:
    client = _make_client(lambda request: httpx.Response(500, json={"success": False}))

    try:
        with pytest.raises(GraphFetchError) as exc_info:
            await client.get_world_graph("w1")
    finally:
        await client.close()

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_unauthorized_raises_authentication_error() -> None:
    client = _make_client(lambda request: httpx.Response(401))

    try:
        with pytest.raises(AuthenticationError):
            await client.get_world_graph("w1")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_failure_envelope_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"success": False, "error": {"message": "World not found", "details": None}},
        )

    client = _make_client(handler)
    try:
        with pytest.raises(GraphFetchError, match="World not found"):
            await client.get_world_graph("missing")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_transport_error_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _make_client(handler)
    try:
        with pytest.raises(GraphFetchError):
            await client.get_mind_map_graph()
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_malformed_nodes_raise_schema_error() -> None:
    client = _make_client(lambda request: _ok({"nodes": [{"label": "no id"}], "edges": []}))

    try:
        with pytest.raises(GraphSchemaError):
            await client.get_graph_data(GraphQueryParams())
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_non_json_body_raises_schema_error() -> None:
    client = _make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    try:
        with pytest.raises(GraphSchemaError):
            await client.get_graph_data(GraphQueryParams())
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_context_manager_closes_client() -> None:
    requests: List[httpx.Request] = []
    async with _make_client(_recording_handler(requests)) as client:
        await client.get_item_graph("i1")

    assert client.client.is_closed


@pytest.mark.asyncio
async def test_duplicate_node_ids_raise_schema_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _ok(
            {
                "nodes": [
                    {"id": "n1", "label": "First", "type": "world"},
                    {"id": "n1", "label": "Second", "type": "world"},
                ],
                "edges": [],
            }
        )

    client = _make_client(handler)
    try:
        with pytest.raises(GraphSchemaError):
            await client.fetch_hierarchy(GraphQueryParams(world_id="w1"))
    finally:
        await client.close()
