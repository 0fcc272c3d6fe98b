from urllib.parse import unquote

import httpx
import pytest

from archivist.api.config import config
from archivist.models.graph import EdgeType, GraphQueryParams, LayoutType, NodeType
from archivist.utils.exceptions import ValidationError
from archivist.visualization.share import (
    build_email_link,
    build_share_url,
    build_social_link,
    parse_share_query,
)

BASE_URL = "https://archivist.example.com/mind-map"


def test_share_url_round_trip() -> None:
    params = GraphQueryParams(
        world_id="w1",
        depth=3,
        node_types=[NodeType.CHARACTER, NodeType.LOCATION],
        edge_types=[EdgeType.LOCATED_AT],
        include_images=False,
        layout=LayoutType.RADIAL,
    )
    url = build_share_url(BASE_URL, params)

    assert url.startswith(BASE_URL + "?")
    parsed, warnings = parse_share_query(httpx.URL(url).query.decode())
    assert warnings == []
    assert parsed == params


def test_share_url_without_filters_has_only_scope() -> None:
    params = GraphQueryParams(campaign_id="c1", depth=4, layout=LayoutType.GRID)
    url = httpx.URL(build_share_url(BASE_URL, params, include_filters=False))

    assert dict(url.params) == {"campaignId": "c1"}


def test_share_url_replaces_existing_query() -> None:
    url = httpx.URL(build_share_url(BASE_URL + "?stale=1", GraphQueryParams(item_id="i1")))
    assert "stale" not in url.params
    assert url.params["itemId"] == "i1"


def test_empty_query_gives_defaults() -> None:
    params, warnings = parse_share_query("")
    assert params == GraphQueryParams()
    assert warnings == []


def test_leading_question_mark_is_accepted() -> None:
    params, _ = parse_share_query("?characterId=c42")
    assert params.scope == ("character_id", "c42")


@pytest.mark.parametrize("raw,expected", [("abc", 1), ("0", 1), ("9", 5), ("-2", 1)])
def test_bad_depth_is_defaulted_with_warning(raw: str, expected: int) -> None:
    params, warnings = parse_share_query({"depth": raw})
    assert params.depth == expected
    assert len(warnings) == 1


def test_unknown_type_names_are_dropped() -> None:
    params, warnings = parse_share_query("nodeTypes=character,dragon&edgeTypes=OWNS")
    assert params.node_types == [NodeType.CHARACTER]
    assert params.edge_types == [EdgeType.OWNS]
    assert any("dragon" in warning for warning in warnings)


def test_all_unknown_types_fall_back_to_all() -> None:
    params, warnings = parse_share_query("edgeTypes=HAUNTS")
    assert params.edge_types == list(EdgeType)
    assert len(warnings) == 2


def test_unknown_layout_and_flag_are_defaulted() -> None:
    params, warnings = parse_share_query("layout=spiral&includeImages=maybe")
    assert params.layout == LayoutType.FORCE
    assert params.include_images is True
    assert len(warnings) == 2


def test_multiple_scopes_keep_the_first() -> None:
    params, warnings = parse_share_query("campaignId=c1&worldId=w1")
    assert params.scope == ("world_id", "w1")
    assert params.campaign_id is None
    assert len(warnings) == 1
    assert "campaignId" in warnings[0]


def test_email_link() -> None:
    link = build_email_link(
        "gm@example.com",
        "Mind Map",
        "Check out this Mind Map",
        "https://archivist.example.com/mind-map?worldId=w1",
    )

    assert link.startswith("mailto:gm%40example.com?subject=Mind%20Map&body=")
    body = unquote(link.split("&body=", 1)[1])
    assert body == "Check out this Mind Map\n\nhttps://archivist.example.com/mind-map?worldId=w1"


@pytest.mark.parametrize(
    "platform,prefix",
    [
        ("facebook", "https://www.facebook.com/sharer/sharer.php?u="),
        ("twitter", "https://twitter.com/intent/tweet?url="),
        ("LinkedIn", "https://www.linkedin.com/sharing/share-offsite/?url="),
    ],
)
def test_social_links(platform: str, prefix: str) -> None:
    share_url = "https://archivist.example.com/mind-map?worldId=w1"
    link = build_social_link(platform, share_url)

    assert link.startswith(prefix)
    assert "worldId%3Dw1" in link


def test_unsupported_platform() -> None:
    with pytest.raises(ValidationError):
        build_social_link("myspace", "https://archivist.example.com")


def test_depth_defaults_and_cap_follow_config(monkeypatch) -> None:
    monkeypatch.setattr(config, "GRAPH_DEFAULT_DEPTH", 2)
    monkeypatch.setattr(config, "GRAPH_MAX_DEPTH", 3)

    params, warnings = parse_share_query("")
    assert params.depth == 2
    assert warnings == []

    params, warnings = parse_share_query({"depth": "9"})
    assert params.depth == 3
    assert warnings == ["Depth 9 exceeds 3; using 3"]
