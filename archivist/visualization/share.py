"""Shareable mind map links.

A share link is the mind map page URL with the scope id and, optionally, the
filter settings encoded in its query string. Parsing a link never fails:
values that cannot be understood are dropped or defaulted and reported as
warnings so the page can still render what did parse.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

import httpx

from archivist.api.config import config
from archivist.models.graph import (
    SCOPE_FIELDS,
    GraphQueryParams,
    LayoutType,
    parse_edge_type,
    parse_node_type,
)
from archivist.utils.constants import MIN_GRAPH_DEPTH
from archivist.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

SHARE_TEXT = "Check out this Mind Map from RPG Archivist"

SOCIAL_SHARE_URLS = {
    "facebook": "https://www.facebook.com/sharer/sharer.php?u={url}",
    "twitter": "https://twitter.com/intent/tweet?url={url}&text={text}",
    "linkedin": "https://www.linkedin.com/sharing/share-offsite/?url={url}",
}

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}

QueryInput = Union[str, Mapping[str, Any], httpx.QueryParams]


def build_share_url(base_url: str, params: GraphQueryParams, include_filters: bool = True) -> str:
    """Share URL for the current graph.

    Any query already on ``base_url`` is replaced.

    Args:
        base_url: Public URL of the mind map page.
        params: Current graph parameters.
        include_filters: Also encode depth, type filters, layout and images.
    """
    query: Dict[str, str] = {}
    scope = params.scope
    if scope is not None:
        query[SCOPE_FIELDS[scope[0]]] = scope[1]
    if include_filters:
        query.update(params.filters())
    return str(httpx.URL(base_url.split("?", 1)[0], params=query))


def parse_bool(value: Optional[str], name: str, default: bool, warnings: List[str]) -> bool:
    """Parse a query flag, warning and defaulting on anything unexpected."""
    if value is None or value == "":
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    warnings.append(f"Ignored invalid {name} value '{value}'")
    return default


def _parse_depth(value: Optional[str], warnings: List[str]) -> int:
    if value is None or value == "":
        return config.GRAPH_DEFAULT_DEPTH
    try:
        depth = int(value)
    except ValueError:
        warnings.append(f"Ignored invalid depth '{value}'")
        return config.GRAPH_DEFAULT_DEPTH
    if depth < MIN_GRAPH_DEPTH:
        warnings.append(f"Depth {depth} is below {MIN_GRAPH_DEPTH}; using {MIN_GRAPH_DEPTH}")
        return MIN_GRAPH_DEPTH
    max_depth = config.GRAPH_MAX_DEPTH
    if depth > max_depth:
        warnings.append(f"Depth {depth} exceeds {max_depth}; using {max_depth}")
        return max_depth
    return depth


def _parse_type_list(value: Optional[str], parser, label: str, warnings: List[str]) -> Optional[list]:
    """Parse a comma-joined type list; None means "use the default set"."""
    if value is None or value.strip() == "":
        return None
    parsed = []
    unknown = []
    for raw in value.split(","):
        name = raw.strip()
        if not name:
            continue
        member = parser(name)
        if member is None:
            unknown.append(name)
        elif member not in parsed:
            parsed.append(member)
    if unknown:
        warnings.append(f"Ignored unknown {label}: {', '.join(unknown)}")
    if not parsed:
        warnings.append(f"No valid {label} given; showing all")
        return None
    return parsed


def parse_share_query(query: QueryInput) -> Tuple[GraphQueryParams, List[str]]:
    """Parse share-link query parameters.

    Args:
        query: Raw query string (with or without ``?``) or a mapping.

    Returns:
        Tuple of the parsed parameters and the warnings raised while parsing.
    """
    if isinstance(query, str):
        values = httpx.QueryParams(query.lstrip("?"))
    else:
        values = httpx.QueryParams(query)

    warnings: List[str] = []
    fields: Dict[str, Any] = {}

    scopes = [(name, values.get(wire)) for name, wire in SCOPE_FIELDS.items() if values.get(wire)]
    if scopes:
        fields[scopes[0][0]] = scopes[0][1]
        if len(scopes) > 1:
            ignored = ", ".join(SCOPE_FIELDS[name] for name, _ in scopes[1:])
            warnings.append(
                f"Multiple scopes given; using {SCOPE_FIELDS[scopes[0][0]]} and ignoring {ignored}"
            )

    fields["depth"] = _parse_depth(values.get("depth"), warnings)

    node_types = _parse_type_list(values.get("nodeTypes"), parse_node_type, "node types", warnings)
    if node_types is not None:
        fields["node_types"] = node_types
    edge_types = _parse_type_list(values.get("edgeTypes"), parse_edge_type, "edge types", warnings)
    if edge_types is not None:
        fields["edge_types"] = edge_types

    layout = values.get("layout")
    if layout:
        try:
            fields["layout"] = LayoutType(layout)
        except ValueError:
            warnings.append(f"Ignored unknown layout '{layout}'")

    fields["include_images"] = parse_bool(values.get("includeImages"), "includeImages", True, warnings)

    for warning in warnings:
        logger.warning("Share link: %s", warning)
    return GraphQueryParams(**fields), warnings


def build_email_link(to: str, subject: str, body: str, share_url: str) -> str:
    """``mailto:`` link carrying the share URL after the message body."""
    message = f"{body}\n\n{share_url}"
    return (
        f"mailto:{quote(to, safe='')}"
        f"?subject={quote(subject, safe='')}"
        f"&body={quote(message, safe='')}"
    )


def build_social_link(platform: str, share_url: str) -> str:
    """Share intent URL for a social platform.

    Raises:
        ValidationError: If the platform is not supported.
    """
    template = SOCIAL_SHARE_URLS.get(platform.lower())
    if template is None:
        raise ValidationError(f"Unsupported share platform: {platform}")
    return template.format(url=quote(share_url, safe=""), text=quote(SHARE_TEXT, safe=""))
