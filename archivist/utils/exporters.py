"""
Export relationship graph views to JSON files.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from archivist.models.graph import GraphQueryParams
from archivist.services.graph_client import GraphApiClient
from archivist.visualization.view import GraphView, HierarchyTreeView, ViewStatus

from .exceptions import GraphFetchError


async def export_graph_view(
    params: GraphQueryParams,
    output_file: str = "data/mind_map.json",
    hierarchy: bool = False,
    show_labels: bool = True,
    client: Optional[GraphApiClient] = None,
) -> Dict[str, Any]:
    """
    Fetch, adapt and lay out a graph, then write the view to disk.

    Args:
        params: Graph query parameters.
        output_file: Output file path.
        hierarchy: Export the hierarchy tree instead of the relationship graph.
        show_labels: Keep node and edge labels in the export.
        client: Graph client to use; one is created from config when omitted.

    Returns:
        Dictionary containing the exported view

    Raises:
        GraphFetchError: If the backend graph cannot be loaded.
    """
    owns_client = client is None
    client = client or GraphApiClient()
    view_cls = HierarchyTreeView if hierarchy else GraphView

    try:
        print(f"[*] Fetching graph from {client.base_url}...")
        view = view_cls(
            client,
            params=params,
            show_labels=show_labels,
            show_images=params.include_images,
        )
        if await view.load() != ViewStatus.READY:
            raise GraphFetchError(view.error or "Graph view did not load")

        export = view.snapshot()
        export["metadata"] = {
            "view": "hierarchy" if hierarchy else "relationships",
            "export_timestamp": datetime.now(timezone.utc).isoformat(),
            "node_count": len(view.nodes),
            "edge_count": len(view.edges),
        }

        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        print(f"[*] Writing to {output_file}...")
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(export, f, indent=2, ensure_ascii=False)

        print(f"[+] Graph view exported to {output_file}")
        return export
    finally:
        if owns_client:
            await client.close()
