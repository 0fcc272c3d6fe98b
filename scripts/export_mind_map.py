"""
Export a mind map view (styled, laid-out nodes and edges) to JSON.
(Wrapper for archivist.utils.exporters)
"""

import argparse
import asyncio
import os
import sys

# Ensure the package is importable when run from a checkout
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from archivist.utils.exporters import export_graph_view
from archivist.visualization.share import parse_share_query


def main() -> None:
    parser = argparse.ArgumentParser(description="Export a mind map view to JSON.")
    parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Share-link query string, e.g. 'worldId=w1&depth=2&layout=radial'",
    )
    parser.add_argument("--output", default="data/mind_map.json", help="Output file path")
    parser.add_argument(
        "--hierarchy", action="store_true", help="Export the hierarchy tree instead"
    )
    parser.add_argument("--no-labels", action="store_true", help="Drop labels from the export")
    args = parser.parse_args()

    params, warnings = parse_share_query(args.query)
    for warning in warnings:
        print(f"[!] {warning}")

    try:
        asyncio.run(
            export_graph_view(
                params,
                output_file=args.output,
                hierarchy=args.hierarchy,
                show_labels=not args.no_labels,
            )
        )
    except Exception as e:
        print(f"\n[!] Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
