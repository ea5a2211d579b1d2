"""Seed a small division chart for demos and manual testing.

Creates a manager, two supervisors and three staff cards, connects them
as an org chart and prints the rendered edge paths. Targets the running
server when --url is given, otherwise an in-memory store.
"""

import argparse
import asyncio
import json
from pathlib import Path

from orgcanvas.models.connection import ConnectionCreate, ConnectorSide, LineStyle, RoutingStyle
from orgcanvas.models.node import NodeCreate
from orgcanvas.routing.paths import compute_edge_paths
from orgcanvas.store.base import CanvasStore
from orgcanvas.store.client import CanvasClient
from orgcanvas.store.memory import MemoryStore

CHART = [
    ("Rina Hartono", "Manager", 400.0, 40.0),
    ("Dimas Pratama", "Supervisor", 150.0, 320.0),
    ("Sari Wulandari", "Supervisor", 650.0, 320.0),
    ("Agus Setiawan", "Staff", 0.0, 600.0),
    ("Maya Lestari", "Staff", 300.0, 600.0),
    ("Budi Santoso", "Staff", 650.0, 600.0),
]

REPORTS_TO = [(0, 1), (0, 2), (1, 3), (1, 4), (2, 5)]

REPORTING = ConnectionCreate(
    routing=RoutingStyle.orgchart,
    from_connector=ConnectorSide.bottom,
    to_connector=ConnectorSide.top,
)
COLLABORATION = ConnectionCreate(
    label="collaboration",
    line_style=LineStyle.dashed,
    routing=RoutingStyle.bezier,
    arrow="both",
)


async def seed(store: CanvasStore) -> list[str]:
    """Create the demo chart and return the node ids in CHART order."""
    ids = []
    for name, role, x, y in CHART:
        ids.append(
            await store.create_node(
                NodeCreate(
                    name=name,
                    role=role,
                    x=x,
                    y=y,
                    description_lines=[f"{role} duties"],
                )
            )
        )
    for parent, child in REPORTS_TO:
        await store.add_connection(ids[parent], ids[child], REPORTING)
    await store.add_connection(ids[4], ids[5], COLLABORATION)
    return ids


async def run(url: str | None, output: Path | None) -> None:
    store: CanvasStore = CanvasClient(url) if url else MemoryStore()
    ids = await seed(store)
    print(f"Seeded {len(ids)} nodes")

    edges = compute_edge_paths(await store.list_nodes())
    for edge in edges:
        print(f"  {edge.source_id[:8]} -> {edge.target_id[:8]}: {edge.path.d}")

    if output:
        output.write_text(json.dumps([e.model_dump(mode="json") for e in edges], indent=2))
        print(f"Paths written to {output}")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", help="canvas server base URL (default: in-memory store)")
    parser.add_argument("--output", type=Path, help="write rendered paths as JSON")
    args = parser.parse_args()
    asyncio.run(run(args.url, args.output))


if __name__ == "__main__":
    main()
