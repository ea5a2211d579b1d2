"""API routes for rendered connection paths."""

from fastapi import APIRouter

from orgcanvas.models.geometry import NodeSize
from orgcanvas.routing.paths import EdgePath, compute_edge_paths
from server.node_db import list_nodes as db_list_nodes

router = APIRouter()


@router.get("/paths")
def list_paths(width: float = 288.0, height: float = 200.0) -> list[EdgePath]:
    """SVG-ready paths for every drawable connection at committed positions."""
    return compute_edge_paths(db_list_nodes(), NodeSize(width=width, height=height))
