"""API routes for canvas nodes."""

from fastapi import APIRouter, Query

from orgcanvas.errors import NodeNotFound
from orgcanvas.filters import NodeFilter, NodeSortKey, apply_filters
from orgcanvas.models.geometry import Point
from orgcanvas.models.node import Node, NodeCreate, NodeUpdate, PositionUpdate
from orgcanvas.utils.identifiers import generate_node_id, utc_timestamp
from server.node_db import (
    deactivate_node as db_deactivate_node,
    get_node as db_get_node,
    insert_node as db_insert_node,
    list_nodes as db_list_nodes,
    update_fields as db_update_fields,
    update_position as db_update_position,
)

router = APIRouter()


@router.get("/nodes")
def list_nodes(
    search: str | None = None,
    role: list[str] | None = Query(default=None),
    include_inactive: bool = False,
    sort_by: NodeSortKey | None = None,
    descending: bool = False,
) -> list[Node]:
    """list nodes, optionally filtered and sorted."""
    config = NodeFilter(
        search=search,
        roles=frozenset(role or ()),
        include_inactive=include_inactive,
        sort_by=sort_by,
        descending=descending,
    )
    return apply_filters(db_list_nodes(include_inactive=include_inactive), config)


@router.get("/nodes/{node_id}")
def get_node(node_id: str) -> Node:
    node = db_get_node(node_id)
    if node is None:
        raise NodeNotFound(node_id)
    return node


@router.post("/nodes", status_code=201)
def create_node(request: NodeCreate) -> Node:
    """create a node; the server assigns its id and timestamps."""
    now = utc_timestamp()
    node = Node(
        node_id=generate_node_id(),
        created_at=now,
        updated_at=now,
        **request.model_dump(),
    )
    db_insert_node(node)
    return node


@router.patch("/nodes/{node_id}")
def update_node(node_id: str, request: NodeUpdate) -> Node:
    node = db_update_fields(node_id, request)
    if node is None:
        raise NodeNotFound(node_id)
    return node


@router.put("/nodes/{node_id}/position")
def update_position(node_id: str, request: PositionUpdate) -> Node:
    """commit a dragged position. Idempotent for a repeated (x, y)."""
    node = db_update_position(node_id, Point(x=request.x, y=request.y))
    if node is None:
        raise NodeNotFound(node_id)
    return node


@router.delete("/nodes/{node_id}")
def delete_node(node_id: str) -> dict:
    """soft-delete a node and remove every connection touching it."""
    removed = db_deactivate_node(node_id)
    if removed is None:
        raise NodeNotFound(node_id)
    return {"deleted": node_id, "connections_removed": removed}
