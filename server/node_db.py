"""SQLite storage for canvas nodes."""

import logging
import sqlite3

from orgcanvas.models.geometry import Point
from orgcanvas.models.node import Node, NodeUpdate
from orgcanvas.utils.identifiers import utc_timestamp
from server.connection_db import delete_for_node, live_connections
from server.db import connect

logger = logging.getLogger(__name__)


def init_db() -> None:
    with connect() as conn:
        conn.execute(
            """
            create table if not exists nodes (
                node_id text primary key,
                node_json text not null,
                name text not null,
                role text,
                is_active integer not null default 1,
                created_at text not null,
                updated_at text not null
            )
            """
        )
        conn.execute(
            "create index if not exists idx_nodes_active on nodes(is_active)"
        )


def _load(conn: sqlite3.Connection, node_id: str, include_inactive: bool = False) -> Node | None:
    row = conn.execute(
        "select node_json, is_active from nodes where node_id = ?",
        (node_id,),
    ).fetchone()
    if not row or (not row["is_active"] and not include_inactive):
        return None
    return Node.model_validate_json(row["node_json"])


def _save(conn: sqlite3.Connection, node: Node) -> None:
    # connections are assembled at read time, never stored on the row
    stored = node.model_copy(update={"connections": []})
    conn.execute(
        """
        update nodes
        set node_json = ?,
            name = ?,
            role = ?,
            is_active = ?,
            updated_at = ?
        where node_id = ?
        """,
        (
            stored.model_dump_json(),
            stored.name,
            stored.role,
            int(stored.is_active),
            stored.updated_at,
            stored.node_id,
        ),
    )


def _attach(node: Node, connections: list) -> Node:
    outgoing = [c for c in connections if c.source_id == node.node_id]
    return node.model_copy(update={"connections": outgoing})


def insert_node(node: Node) -> None:
    stored = node.model_copy(update={"connections": []})
    with connect(write=True) as conn:
        conn.execute(
            """
            insert into nodes (node_id, node_json, name, role, is_active, created_at, updated_at)
            values (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                stored.node_id,
                stored.model_dump_json(),
                stored.name,
                stored.role,
                int(stored.is_active),
                stored.created_at,
                stored.updated_at,
            ),
        )


def get_node(node_id: str, include_inactive: bool = False) -> Node | None:
    with connect() as conn:
        node = _load(conn, node_id, include_inactive)
        if node is None:
            return None
        return _attach(node, live_connections(conn))


def list_nodes(include_inactive: bool = False) -> list[Node]:
    """nodes in creation order, each with its live outgoing connections."""
    query = "select node_json from nodes"
    if not include_inactive:
        query += " where is_active = 1"
    query += " order by created_at, node_id"
    with connect() as conn:
        rows = conn.execute(query).fetchall()
        connections = live_connections(conn)
    nodes = [Node.model_validate_json(row["node_json"]) for row in rows]
    return [_attach(node, connections) for node in nodes]


def update_position(node_id: str, position: Point) -> Node | None:
    """Move an active node. Re-sending the stored position changes nothing."""
    with connect(write=True) as conn:
        node = _load(conn, node_id)
        if node is None:
            return None
        if node.x != position.x or node.y != position.y:
            node = node.model_copy(
                update={"x": position.x, "y": position.y, "updated_at": utc_timestamp()}
            )
            _save(conn, node)
        return _attach(node, live_connections(conn))


def update_fields(node_id: str, update: NodeUpdate) -> Node | None:
    with connect(write=True) as conn:
        node = _load(conn, node_id)
        if node is None:
            return None
        node = update.apply_to(node, utc_timestamp())
        _save(conn, node)
        return _attach(node, live_connections(conn))


def deactivate_node(node_id: str) -> int | None:
    """Soft-delete a node and drop its connections in one transaction.

    Returns the number of connections removed, or None if the node was
    not active.
    """
    with connect(write=True) as conn:
        node = _load(conn, node_id)
        if node is None:
            return None
        node = node.model_copy(update={"is_active": False, "updated_at": utc_timestamp()})
        _save(conn, node)
        removed = delete_for_node(conn, node_id)
    logger.info("deleted node %s and %d connection(s)", node_id, removed)
    return removed
