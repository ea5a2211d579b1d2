"""SQLite storage for connections.

Each row is keyed by the normalized node pair, so the primary key itself
rejects a second connection between the same two nodes in either
direction, even for concurrent requests.
"""

import logging
import sqlite3

from orgcanvas.errors import (
    ConnectionNotFound,
    DuplicateConnection,
    NodeNotFound,
    SelfConnection,
)
from orgcanvas.models.connection import (
    Connection,
    ConnectionCreate,
    ConnectionUpdate,
    pair_key,
)
from orgcanvas.utils.identifiers import utc_timestamp
from server.db import connect

logger = logging.getLogger(__name__)


def init_db() -> None:
    with connect() as conn:
        conn.execute(
            """
            create table if not exists connections (
                pair_low text not null,
                pair_high text not null,
                source_id text not null,
                target_id text not null,
                connection_json text not null,
                created_at text not null,
                updated_at text not null,
                primary key (pair_low, pair_high)
            )
            """
        )
        conn.execute(
            "create index if not exists idx_connections_source on connections(source_id)"
        )
        conn.execute(
            "create index if not exists idx_connections_target on connections(target_id)"
        )


def _node_active(conn: sqlite3.Connection, node_id: str) -> bool:
    row = conn.execute(
        "select 1 from nodes where node_id = ? and is_active = 1",
        (node_id,),
    ).fetchone()
    return row is not None


def _load(conn: sqlite3.Connection, a: str, b: str) -> Connection | None:
    low, high = pair_key(a, b)
    row = conn.execute(
        "select connection_json from connections where pair_low = ? and pair_high = ?",
        (low, high),
    ).fetchone()
    if not row:
        return None
    return Connection.model_validate_json(row["connection_json"])


def live_connections(conn: sqlite3.Connection) -> list[Connection]:
    """connections whose two endpoints are active nodes."""
    rows = conn.execute(
        """
        select c.connection_json
        from connections c
        join nodes s on s.node_id = c.source_id and s.is_active = 1
        join nodes t on t.node_id = c.target_id and t.is_active = 1
        order by c.created_at, c.pair_low, c.pair_high
        """
    ).fetchall()
    return [Connection.model_validate_json(row["connection_json"]) for row in rows]


def delete_for_node(conn: sqlite3.Connection, node_id: str) -> int:
    """drop every connection touching ``node_id`` (inside the caller's transaction)."""
    cursor = conn.execute(
        "delete from connections where source_id = ? or target_id = ?",
        (node_id, node_id),
    )
    return cursor.rowcount


def list_connections() -> list[Connection]:
    with connect() as conn:
        return live_connections(conn)


def get_connection(a: str, b: str) -> Connection | None:
    with connect() as conn:
        return _load(conn, a, b)


def insert_connection(from_id: str, to_id: str, style: ConnectionCreate) -> Connection:
    """Store a new connection from ``from_id`` to ``to_id``.

    Raises:
        SelfConnection: both ids are the same.
        NodeNotFound: either id is not an active node.
        DuplicateConnection: the pair is already connected.
    """
    if from_id == to_id:
        raise SelfConnection(from_id)
    connection = Connection(source_id=from_id, target_id=to_id, **style.model_dump())
    low, high = connection.key
    now = utc_timestamp()
    with connect(write=True) as conn:
        for node_id in (from_id, to_id):
            if not _node_active(conn, node_id):
                raise NodeNotFound(node_id)
        try:
            conn.execute(
                """
                insert into connections (
                    pair_low,
                    pair_high,
                    source_id,
                    target_id,
                    connection_json,
                    created_at,
                    updated_at
                )
                values (?, ?, ?, ?, ?, ?, ?)
                """,
                (low, high, from_id, to_id, connection.model_dump_json(), now, now),
            )
        except sqlite3.IntegrityError as e:
            raise DuplicateConnection(from_id, to_id) from e
    logger.debug("connected %s -> %s", from_id, to_id)
    return connection


def update_connection(from_id: str, to_id: str, update: ConnectionUpdate) -> Connection:
    """Apply a partial style update to the pair, whichever side stores it."""
    with connect(write=True) as conn:
        existing = _load(conn, from_id, to_id)
        if existing is None:
            raise ConnectionNotFound(from_id, to_id)
        updated = update.apply_to(existing)
        low, high = updated.key
        conn.execute(
            """
            update connections
            set connection_json = ?, updated_at = ?
            where pair_low = ? and pair_high = ?
            """,
            (updated.model_dump_json(), utc_timestamp(), low, high),
        )
    return updated


def delete_connection(from_id: str, to_id: str) -> bool:
    """Remove the pair in either stored direction; False if not connected."""
    low, high = pair_key(from_id, to_id)
    with connect(write=True) as conn:
        cursor = conn.execute(
            "delete from connections where pair_low = ? and pair_high = ?",
            (low, high),
        )
        return cursor.rowcount > 0


def clear_connections() -> int:
    with connect(write=True) as conn:
        cursor = conn.execute("delete from connections")
        removed = cursor.rowcount
    logger.info("cleared %d connection(s)", removed)
    return removed
