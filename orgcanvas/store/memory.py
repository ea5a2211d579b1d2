"""Embedded in-memory store.

Used by tests and by tools that want a canvas without a server. It
enforces the same rules as the SQLite store behind the API.
"""

import logging
from collections.abc import Iterable

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
from orgcanvas.models.node import Node, NodeCreate, NodeUpdate
from orgcanvas.store.base import NodeListener, Subscriptions, Unsubscribe
from orgcanvas.utils.identifiers import generate_node_id, utc_timestamp

logger = logging.getLogger(__name__)


class MemoryStore:
    """Canvas store kept in process memory.

    Nodes are held without their connections; connections live in one map
    keyed by the normalized node pair, which is what makes duplicates in
    either direction impossible.
    """

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self._nodes: dict[str, Node] = {}
        self._connections: dict[tuple[str, str], Connection] = {}
        self._subscriptions = Subscriptions()
        for node in nodes:
            self._nodes[node.node_id] = node.model_copy(update={"connections": []})
            for connection in node.connections:
                self._connections.setdefault(connection.key, connection)

    # --- helpers ---

    def _active(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None or not node.is_active:
            raise NodeNotFound(node_id)
        return node

    def _is_active(self, node_id: str) -> bool:
        node = self._nodes.get(node_id)
        return node is not None and node.is_active

    def _live_connections(self) -> list[Connection]:
        return [
            c
            for c in self._connections.values()
            if self._is_active(c.source_id) and self._is_active(c.target_id)
        ]

    def _with_connections(self, node: Node) -> Node:
        outgoing = [c for c in self._live_connections() if c.source_id == node.node_id]
        return node.model_copy(update={"connections": outgoing})

    def _snapshot(self) -> list[Node]:
        return [
            self._with_connections(node)
            for node in self._nodes.values()
            if node.is_active
        ]

    def _publish(self) -> None:
        self._subscriptions.publish(self._snapshot())

    # --- nodes ---

    async def list_nodes(self) -> list[Node]:
        return self._snapshot()

    async def get_node(self, node_id: str) -> Node:
        return self._with_connections(self._active(node_id))

    async def create_node(self, data: NodeCreate) -> str:
        now = utc_timestamp()
        node = Node(
            node_id=generate_node_id(),
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        self._nodes[node.node_id] = node
        logger.debug("created node %s (%s)", node.node_id, node.name)
        self._publish()
        return node.node_id

    async def update_node_position(self, node_id: str, x: float, y: float) -> None:
        node = self._active(node_id)
        if node.x == x and node.y == y:
            return
        self._nodes[node_id] = node.model_copy(
            update={"x": x, "y": y, "updated_at": utc_timestamp()}
        )
        self._publish()

    async def update_node_fields(self, node_id: str, update: NodeUpdate) -> Node:
        node = self._active(node_id)
        self._nodes[node_id] = update.apply_to(node, utc_timestamp())
        self._publish()
        return self._with_connections(self._nodes[node_id])

    async def delete_node(self, node_id: str) -> None:
        node = self._active(node_id)
        self._nodes[node_id] = node.model_copy(
            update={"is_active": False, "updated_at": utc_timestamp()}
        )
        dropped = [
            key for key, c in self._connections.items()
            if node_id in (c.source_id, c.target_id)
        ]
        for key in dropped:
            del self._connections[key]
        logger.debug("deleted node %s with %d connection(s)", node_id, len(dropped))
        self._publish()

    # --- connections ---

    async def list_connections(self) -> list[Connection]:
        return self._live_connections()

    async def add_connection(
        self,
        from_id: str,
        to_id: str,
        style: ConnectionCreate | None = None,
    ) -> Connection:
        if from_id == to_id:
            raise SelfConnection(from_id)
        self._active(from_id)
        self._active(to_id)
        key = pair_key(from_id, to_id)
        if key in self._connections:
            raise DuplicateConnection(from_id, to_id)
        style = style or ConnectionCreate()
        connection = Connection(source_id=from_id, target_id=to_id, **style.model_dump())
        self._connections[key] = connection
        self._publish()
        return connection

    async def update_connection(
        self,
        from_id: str,
        to_id: str,
        update: ConnectionUpdate,
    ) -> Connection:
        key = pair_key(from_id, to_id)
        connection = self._connections.get(key)
        if connection is None:
            raise ConnectionNotFound(from_id, to_id)
        updated = update.apply_to(connection)
        self._connections[key] = updated
        self._publish()
        return updated

    async def remove_connection(self, from_id: str, to_id: str) -> None:
        key = pair_key(from_id, to_id)
        if key not in self._connections:
            raise ConnectionNotFound(from_id, to_id)
        del self._connections[key]
        self._publish()

    async def clear_connections(self) -> int:
        count = len(self._connections)
        self._connections.clear()
        self._publish()
        return count

    def subscribe(self, listener: NodeListener) -> Unsubscribe:
        return self._subscriptions.subscribe(listener)
