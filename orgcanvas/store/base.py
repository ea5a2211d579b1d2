"""Store protocol and reactive subscription support."""

import logging
from collections.abc import Callable
from typing import Protocol

from orgcanvas.models.connection import Connection, ConnectionCreate, ConnectionUpdate
from orgcanvas.models.node import Node, NodeCreate, NodeUpdate

logger = logging.getLogger(__name__)

NodeListener = Callable[[list[Node]], None]
Unsubscribe = Callable[[], None]


class CanvasStore(Protocol):
    """Persistence operations consumed by the canvas.

    Every call is atomic from the caller's perspective and every read
    reflects the latest committed write. Failures raise the errors in
    ``orgcanvas.errors``.
    """

    async def list_nodes(self) -> list[Node]:
        """All active nodes with their outgoing connections."""
        ...

    async def get_node(self, node_id: str) -> Node:
        ...

    async def create_node(self, data: NodeCreate) -> str:
        """Create a node and return its id."""
        ...

    async def update_node_position(self, node_id: str, x: float, y: float) -> None:
        """Commit a position; a repeated (x, y) has no further effect."""
        ...

    async def update_node_fields(self, node_id: str, update: NodeUpdate) -> Node:
        ...

    async def delete_node(self, node_id: str) -> None:
        """Delete a node together with every connection touching it."""
        ...

    async def list_connections(self) -> list[Connection]:
        ...

    async def add_connection(
        self,
        from_id: str,
        to_id: str,
        style: ConnectionCreate | None = None,
    ) -> Connection:
        ...

    async def update_connection(
        self,
        from_id: str,
        to_id: str,
        update: ConnectionUpdate,
    ) -> Connection:
        ...

    async def remove_connection(self, from_id: str, to_id: str) -> None:
        ...

    async def clear_connections(self) -> int:
        """Remove every connection and return how many were removed."""
        ...

    def subscribe(self, listener: NodeListener) -> Unsubscribe:
        """Call ``listener`` with the fresh node list after each committed mutation."""
        ...


class Subscriptions:
    """listeners notified with node snapshots."""

    def __init__(self) -> None:
        self._listeners: list[NodeListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: NodeListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, nodes: list[Node]) -> None:
        """Deliver a snapshot to every listener.

        A failing listener is logged and does not stop delivery to the
        others, so one broken view cannot stall the rest.
        """
        for listener in list(self._listeners):
            try:
                listener(nodes)
            except Exception:
                logger.exception("node listener %r failed", listener)
