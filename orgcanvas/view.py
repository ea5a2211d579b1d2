"""Reactive canvas view: the node snapshot plus optimistic local positions."""

from __future__ import annotations

import logging

from orgcanvas.filters import NodeFilter, apply_filters
from orgcanvas.models.connection import Connection
from orgcanvas.models.geometry import DEFAULT_NODE_SIZE, NodeSize, Point
from orgcanvas.models.node import Node
from orgcanvas.routing.paths import EdgePath, compute_edge_paths, iter_connections
from orgcanvas.store.base import CanvasStore, Unsubscribe

logger = logging.getLogger(__name__)


class CanvasView:
    """What the canvas renders.

    The view keeps the latest snapshot pushed by the store and a map of
    local position overrides written by the drag controller. A new
    snapshot replaces every override except those of nodes still held by
    an active gesture.
    """

    def __init__(self, store: CanvasStore, size: NodeSize = DEFAULT_NODE_SIZE) -> None:
        self.store = store
        self.size = size
        self.revision = 0  # bumped on every snapshot
        self._nodes: dict[str, Node] = {}
        self._local: dict[str, Point] = {}
        self._held: set[str] = set()
        self._unsubscribe: Unsubscribe | None = None

    async def load(self) -> list[Node]:
        """Read the current nodes and follow subsequent changes."""
        nodes = await self.store.list_nodes()
        self.apply_snapshot(nodes)
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.apply_snapshot)
        return nodes

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def apply_snapshot(self, nodes: list[Node]) -> None:
        self._nodes = {node.node_id: node for node in nodes if node.is_active}
        self._local = {
            node_id: point
            for node_id, point in self._local.items()
            if node_id in self._held and node_id in self._nodes
        }
        self.revision += 1
        logger.debug("canvas snapshot r%d with %d node(s)", self.revision, len(self._nodes))

    # --- nodes ---

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def visible_nodes(self, config: NodeFilter | None = None) -> list[Node]:
        return apply_filters(self._nodes.values(), config)

    # --- positions ---

    def committed_position(self, node_id: str) -> Point:
        return self._nodes[node_id].position

    def rendered_position(self, node_id: str) -> Point:
        """Live drag position if one is set, else the committed one."""
        local = self._local.get(node_id)
        return local if local is not None else self.committed_position(node_id)

    @property
    def local_positions(self) -> dict[str, Point]:
        return dict(self._local)

    def set_local_position(self, node_id: str, point: Point) -> None:
        self._local[node_id] = point

    def hold(self, node_id: str) -> None:
        """Protect a node's local position from incoming snapshots."""
        self._held.add(node_id)

    def release(self, node_id: str) -> None:
        """Let the next snapshot overwrite the node's local position."""
        self._held.discard(node_id)

    # --- edges ---

    def connections(self) -> list[Connection]:
        return iter_connections(self._nodes.values())

    def edge_paths(self) -> list[EdgePath]:
        """Paths for every drawable connection at the rendered positions."""
        return compute_edge_paths(self._nodes.values(), self.size, self._local)
