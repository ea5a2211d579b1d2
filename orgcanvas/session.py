"""Convenience wrapper wiring a store to a fully interactive canvas.

Provides one object holding the view and every controller so a UI only
forwards its events.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from orgcanvas.interaction.actions import CanvasActions
from orgcanvas.interaction.connect import ConnectModeController
from orgcanvas.interaction.drag import DragController
from orgcanvas.interaction.notify import ListNotifier, Notifier
from orgcanvas.interaction.pending import PendingActions
from orgcanvas.models.connection import ConnectionCreate
from orgcanvas.models.geometry import DEFAULT_NODE_SIZE, CanvasBounds, NodeSize
from orgcanvas.routing.paths import EdgePath
from orgcanvas.store.base import CanvasStore
from orgcanvas.view import CanvasView


class CanvasSession:
    """High-level canvas interface.

    Usage:
        from orgcanvas import CanvasSession, MemoryStore

        session = CanvasSession(MemoryStore())
        await session.open()
        session.drag.pointer_down(node_id, pointer)
        ...
        paths = session.edge_paths()

    Or as an async context manager via ``open_canvas(store)``.
    """

    def __init__(
        self,
        store: CanvasStore,
        notifier: Notifier | None = None,
        size: NodeSize = DEFAULT_NODE_SIZE,
        bounds: CanvasBounds | None = None,
        default_style: ConnectionCreate | None = None,
    ) -> None:
        """Initialize a new session.

        Args:
            store: Where nodes and connections persist.
            notifier: Toast sink. If None, notifications are kept in memory.
            size: Card size used to anchor connections.
            bounds: Optional clamp for dragged positions.
            default_style: Style of connections created in connect mode.
        """
        self.store = store
        self.notifier = notifier if notifier is not None else ListNotifier()
        self.pending = PendingActions()
        self.view = CanvasView(store, size)
        self.connect = ConnectModeController(store, self.notifier, self.pending, default_style)
        self.drag = DragController(
            self.view,
            self.notifier,
            self.pending,
            connect_mode=self.connect,
            bounds=bounds,
        )
        self.actions = CanvasActions(store, self.notifier, self.pending)

    async def open(self) -> None:
        """Load the nodes and subscribe to changes."""
        await self.view.load()

    def close(self) -> None:
        self.view.close()

    def edge_paths(self) -> list[EdgePath]:
        return self.view.edge_paths()


@asynccontextmanager
async def open_canvas(store: CanvasStore, **kwargs) -> AsyncIterator[CanvasSession]:
    """Open a session for the duration of the block.

    Example:
        async with open_canvas(CanvasClient()) as session:
            await session.connect.click_node(a)
    """
    session = CanvasSession(store, **kwargs)
    await session.open()
    try:
        yield session
    finally:
        session.close()
