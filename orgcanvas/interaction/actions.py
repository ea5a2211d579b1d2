"""Button handlers: the action boundary where store errors become toasts."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from orgcanvas.errors import CanvasError, PersistenceFailure
from orgcanvas.interaction.notify import Notifier
from orgcanvas.interaction.pending import ActionKind, PendingActions
from orgcanvas.models.connection import ConnectionUpdate
from orgcanvas.models.node import NodeCreate, NodeUpdate
from orgcanvas.store.base import CanvasStore

logger = logging.getLogger(__name__)

_FAILED = object()


class CanvasActions:
    """Node and connection edits triggered from dialogs and card buttons.

    Every method reports its outcome through the notifier and never
    raises a CanvasError. A call is refused while another call of the
    same kind is still in flight.
    """

    def __init__(
        self,
        store: CanvasStore,
        notifier: Notifier,
        pending: PendingActions | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.pending = pending or PendingActions()

    async def _run(
        self,
        kind: ActionKind,
        call: Callable[[], Awaitable[Any]],
        success: str,
        failure: str,
    ) -> Any:
        with self.pending.track(kind) as started:
            if not started:
                self.notifier.info(f"Still working on the previous {kind.value.replace('_', ' ')}")
                return _FAILED
            try:
                result = await call()
            except CanvasError as e:
                if isinstance(e, PersistenceFailure):
                    logger.warning("%s failed: %s", kind.value, e)
                self.notifier.error(f"{failure}: {e}")
                return _FAILED
        self.notifier.success(success)
        return result

    async def create_node(self, data: NodeCreate) -> str | None:
        """Returns the new node id, or None on failure."""
        result = await self._run(
            ActionKind.create_node,
            lambda: self.store.create_node(data),
            f"{data.name} added",
            "Failed to add node",
        )
        return None if result is _FAILED else result

    async def update_node(self, node_id: str, update: NodeUpdate) -> bool:
        result = await self._run(
            ActionKind.update_node,
            lambda: self.store.update_node_fields(node_id, update),
            "Node updated",
            "Failed to update node",
        )
        return result is not _FAILED

    async def delete_node(self, node_id: str, name: str | None = None) -> bool:
        result = await self._run(
            ActionKind.delete_node,
            lambda: self.store.delete_node(node_id),
            f"{name or 'Node'} deleted",
            "Failed to delete node",
        )
        return result is not _FAILED

    async def update_connection(self, from_id: str, to_id: str, update: ConnectionUpdate) -> bool:
        result = await self._run(
            ActionKind.update_connection,
            lambda: self.store.update_connection(from_id, to_id, update),
            "Connection updated",
            "Failed to update connection",
        )
        return result is not _FAILED

    async def remove_connection(self, from_id: str, to_id: str) -> bool:
        result = await self._run(
            ActionKind.remove_connection,
            lambda: self.store.remove_connection(from_id, to_id),
            "Connection removed",
            "Failed to remove connection",
        )
        return result is not _FAILED

    async def clear_connections(self) -> int | None:
        """Remove every connection; returns the count, or None on failure."""
        result = await self._run(
            ActionKind.clear_connections,
            self.store.clear_connections,
            "All connections removed",
            "Failed to remove connections",
        )
        return None if result is _FAILED else result
