"""Connect mode: click two nodes in sequence to connect them."""

from __future__ import annotations

import logging
from enum import Enum

from orgcanvas.errors import CanvasError, DuplicateConnection, NodeNotFound, SelfConnection
from orgcanvas.interaction.notify import Notifier
from orgcanvas.interaction.pending import ActionKind, PendingActions
from orgcanvas.models.connection import ConnectionCreate
from orgcanvas.store.base import CanvasStore

logger = logging.getLogger(__name__)


class ConnectMode(str, Enum):
    off = "off"
    on = "on"


class ConnectOutcome(str, Enum):
    """what a node click did while connect mode is on."""

    source_selected = "source_selected"
    created = "created"
    rejected = "rejected"  # user-correctable: self, duplicate or missing node
    failed = "failed"  # store failure
    ignored = "ignored"  # mode off or a create already in flight


class ConnectModeController:
    """Modal flow for creating connections.

    The pending source is cleared whenever the mode is toggled and after
    every second click, whatever the outcome.
    """

    def __init__(
        self,
        store: CanvasStore,
        notifier: Notifier,
        pending: PendingActions | None = None,
        default_style: ConnectionCreate | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.pending = pending or PendingActions()
        self.default_style = default_style or ConnectionCreate()
        self.mode = ConnectMode.off
        self.pending_source: str | None = None

    @property
    def active(self) -> bool:
        return self.mode is ConnectMode.on

    def enable(self) -> None:
        self.mode = ConnectMode.on
        self.pending_source = None
        self.notifier.info("Connect mode on: click the first node")

    def disable(self) -> None:
        self.mode = ConnectMode.off
        self.pending_source = None

    def toggle(self) -> bool:
        """Flip the mode and return whether it is now on."""
        if self.active:
            self.disable()
        else:
            self.enable()
        return self.active

    async def click_node(self, node_id: str) -> ConnectOutcome:
        """Handle a click on a node while connect mode may be on."""
        if not self.active:
            return ConnectOutcome.ignored

        if self.pending_source is None:
            self.pending_source = node_id
            self.notifier.info("Click a second node to connect")
            return ConnectOutcome.source_selected

        source, self.pending_source = self.pending_source, None
        if source == node_id:
            self.notifier.error("Pick two different nodes to connect")
            return ConnectOutcome.rejected

        with self.pending.track(ActionKind.add_connection) as started:
            if not started:
                self.notifier.info("A connection is already being created")
                return ConnectOutcome.ignored
            try:
                await self.store.add_connection(source, node_id, self.default_style)
            except (DuplicateConnection, SelfConnection, NodeNotFound) as e:
                self.notifier.error(str(e))
                return ConnectOutcome.rejected
            except CanvasError as e:
                logger.warning("add connection %s -> %s failed: %s", source, node_id, e)
                self.notifier.error(f"Failed to create connection: {e}")
                return ConnectOutcome.failed

        self.notifier.success("Connection created")
        return ConnectOutcome.created
