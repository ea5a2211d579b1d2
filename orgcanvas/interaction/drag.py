"""Drag controller: pointer events to live positions, one commit on release.

idle --pointer_down--> dragging --pointer_move--> dragging
dragging --pointer_up--> committing --(persisted or failed)--> idle

Moves only touch the view's local positions; the store is called once
per moved node when the pointer is released.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from orgcanvas.errors import CanvasError
from orgcanvas.interaction.notify import Notifier
from orgcanvas.interaction.pending import ActionKind, PendingActions
from orgcanvas.models.geometry import (
    CanvasBounds,
    Point,
    clamp_position,
    drag_position,
    grab_offset,
)
from orgcanvas.view import CanvasView

if TYPE_CHECKING:
    from orgcanvas.interaction.connect import ConnectModeController

logger = logging.getLogger(__name__)


class DragState(str, Enum):
    idle = "idle"
    dragging = "dragging"
    committing = "committing"


class HitTarget(str, Enum):
    """part of a card under the pointer."""

    card = "card"  # the draggable body
    button = "button"  # embedded edit/delete buttons
    connector = "connector"


@dataclass
class DragSession:
    """ephemeral state of one gesture."""

    node_id: str
    offset: Point  # pointer minus top-left at grab time
    origin: Point
    live_position: Point
    followers: dict[str, Point] = field(default_factory=dict)  # id -> origin

    @property
    def node_ids(self) -> list[str]:
        return [self.node_id, *self.followers]

    def positions(self, bounds: CanvasBounds | None = None) -> dict[str, Point]:
        """current position of every node moved by the gesture, primary first."""
        delta = self.live_position - self.origin
        result = {self.node_id: self.live_position}
        for node_id, origin in self.followers.items():
            result[node_id] = clamp_position(origin + delta, bounds)
        return result


class DragController:
    """Translates pointer events into node moves.

    Args:
        view: Canvas view receiving live positions; its store gets the commit.
        notifier: Where commit failures are reported.
        pending: Shared pending-flag registry.
        connect_mode: When given and active, drags are refused.
        bounds: Optional clamp for top-left positions.
    """

    def __init__(
        self,
        view: CanvasView,
        notifier: Notifier,
        pending: PendingActions | None = None,
        connect_mode: ConnectModeController | None = None,
        bounds: CanvasBounds | None = None,
    ) -> None:
        self.view = view
        self.notifier = notifier
        self.pending = pending or PendingActions()
        self.connect_mode = connect_mode
        self.bounds = bounds
        self.state = DragState.idle
        self.session: DragSession | None = None

    def pointer_down(
        self,
        node_id: str,
        pointer: Point,
        target: HitTarget = HitTarget.card,
        group: tuple[str, ...] | list[str] = (),
    ) -> bool:
        """Start a gesture; returns False when the press does not start a drag.

        ``group`` lists other selected nodes that move along with this one.
        """
        if self.state is not DragState.idle:
            return False
        if target is not HitTarget.card:
            return False
        if self.connect_mode is not None and self.connect_mode.active:
            return False
        if not self.view.has_node(node_id):
            return False

        origin = self.view.rendered_position(node_id)
        followers = {
            other: self.view.rendered_position(other)
            for other in group
            if other != node_id and self.view.has_node(other)
        }
        self.session = DragSession(
            node_id=node_id,
            offset=grab_offset(pointer, origin),
            origin=origin,
            live_position=origin,
            followers=followers,
        )
        for moved in self.session.node_ids:
            self.view.hold(moved)
        self.state = DragState.dragging
        return True

    def pointer_move(self, pointer: Point) -> Point | None:
        """Move the card under the pointer; never persists."""
        if self.state is not DragState.dragging or self.session is None:
            return None
        position = clamp_position(drag_position(pointer, self.session.offset), self.bounds)
        self.session.live_position = position
        for node_id, point in self.session.positions(self.bounds).items():
            self.view.set_local_position(node_id, point)
        return position

    async def pointer_up(self, pointer: Point | None = None) -> bool:
        """End the gesture and commit the final position(s).

        A failed commit is reported but the local position is kept; the
        next snapshot from the store replaces it.

        Returns:
            True when every commit succeeded.
        """
        if self.state is not DragState.dragging or self.session is None:
            return False
        if pointer is not None:
            self.pointer_move(pointer)

        session = self.session
        self.state = DragState.committing
        self.pending.begin(ActionKind.commit_position)
        ok = True
        try:
            for node_id, position in session.positions(self.bounds).items():
                self.view.release(node_id)
                try:
                    await self.view.store.update_node_position(node_id, position.x, position.y)
                except CanvasError as e:
                    ok = False
                    logger.warning("position commit failed for %s: %s", node_id, e)
                    self.notifier.error(f"Failed to save position: {e}")
                else:
                    logger.debug("committed %s at (%s, %s)", node_id, position.x, position.y)
        finally:
            self.pending.end(ActionKind.commit_position)
            self.session = None
            self.state = DragState.idle
        return ok
