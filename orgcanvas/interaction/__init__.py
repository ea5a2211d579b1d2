"""Interactive controllers for the canvas (drag, connect mode, actions)."""

from orgcanvas.interaction.actions import CanvasActions
from orgcanvas.interaction.connect import (
    ConnectMode,
    ConnectModeController,
    ConnectOutcome,
)
from orgcanvas.interaction.drag import (
    DragController,
    DragSession,
    DragState,
    HitTarget,
)
from orgcanvas.interaction.notify import (
    ListNotifier,
    LogNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)
from orgcanvas.interaction.pending import ActionKind, PendingActions

__all__ = [
    "CanvasActions",
    "ConnectMode",
    "ConnectModeController",
    "ConnectOutcome",
    "DragController",
    "DragSession",
    "DragState",
    "HitTarget",
    "ListNotifier",
    "LogNotifier",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "ActionKind",
    "PendingActions",
]
