"""Per-action pending flags.

While a persistence call of one kind is in flight, the UI shows progress
and refuses to start another call of the same kind.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum


class ActionKind(str, Enum):
    """kinds of persistence calls the canvas can have in flight."""

    commit_position = "commit_position"
    create_node = "create_node"
    update_node = "update_node"
    delete_node = "delete_node"
    add_connection = "add_connection"
    update_connection = "update_connection"
    remove_connection = "remove_connection"
    clear_connections = "clear_connections"


class PendingActions:
    """Tracks which kinds of action are currently in flight."""

    def __init__(self) -> None:
        self._pending: set[ActionKind] = set()

    def is_pending(self, kind: ActionKind) -> bool:
        return kind in self._pending

    @property
    def any_pending(self) -> bool:
        return bool(self._pending)

    def begin(self, kind: ActionKind) -> bool:
        """Mark ``kind`` as in flight; False if it already was."""
        if kind in self._pending:
            return False
        self._pending.add(kind)
        return True

    def end(self, kind: ActionKind) -> None:
        self._pending.discard(kind)

    @contextmanager
    def track(self, kind: ActionKind) -> Iterator[bool]:
        """Hold the flag for the duration of the block.

        Yields False (and leaves the flag untouched) when the action was
        already in flight, so callers can bail out:

            with pending.track(ActionKind.delete_node) as started:
                if not started:
                    return False
                ...
        """
        started = self.begin(kind)
        try:
            yield started
        finally:
            if started:
                self.end(kind)
