"""Store implementations behind the canvas."""

from orgcanvas.store.base import CanvasStore, NodeListener, Subscriptions
from orgcanvas.store.client import CanvasClient
from orgcanvas.store.memory import MemoryStore

__all__ = [
    "CanvasStore",
    "NodeListener",
    "Subscriptions",
    "CanvasClient",
    "MemoryStore",
]
