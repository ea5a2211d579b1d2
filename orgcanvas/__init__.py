"""Org canvas - free-form diagram engine for staff cards and their connections."""

from orgcanvas.errors import (
    CanvasError,
    ConnectionNotFound,
    DuplicateConnection,
    NodeNotFound,
    PersistenceFailure,
    SelfConnection,
)
from orgcanvas.models import (
    Connection,
    ConnectionCreate,
    ConnectionUpdate,
    LineStyle,
    Node,
    NodeCreate,
    NodeUpdate,
    Point,
    RoutingStyle,
)
from orgcanvas.routing import EdgePath, RenderablePath, compute_path
from orgcanvas.store import CanvasClient, MemoryStore
from orgcanvas.session import CanvasSession, open_canvas

__all__ = [
    # Errors
    "CanvasError",
    "ConnectionNotFound",
    "DuplicateConnection",
    "NodeNotFound",
    "PersistenceFailure",
    "SelfConnection",
    # Models
    "Connection",
    "ConnectionCreate",
    "ConnectionUpdate",
    "LineStyle",
    "Node",
    "NodeCreate",
    "NodeUpdate",
    "Point",
    "RoutingStyle",
    # Routing
    "EdgePath",
    "RenderablePath",
    "compute_path",
    # Stores
    "CanvasClient",
    "MemoryStore",
    # High-level APIs
    "CanvasSession",
    "open_canvas",
]
