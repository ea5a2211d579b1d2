"""Core data models for the canvas engine."""

from orgcanvas.models.connection import (
    ArrowType,
    Connection,
    ConnectionCreate,
    ConnectionStyle,
    ConnectionUpdate,
    ConnectorSide,
    LineStyle,
    RoutingStyle,
    label_color,
    normalize_routing,
    pair_key,
)
from orgcanvas.models.geometry import (
    DEFAULT_NODE_SIZE,
    CanvasBounds,
    NodeSize,
    Point,
    clamp_position,
    drag_position,
    grab_offset,
)
from orgcanvas.models.node import (
    Node,
    NodeCreate,
    NodeUpdate,
    PositionUpdate,
)

__all__ = [
    # Connections
    "ArrowType",
    "Connection",
    "ConnectionCreate",
    "ConnectionStyle",
    "ConnectionUpdate",
    "ConnectorSide",
    "LineStyle",
    "RoutingStyle",
    "label_color",
    "normalize_routing",
    "pair_key",
    # Geometry
    "DEFAULT_NODE_SIZE",
    "CanvasBounds",
    "NodeSize",
    "Point",
    "clamp_position",
    "drag_position",
    "grab_offset",
    # Nodes
    "Node",
    "NodeCreate",
    "NodeUpdate",
    "PositionUpdate",
]
