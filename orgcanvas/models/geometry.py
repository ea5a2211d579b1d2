"""Coordinate types shared by the store, the router and the controllers.

All coordinates are canvas pixels with the origin at the top-left corner
and y growing downwards.
"""

from pydantic import BaseModel


class Point(BaseModel):
    """an immutable 2D point."""

    model_config = {"frozen": True, "allow_inf_nan": False}

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(x=self.x - other.x, y=self.y - other.y)


class NodeSize(BaseModel):
    """rendered card size used to derive connector anchors."""

    model_config = {"frozen": True, "allow_inf_nan": False}

    width: float = 288.0
    height: float = 200.0


class CanvasBounds(BaseModel):
    """optional rectangle a node's top-left corner is kept inside."""

    model_config = {"frozen": True, "allow_inf_nan": False}

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float | None = None
    max_y: float | None = None


DEFAULT_NODE_SIZE = NodeSize()


def grab_offset(pointer: Point, origin: Point) -> Point:
    """offset between the pointer and a card's top-left corner at grab time."""
    return pointer - origin


def drag_position(pointer: Point, offset: Point) -> Point:
    """where the card's top-left corner goes for a pointer position."""
    return pointer - offset


def clamp_position(point: Point, bounds: CanvasBounds | None) -> Point:
    """keep a top-left corner inside ``bounds`` (no-op without bounds)."""
    if bounds is None:
        return point
    x = max(point.x, bounds.min_x)
    y = max(point.y, bounds.min_y)
    if bounds.max_x is not None:
        x = min(x, bounds.max_x)
    if bounds.max_y is not None:
        y = min(y, bounds.max_y)
    return Point(x=x, y=y)
