"""Path router: turns two anchor points and a routing style into a drawable path.

Every function here is pure. Paths are recomputed on each render pass
from the current (possibly live-dragged) node positions, so nothing is
cached between calls.
"""

import math
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, Field

from orgcanvas.models.connection import (
    Connection,
    ConnectorSide,
    RoutingStyle,
    normalize_routing,
)
from orgcanvas.models.geometry import DEFAULT_NODE_SIZE, NodeSize, Point
from orgcanvas.models.node import Node
from orgcanvas.routing.styles import STROKE_WIDTH, arrow_markers, stroke_style

BEZIER_ARC_HEIGHT = 50.0  # control point lift above the chord midpoint
ORGCHART_DEFAULT_RATIO = 0.3  # bar position as a fraction of the vertical gap
ORGCHART_MIN_OFFSET = 1.0
ORGCHART_MAX_OFFSET = 2000.0


class PathParams(BaseModel):
    """routing-specific parameters."""

    model_config = {"allow_inf_nan": False}

    control_points: list[Point] = Field(default_factory=list)  # custom
    vertical_offset: float | None = None  # orgchart, <= 0 means auto


class RenderablePath(BaseModel):
    """a path ready to be drawn as an SVG ``<path>``."""

    routing: RoutingStyle
    points: list[Point]  # polyline vertices, or start/control/end for bezier
    d: str
    handles: list[Point] = Field(default_factory=list)
    label_anchor: Point
    dash_array: str | None = None
    stroke_width: float = STROKE_WIDTH
    color: str | None = None
    label: str | None = None
    marker_start: bool = False
    marker_end: bool = False


class EdgePath(BaseModel):
    """the rendered path of one stored connection."""

    source_id: str
    target_id: str
    path: RenderablePath


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _xy(point: Point) -> str:
    return f"{_fmt(point.x)} {_fmt(point.y)}"


def _polyline_d(points: list[Point]) -> str:
    head, *rest = points
    return " ".join([f"M {_xy(head)}", *(f"L {_xy(p)}" for p in rest)])


def polyline_midpoint(points: list[Point]) -> Point:
    """point halfway along the polyline; the start point if it has no length."""
    segments = list(zip(points, points[1:]))
    lengths = [math.hypot(b.x - a.x, b.y - a.y) for a, b in segments]
    remaining = sum(lengths) / 2
    if remaining == 0:
        return points[0]
    for (a, b), length in zip(segments, lengths):
        if length > 0 and remaining <= length:
            t = remaining / length
            return Point(x=a.x + (b.x - a.x) * t, y=a.y + (b.y - a.y) * t)
        remaining -= length
    return points[-1]


def orgchart_offset(start: Point, end: Point, vertical_offset: float | None) -> float:
    """distance the orgchart bar sits below (or above) the source anchor."""
    if vertical_offset is not None and vertical_offset > 0:
        return min(max(vertical_offset, ORGCHART_MIN_OFFSET), ORGCHART_MAX_OFFSET)
    return abs(end.y - start.y) * ORGCHART_DEFAULT_RATIO


def _straight(start: Point, end: Point) -> RenderablePath:
    points = [start, end]
    return RenderablePath(
        routing=RoutingStyle.straight,
        points=points,
        d=_polyline_d(points),
        label_anchor=polyline_midpoint(points),
    )


def _orthogonal(start: Point, end: Point) -> RenderablePath:
    mid_x = (start.x + end.x) / 2
    points = [start, Point(x=mid_x, y=start.y), Point(x=mid_x, y=end.y), end]
    return RenderablePath(
        routing=RoutingStyle.orthogonal,
        points=points,
        d=_polyline_d(points),
        label_anchor=polyline_midpoint(points),
    )


def _bezier(start: Point, end: Point) -> RenderablePath:
    control = Point(
        x=(start.x + end.x) / 2,
        y=(start.y + end.y) / 2 - BEZIER_ARC_HEIGHT,
    )
    # quadratic curve at t = 0.5
    anchor = Point(
        x=0.25 * start.x + 0.5 * control.x + 0.25 * end.x,
        y=0.25 * start.y + 0.5 * control.y + 0.25 * end.y,
    )
    return RenderablePath(
        routing=RoutingStyle.bezier,
        points=[start, control, end],
        d=f"M {_xy(start)} Q {_xy(control)}, {_xy(end)}",
        label_anchor=anchor,
    )


def _orgchart(start: Point, end: Point, params: PathParams) -> RenderablePath:
    direction = 1.0 if end.y >= start.y else -1.0
    bar_y = start.y + direction * orgchart_offset(start, end, params.vertical_offset)
    points = [start, Point(x=start.x, y=bar_y), Point(x=end.x, y=bar_y), end]
    return RenderablePath(
        routing=RoutingStyle.orgchart,
        points=points,
        d=_polyline_d(points),
        label_anchor=polyline_midpoint(points),
    )


def _custom(start: Point, end: Point, params: PathParams) -> RenderablePath:
    handles = list(params.control_points)
    points = [start, *handles, end]
    return RenderablePath(
        routing=RoutingStyle.custom,
        points=points,
        d=_polyline_d(points),
        handles=handles,
        label_anchor=polyline_midpoint(points),
    )


def compute_path(
    from_point: Point,
    to_point: Point,
    routing: RoutingStyle,
    params: PathParams | None = None,
) -> RenderablePath:
    """Compute the geometry of a path between two anchor points.

    Overlapping anchors produce a degenerate but valid path for every
    routing style. The result carries no styling; see ``style_path``.

    Args:
        from_point: Anchor on the source node.
        to_point: Anchor on the target node.
        routing: Routing style; legacy aliases such as "siku" are accepted.
        params: Control points for ``custom``, offset for ``orgchart``.

    Returns:
        RenderablePath with vertices, SVG data and label anchor.
    """
    params = params or PathParams()
    routing = RoutingStyle(normalize_routing(routing))
    if routing is RoutingStyle.orthogonal:
        return _orthogonal(from_point, to_point)
    if routing is RoutingStyle.bezier:
        return _bezier(from_point, to_point)
    if routing is RoutingStyle.orgchart:
        return _orgchart(from_point, to_point, params)
    if routing is RoutingStyle.custom:
        return _custom(from_point, to_point, params)
    return _straight(from_point, to_point)


def style_path(path: RenderablePath, connection: Connection) -> RenderablePath:
    """apply a connection's stroke, color, label and arrows to a path."""
    stroke = stroke_style(connection.line_style)
    markers = arrow_markers(connection.arrow)
    return path.model_copy(
        update={
            "dash_array": stroke.dash_array,
            "stroke_width": stroke.stroke_width,
            "color": connection.color,
            "label": connection.label,
            "marker_start": markers.start,
            "marker_end": markers.end,
        }
    )


def anchor_point(
    position: Point,
    side: ConnectorSide = ConnectorSide.center,
    size: NodeSize = DEFAULT_NODE_SIZE,
) -> Point:
    """Anchor of a card whose top-left corner is at ``position``."""
    cx = position.x + size.width / 2
    cy = position.y + size.height / 2
    if side is ConnectorSide.top:
        return Point(x=cx, y=position.y)
    if side is ConnectorSide.bottom:
        return Point(x=cx, y=position.y + size.height)
    if side is ConnectorSide.left:
        return Point(x=position.x, y=cy)
    if side is ConnectorSide.right:
        return Point(x=position.x + size.width, y=cy)
    return Point(x=cx, y=cy)


def connection_path(
    connection: Connection,
    source_position: Point,
    target_position: Point,
    size: NodeSize = DEFAULT_NODE_SIZE,
) -> RenderablePath:
    """Route and style one connection between two card positions."""
    params = PathParams(
        control_points=connection.control_points or [],
        vertical_offset=connection.vertical_offset,
    )
    path = compute_path(
        anchor_point(source_position, connection.from_connector, size),
        anchor_point(target_position, connection.to_connector, size),
        connection.routing,
        params,
    )
    return style_path(path, connection)


def iter_connections(nodes: Iterable[Node]) -> list[Connection]:
    """Connections whose endpoints are both active nodes, one per pair.

    Connections pointing at deleted or unknown nodes are dropped here so
    an orphaned edge is never drawn.
    """
    active = {node.node_id: node for node in nodes if node.is_active}
    seen: set[tuple[str, str]] = set()
    result: list[Connection] = []
    for node in active.values():
        for connection in node.connections:
            if connection.source_id not in active or connection.target_id not in active:
                continue
            if connection.key in seen:
                continue
            seen.add(connection.key)
            result.append(connection)
    return result


def compute_edge_paths(
    nodes: Iterable[Node],
    size: NodeSize = DEFAULT_NODE_SIZE,
    positions: Mapping[str, Point] | None = None,
) -> list[EdgePath]:
    """Render every connection of the canvas.

    Args:
        nodes: Node snapshot (inactive nodes are ignored).
        size: Card size used for connector anchors.
        positions: Optional rendered-position overrides by node id,
            e.g. live drag positions.

    Returns:
        One EdgePath per drawable connection.
    """
    nodes = list(nodes)
    overrides = positions or {}
    by_id = {node.node_id: node for node in nodes}
    edges: list[EdgePath] = []
    for connection in iter_connections(nodes):
        source = by_id[connection.source_id]
        target = by_id[connection.target_id]
        path = connection_path(
            connection,
            overrides.get(source.node_id, source.position),
            overrides.get(target.node_id, target.position),
            size,
        )
        edges.append(
            EdgePath(
                source_id=connection.source_id,
                target_id=connection.target_id,
                path=path,
            )
        )
    return edges
