"""Path routing and stroke styling for connections."""

from orgcanvas.routing.paths import (
    EdgePath,
    PathParams,
    RenderablePath,
    anchor_point,
    compute_edge_paths,
    compute_path,
    connection_path,
    iter_connections,
    style_path,
)
from orgcanvas.routing.styles import (
    ARROW_MARKERS,
    LINE_STYLES,
    StrokeStyle,
)

__all__ = [
    "EdgePath",
    "PathParams",
    "RenderablePath",
    "anchor_point",
    "compute_edge_paths",
    "compute_path",
    "connection_path",
    "iter_connections",
    "style_path",
    "ARROW_MARKERS",
    "LINE_STYLES",
    "StrokeStyle",
]
