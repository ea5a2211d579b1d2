"""Lookup tables from connection enums to stroke attributes.

Resolved once per connection instead of re-deriving styles with nested
conditionals at render time.
"""

from dataclasses import dataclass

from orgcanvas.models.connection import ArrowType, LineStyle

STROKE_WIDTH = 3.0


@dataclass(frozen=True)
class StrokeStyle:
    """how a line style is drawn."""

    dash_array: str | None
    stroke_width: float = STROKE_WIDTH


@dataclass(frozen=True)
class ArrowMarkers:
    """which path ends carry an arrow head."""

    start: bool
    end: bool


LINE_STYLES: dict[LineStyle, StrokeStyle] = {
    LineStyle.solid: StrokeStyle(dash_array=None),
    LineStyle.dashed: StrokeStyle(dash_array="10,5"),
    LineStyle.dotted: StrokeStyle(dash_array="2,4"),
}

ARROW_MARKERS: dict[ArrowType, ArrowMarkers] = {
    ArrowType.forward: ArrowMarkers(start=False, end=True),
    ArrowType.backward: ArrowMarkers(start=True, end=False),
    ArrowType.both: ArrowMarkers(start=True, end=True),
    ArrowType.none: ArrowMarkers(start=False, end=False),
}


def stroke_style(line_style: LineStyle) -> StrokeStyle:
    return LINE_STYLES[line_style]


def arrow_markers(arrow: ArrowType) -> ArrowMarkers:
    return ARROW_MARKERS[arrow]
