"""Data model for styled connections between two nodes.

A connection is stored on its source node but identified by the
unordered pair of node ids: at most one connection may exist per pair,
whichever side created it.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from orgcanvas.models.geometry import Point


class LineStyle(str, Enum):
    """stroke pattern of a connection."""

    solid = "solid"
    dashed = "dashed"
    dotted = "dotted"


class RoutingStyle(str, Enum):
    """geometric algorithm turning two anchors into a path."""

    straight = "straight"
    orthogonal = "orthogonal"
    bezier = "bezier"
    orgchart = "orgchart"
    custom = "custom"


class ConnectorSide(str, Enum):
    """where on a card a connection is attached."""

    center = "center"
    top = "top"
    bottom = "bottom"
    left = "left"
    right = "right"


class ArrowType(str, Enum):
    """which ends of a connection carry an arrow head."""

    forward = "forward"
    backward = "backward"
    both = "both"
    none = "none"


# names used by older clients and the diagram editor's dropdown
ROUTING_ALIASES: dict[str, RoutingStyle] = {
    "siku": RoutingStyle.orthogonal,
    "smoothstep": RoutingStyle.orthogonal,
    "elbow": RoutingStyle.orthogonal,
    "free": RoutingStyle.bezier,
    "curve": RoutingStyle.bezier,
    "org": RoutingStyle.orgchart,
}

DEFAULT_LABEL = "reporting"
DEFAULT_COLOR = "#3b82f6"

# label presets and the color a new connection gets when none is chosen
LABEL_COLORS: dict[str, str] = {
    "reporting": "#3b82f6",
    "collaboration": "#8b5cf6",
    "communication": "#ec4899",
    "dependency": "#f59e0b",
}

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


def label_color(label: str | None) -> str:
    """preset color for a label, falling back to the default blue."""
    return LABEL_COLORS.get((label or "").lower(), DEFAULT_COLOR)


def pair_key(a: str, b: str) -> tuple[str, str]:
    """normalized key of the unordered pair (a, b)."""
    return (a, b) if a <= b else (b, a)


def normalize_routing(value):
    """map a routing name or legacy alias to its canonical spelling."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        return ROUTING_ALIASES.get(lowered, lowered)
    return value


class ConnectionStyle(BaseModel):
    """visual attributes shared by create requests and stored connections."""

    model_config = {"allow_inf_nan": False}  # inf and nan would be stored as JSON null

    line_style: LineStyle = LineStyle.solid
    routing: RoutingStyle = RoutingStyle.straight
    label: str = DEFAULT_LABEL
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    control_points: list[Point] | None = None  # routing == custom only
    vertical_offset: float | None = None  # routing == orgchart only
    from_connector: ConnectorSide = ConnectorSide.center
    to_connector: ConnectorSide = ConnectorSide.center
    arrow: ArrowType = ArrowType.forward

    @field_validator("routing", mode="before")
    @classmethod
    def _routing_alias(cls, value):
        return normalize_routing(value)

    @model_validator(mode="after")
    def _fill_color(self):
        if self.color is None:
            self.color = label_color(self.label)
        return self


class ConnectionCreate(ConnectionStyle):
    """style for a connection being added."""


class Connection(ConnectionStyle):
    """a connection as stored on its source node."""

    source_id: str
    target_id: str

    @property
    def key(self) -> tuple[str, str]:
        return pair_key(self.source_id, self.target_id)


class ConnectionUpdate(BaseModel):
    """partial update of a connection's style.

    Only the fields explicitly provided replace the stored values; an
    explicit ``null`` clears control points or the vertical offset.
    """

    model_config = {"allow_inf_nan": False}

    line_style: LineStyle | None = None
    routing: RoutingStyle | None = None
    label: str | None = None
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    control_points: list[Point] | None = None
    vertical_offset: float | None = None
    from_connector: ConnectorSide | None = None
    to_connector: ConnectorSide | None = None
    arrow: ArrowType | None = None

    @field_validator("routing", mode="before")
    @classmethod
    def _routing_alias(cls, value):
        return normalize_routing(value)

    @model_validator(mode="after")
    def _require_field(self):
        if not self.model_fields_set:
            raise ValueError("at least one connection field must be provided")
        return self

    def apply_to(self, connection: Connection) -> Connection:
        """return a validated copy of ``connection`` with the changes applied."""
        changes = self.model_dump(exclude_unset=True)
        for name in ("line_style", "routing", "label", "from_connector", "to_connector", "arrow"):
            if name in changes and changes[name] is None:
                del changes[name]
        data = connection.model_dump()
        data.update(changes)
        return Connection.model_validate(data)
