"""Data model for positioned nodes (staff cards) on the canvas."""

from pydantic import BaseModel, Field

from orgcanvas.models.connection import Connection
from orgcanvas.models.geometry import Point


class Node(BaseModel):
    """a persisted card with a position and its outgoing connections.

    ``x``/``y`` always hold the last committed position. Live drag
    positions never reach this model; they live in the canvas view.
    """

    model_config = {"allow_inf_nan": False}

    node_id: str
    name: str
    avatar_url: str | None = None
    role: str | None = None  # subtitle shown under the name
    description_lines: list[str] = Field(default_factory=list)
    note: str | None = None
    x: float = 0.0
    y: float = 0.0
    is_active: bool = True
    connections: list[Connection] = Field(default_factory=list)  # outgoing only
    created_at: str
    updated_at: str

    @property
    def position(self) -> Point:
        return Point(x=self.x, y=self.y)


class NodeCreate(BaseModel):
    """request data for a new node."""

    model_config = {"allow_inf_nan": False}

    name: str = Field(min_length=1)
    avatar_url: str | None = None
    role: str | None = None
    description_lines: list[str] = Field(default_factory=list)
    note: str | None = None
    x: float = 0.0
    y: float = 0.0


class NodeUpdate(BaseModel):
    """partial update of a node's descriptive fields.

    Only fields that are explicitly set are applied. Position is moved
    through ``update_node_position`` instead.
    """

    name: str | None = Field(default=None, min_length=1)
    avatar_url: str | None = None
    role: str | None = None
    description_lines: list[str] | None = None
    note: str | None = None

    def apply_to(self, node: Node, updated_at: str) -> Node:
        """return a copy of ``node`` with the provided fields replaced."""
        changes = self.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)  # a node always keeps a name
        if "description_lines" in changes and changes["description_lines"] is None:
            changes["description_lines"] = []
        changes["updated_at"] = updated_at
        return node.model_copy(update=changes)


class PositionUpdate(BaseModel):
    """request body for a drag commit."""

    model_config = {"allow_inf_nan": False}

    x: float
    y: float
