"""Tests for node, connection and geometry models and the error taxonomy."""

import pytest
from pydantic import ValidationError

from orgcanvas.errors import (
    ConnectionNotFound,
    DuplicateConnection,
    NodeNotFound,
    PersistenceFailure,
    SelfConnection,
    error_from_payload,
    error_payload,
)
from orgcanvas.models import (
    ArrowType,
    CanvasBounds,
    Connection,
    ConnectionCreate,
    ConnectionUpdate,
    LineStyle,
    NodeCreate,
    NodeUpdate,
    Point,
    PositionUpdate,
    RoutingStyle,
    clamp_position,
    drag_position,
    grab_offset,
    pair_key,
)


class TestConnectionStyle:
    """Defaults, label presets and routing aliases."""

    def test_defaults(self):
        style = ConnectionCreate()
        assert style.line_style is LineStyle.solid
        assert style.routing is RoutingStyle.straight
        assert style.label == "reporting"
        assert style.color == "#3b82f6"
        assert style.arrow is ArrowType.forward

    def test_color_follows_label_preset(self):
        """A connection without an explicit color takes its label's color."""
        assert ConnectionCreate(label="collaboration").color == "#8b5cf6"
        assert ConnectionCreate(label="communication").color == "#ec4899"
        assert ConnectionCreate(label="dependency").color == "#f59e0b"
        assert ConnectionCreate(label="mentoring").color == "#3b82f6"

    def test_explicit_color_wins(self):
        assert ConnectionCreate(label="dependency", color="#000").color == "#000"

    def test_invalid_color_rejected(self):
        with pytest.raises(ValidationError):
            ConnectionCreate(color="blue")

    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("siku", RoutingStyle.orthogonal),
            ("smoothstep", RoutingStyle.orthogonal),
            ("free", RoutingStyle.bezier),
            ("Orgchart", RoutingStyle.orgchart),
        ],
    )
    def test_routing_aliases(self, alias, expected):
        assert ConnectionCreate(routing=alias).routing is expected

    def test_unknown_routing_rejected(self):
        with pytest.raises(ValidationError):
            ConnectionCreate(routing="zigzag")


class TestConnectionIdentity:
    """A connection is identified by its unordered node pair."""

    def test_pair_key_is_symmetric(self):
        assert pair_key("a", "b") == pair_key("b", "a") == ("a", "b")

    def test_connection_key(self):
        connection = Connection(source_id="b", target_id="a")
        assert connection.key == ("a", "b")
        assert (connection.source_id, connection.target_id) == ("b", "a")


class TestConnectionUpdate:
    """Partial style updates."""

    def test_empty_update_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ConnectionUpdate()
        assert "at least one" in str(exc_info.value)

    def test_only_set_fields_change(self):
        connection = Connection(
            source_id="a",
            target_id="b",
            routing="orgchart",
            vertical_offset=40,
            label="dependency",
        )
        updated = ConnectionUpdate(line_style="dashed").apply_to(connection)
        assert updated.line_style is LineStyle.dashed
        assert updated.routing is RoutingStyle.orgchart
        assert updated.vertical_offset == 40
        assert updated.color == "#f59e0b"

    def test_null_clears_optional_fields_only(self):
        connection = Connection(
            source_id="a",
            target_id="b",
            routing="custom",
            control_points=[Point(x=1, y=2)],
        )
        updated = ConnectionUpdate(control_points=None, routing=None).apply_to(connection)
        assert updated.control_points is None
        assert updated.routing is RoutingStyle.custom

    def test_update_accepts_alias(self):
        assert ConnectionUpdate(routing="free").routing is RoutingStyle.bezier


class TestNodeModels:
    """Node creation and partial updates."""

    def test_create_requires_name(self):
        with pytest.raises(ValidationError):
            NodeCreate(name="")

    def test_create_defaults_to_origin(self):
        data = NodeCreate(name="Ada")
        assert (data.x, data.y) == (0.0, 0.0)
        assert data.description_lines == []

    def test_update_applies_only_set_fields(self, make_node):
        node = make_node("a", 10, 20, role="CTO", note="keep")
        updated = NodeUpdate(role="CEO").apply_to(node, "2030-01-01T00:00:00+00:00")
        assert updated.role == "CEO"
        assert updated.note == "keep"
        assert updated.name == node.name
        assert updated.position == Point(x=10, y=20)
        assert updated.updated_at == "2030-01-01T00:00:00+00:00"

    def test_update_never_clears_name(self, make_node):
        node = make_node("a", name="Ada")
        updated = NodeUpdate(name=None, note=None).apply_to(node, node.updated_at)
        assert updated.name == "Ada"
        assert updated.note is None


class TestGeometry:
    """Pure drag math."""

    def test_grab_offset_and_drag_position(self):
        offset = grab_offset(Point(x=130, y=115), Point(x=100, y=100))
        assert offset == Point(x=30, y=15)
        assert drag_position(Point(x=230, y=165), offset) == Point(x=200, y=150)

    def test_clamp_without_bounds_is_identity(self):
        point = Point(x=-50, y=-10)
        assert clamp_position(point, None) == point

    def test_clamp_to_bounds(self):
        bounds = CanvasBounds(max_x=500, max_y=400)
        assert clamp_position(Point(x=-50, y=-10), bounds) == Point(x=0, y=0)
        assert clamp_position(Point(x=900, y=800), bounds) == Point(x=500, y=400)
        assert clamp_position(Point(x=20, y=30), bounds) == Point(x=20, y=30)

    def test_point_is_immutable(self):
        point = Point(x=1, y=2)
        with pytest.raises(ValidationError):
            point.x = 5


class TestErrorPayloads:
    """Errors survive the trip through a JSON body."""

    @pytest.mark.parametrize(
        "error",
        [
            NodeNotFound("n1"),
            ConnectionNotFound("a", "b"),
            DuplicateConnection("a", "b"),
            SelfConnection("a"),
        ],
    )
    def test_rebuilds_same_error(self, error):
        payload = error_payload(error)
        assert payload["error"] == type(error).__name__
        assert payload["detail"] == str(error)
        rebuilt = error_from_payload(payload)
        assert type(rebuilt) is type(error)
        assert str(rebuilt) == str(error)

    def test_unknown_error_becomes_persistence_failure(self):
        rebuilt = error_from_payload({"detail": "boom", "error": "KeyError"})
        assert isinstance(rebuilt, PersistenceFailure)
        assert str(rebuilt) == "boom"

    def test_missing_context_becomes_persistence_failure(self):
        rebuilt = error_from_payload({"detail": "gone", "error": "NodeNotFound"})
        assert isinstance(rebuilt, PersistenceFailure)


class TestFiniteCoordinates:
    """Non-finite numbers cannot be stored as JSON, so models refuse them."""

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_point(self, value):
        with pytest.raises(ValidationError):
            Point(x=value, y=0)

    def test_position_update(self):
        with pytest.raises(ValidationError):
            PositionUpdate(x=0, y=float("nan"))

    def test_node_create(self):
        with pytest.raises(ValidationError):
            NodeCreate(name="Ada", x=float("inf"))

    def test_connection_style(self):
        with pytest.raises(ValidationError):
            ConnectionCreate(routing="orgchart", vertical_offset=float("inf"))
        with pytest.raises(ValidationError):
            ConnectionCreate(routing="custom", control_points=[{"x": float("inf"), "y": 0}])

    def test_connection_update(self):
        with pytest.raises(ValidationError):
            ConnectionUpdate(vertical_offset=float("nan"))
