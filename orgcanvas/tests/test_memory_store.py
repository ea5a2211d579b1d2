"""Tests for the embedded store: the connection rules and read-after-write."""

import asyncio

import pytest

from orgcanvas.errors import (
    ConnectionNotFound,
    DuplicateConnection,
    NodeNotFound,
    SelfConnection,
)
from orgcanvas.models import ConnectionCreate, ConnectionUpdate, LineStyle, NodeCreate, NodeUpdate
from orgcanvas.routing import compute_edge_paths
from orgcanvas.store.memory import MemoryStore


@pytest.fixture
def store(make_node):
    return MemoryStore([make_node("a", 100, 100), make_node("b", 400, 300), make_node("c", 700, 300)])


class TestConnectionRules:
    """At most one connection per unordered pair, never to self."""

    def test_duplicate_same_direction(self, store):
        asyncio.run(store.add_connection("a", "b"))
        with pytest.raises(DuplicateConnection):
            asyncio.run(store.add_connection("a", "b"))

    def test_duplicate_reverse_direction(self, store):
        asyncio.run(store.add_connection("a", "b"))
        with pytest.raises(DuplicateConnection):
            asyncio.run(store.add_connection("b", "a"))
        assert len(asyncio.run(store.list_connections())) == 1

    def test_self_connection(self, store):
        with pytest.raises(SelfConnection):
            asyncio.run(store.add_connection("a", "a"))

    def test_unknown_node(self, store):
        with pytest.raises(NodeNotFound) as exc_info:
            asyncio.run(store.add_connection("a", "zzz"))
        assert exc_info.value.node_id == "zzz"

    @pytest.mark.parametrize("second", [("a", "b"), ("b", "a")])
    def test_remove_then_remove_again(self, store, second):
        asyncio.run(store.add_connection("a", "b"))
        asyncio.run(store.remove_connection("a", "b"))
        with pytest.raises(ConnectionNotFound):
            asyncio.run(store.remove_connection(*second))

    def test_remove_from_other_side(self, store):
        asyncio.run(store.add_connection("a", "b"))
        asyncio.run(store.remove_connection("b", "a"))
        assert asyncio.run(store.list_connections()) == []

    def test_update_either_direction(self, store):
        asyncio.run(store.add_connection("a", "b"))
        updated = asyncio.run(
            store.update_connection("b", "a", ConnectionUpdate(line_style="dotted"))
        )
        assert updated.line_style is LineStyle.dotted
        assert updated.source_id == "a"

    def test_update_missing(self, store):
        with pytest.raises(ConnectionNotFound):
            asyncio.run(store.update_connection("a", "b", ConnectionUpdate(label="x")))

    def test_connection_stored_on_source(self, store):
        asyncio.run(store.add_connection("a", "b", ConnectionCreate(label="dependency")))
        a = asyncio.run(store.get_node("a"))
        b = asyncio.run(store.get_node("b"))
        assert [c.target_id for c in a.connections] == ["b"]
        assert b.connections == []

    def test_clear_connections(self, store):
        asyncio.run(store.add_connection("a", "b"))
        asyncio.run(store.add_connection("b", "c"))
        assert asyncio.run(store.clear_connections()) == 2
        assert asyncio.run(store.list_connections()) == []


class TestNodes:
    """Node lifecycle in the embedded store."""

    def test_create_and_read_back(self):
        store = MemoryStore()
        node_id = asyncio.run(store.create_node(NodeCreate(name="Ada", x=5, y=6)))
        node = asyncio.run(store.get_node(node_id))
        assert node.name == "Ada"
        assert (node.x, node.y) == (5, 6)

    def test_position_read_after_write(self, store):
        asyncio.run(store.update_node_position("a", 200, 150))
        [a] = [n for n in asyncio.run(store.list_nodes()) if n.node_id == "a"]
        assert (a.x, a.y) == (200, 150)

    def test_repeated_position_is_noop(self, store):
        snapshots = []
        store.subscribe(snapshots.append)
        asyncio.run(store.update_node_position("a", 200, 150))
        before = asyncio.run(store.get_node("a")).updated_at
        asyncio.run(store.update_node_position("a", 200, 150))
        assert len(snapshots) == 1
        assert asyncio.run(store.get_node("a")).updated_at == before

    def test_update_fields(self, store):
        node = asyncio.run(store.update_node_fields("a", NodeUpdate(role="CTO")))
        assert node.role == "CTO"

    def test_missing_node(self, store):
        with pytest.raises(NodeNotFound):
            asyncio.run(store.update_node_position("zzz", 1, 1))

    def test_delete_cascades(self, store):
        """No orphaned edge survives the deletion of an endpoint."""
        asyncio.run(store.add_connection("a", "b"))
        asyncio.run(store.add_connection("c", "b"))
        asyncio.run(store.add_connection("a", "c"))
        asyncio.run(store.delete_node("b"))

        nodes = asyncio.run(store.list_nodes())
        assert {n.node_id for n in nodes} == {"a", "c"}
        assert [(c.source_id, c.target_id) for c in asyncio.run(store.list_connections())] == [
            ("a", "c")
        ]
        assert len(compute_edge_paths(nodes)) == 1
        with pytest.raises(NodeNotFound):
            asyncio.run(store.get_node("b"))

    def test_deleted_node_cannot_be_connected(self, store):
        asyncio.run(store.delete_node("b"))
        with pytest.raises(NodeNotFound):
            asyncio.run(store.add_connection("a", "b"))


class TestSubscriptions:
    """Listeners receive the fresh node list after each mutation."""

    def test_snapshot_after_mutation(self, store):
        snapshots = []
        store.subscribe(snapshots.append)
        asyncio.run(store.add_connection("a", "b"))
        [snapshot] = snapshots
        [a] = [n for n in snapshot if n.node_id == "a"]
        assert len(a.connections) == 1

    def test_unsubscribe(self, store):
        snapshots = []
        unsubscribe = store.subscribe(snapshots.append)
        unsubscribe()
        unsubscribe()
        asyncio.run(store.update_node_position("a", 1, 2))
        assert snapshots == []

    def test_failing_listener_does_not_block_others(self, store):
        snapshots = []

        def broken(nodes):
            raise RuntimeError("render crashed")

        store.subscribe(broken)
        store.subscribe(snapshots.append)
        asyncio.run(store.update_node_position("a", 1, 2))
        assert len(snapshots) == 1
