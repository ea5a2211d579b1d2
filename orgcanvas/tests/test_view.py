"""Tests for the reactive canvas view and the session wiring."""

import asyncio

import pytest

from orgcanvas.interaction import ConnectOutcome, ListNotifier, LogNotifier
from orgcanvas.models import NodeCreate, NodeSize, Point
from orgcanvas.session import CanvasSession, open_canvas
from orgcanvas.store.memory import MemoryStore
from orgcanvas.view import CanvasView


@pytest.fixture
def store(make_node):
    return MemoryStore([make_node("a", 100, 100), make_node("b", 400, 300)])


class TestCanvasView:
    """Snapshots and local overrides."""

    def test_load_follows_store(self, store):
        view = CanvasView(store)
        asyncio.run(view.load())
        revision = view.revision
        asyncio.run(store.update_node_position("a", 10, 20))
        assert view.revision == revision + 1
        assert view.committed_position("a") == Point(x=10, y=20)

    def test_snapshot_drops_unheld_overrides(self, store):
        view = CanvasView(store)
        asyncio.run(view.load())
        view.set_local_position("a", Point(x=1, y=1))
        view.hold("b")
        view.set_local_position("b", Point(x=2, y=2))
        asyncio.run(store.update_node_position("a", 5, 5))
        assert view.local_positions == {"b": Point(x=2, y=2)}

    def test_deleted_nodes_disappear(self, store):
        view = CanvasView(store)
        asyncio.run(view.load())
        asyncio.run(store.add_connection("a", "b"))
        assert len(view.edge_paths()) == 1
        asyncio.run(store.delete_node("b"))
        assert not view.has_node("b")
        assert view.edge_paths() == []

    def test_edge_paths_follow_local_positions(self, store):
        view = CanvasView(store, NodeSize(width=0, height=0))
        asyncio.run(view.load())
        asyncio.run(store.add_connection("a", "b"))
        view.set_local_position("a", Point(x=200, y=150))
        [edge] = view.edge_paths()
        assert edge.path.d == "M 200 150 L 400 300"

    def test_close_unsubscribes(self, store):
        view = CanvasView(store)
        asyncio.run(view.load())
        view.close()
        revision = view.revision
        asyncio.run(store.update_node_position("a", 10, 20))
        assert view.revision == revision

    def test_visible_nodes(self, store):
        view = CanvasView(store)
        asyncio.run(view.load())
        assert [n.node_id for n in view.visible_nodes()] == ["a", "b"]


class TestCanvasSession:
    """End to end over the embedded store."""

    def test_build_a_small_chart(self):
        async def scenario():
            store = MemoryStore()
            async with open_canvas(store, size=NodeSize(width=0, height=0)) as session:
                ceo = await session.actions.create_node(NodeCreate(name="CEO", x=100, y=100))
                cto = await session.actions.create_node(NodeCreate(name="CTO", x=400, y=300))
                session.connect.enable()
                outcomes = [
                    await session.connect.click_node(ceo),
                    await session.connect.click_node(cto),
                ]
                session.connect.disable()

                session.drag.pointer_down(cto, Point(x=400, y=300))
                session.drag.pointer_move(Point(x=500, y=300))
                await session.drag.pointer_up()
                return session, outcomes, session.edge_paths()

        session, outcomes, paths = asyncio.run(scenario())
        assert outcomes[-1] is ConnectOutcome.created
        [edge] = paths
        assert edge.path.d == "M 100 100 L 500 300"
        assert session.notifier.messages()

    def test_custom_notifier(self, store):
        notifier = LogNotifier()
        session = CanvasSession(store, notifier)
        assert session.notifier is notifier
        assert isinstance(CanvasSession(store).notifier, ListNotifier)
