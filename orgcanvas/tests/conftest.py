"""Shared fixtures: node factories, instrumented stores and a temporary database."""

import pytest
from fastapi.testclient import TestClient

from orgcanvas.errors import PersistenceFailure
from orgcanvas.models.node import Node
from orgcanvas.store.memory import MemoryStore
from orgcanvas.utils.identifiers import utc_timestamp
from server import db


class RecordingStore(MemoryStore):
    """MemoryStore that remembers every position commit it receives."""

    def __init__(self, nodes=()):
        super().__init__(nodes)
        self.position_calls: list[tuple[str, float, float]] = []

    async def update_node_position(self, node_id, x, y):
        self.position_calls.append((node_id, x, y))
        await super().update_node_position(node_id, x, y)


class FailingStore(RecordingStore):
    """Store whose listed operations raise PersistenceFailure."""

    def __init__(self, nodes=(), fail_on=()):
        super().__init__(nodes)
        self.fail_on = set(fail_on)

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise PersistenceFailure(f"{operation} unavailable")

    async def update_node_position(self, node_id, x, y):
        self.position_calls.append((node_id, x, y))
        self._check("update_node_position")
        await MemoryStore.update_node_position(self, node_id, x, y)

    async def create_node(self, data):
        self._check("create_node")
        return await super().create_node(data)

    async def delete_node(self, node_id):
        self._check("delete_node")
        await super().delete_node(node_id)

    async def add_connection(self, from_id, to_id, style=None):
        self._check("add_connection")
        return await super().add_connection(from_id, to_id, style)


@pytest.fixture
def make_node():
    """Factory for persisted-looking nodes."""

    def _make(node_id: str, x: float = 0.0, y: float = 0.0, **fields) -> Node:
        now = fields.pop("created_at", utc_timestamp())
        return Node(
            node_id=node_id,
            name=fields.pop("name", node_id.title()),
            x=x,
            y=y,
            created_at=now,
            updated_at=now,
            **fields,
        )

    return _make


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the server at a fresh SQLite file with initialized tables."""
    path = tmp_path / "canvas.db"
    monkeypatch.setattr(db, "CANVAS_DB_PATH", path)
    db.init_all()
    return path


@pytest.fixture
def api(db_path):
    """TestClient for the FastAPI app backed by the temporary database."""
    from server.app import app

    with TestClient(app) as client:
        yield client
