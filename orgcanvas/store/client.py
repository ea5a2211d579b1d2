"""HTTP client store for talking to the canvas server.

so a canvas session can run against the API the same way it runs
against the embedded store:
store = CanvasClient("http://localhost:8000")
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from orgcanvas.errors import CanvasError, PersistenceFailure, error_from_payload
from orgcanvas.models.connection import Connection, ConnectionCreate, ConnectionUpdate
from orgcanvas.models.node import Node, NodeCreate, NodeUpdate
from orgcanvas.store.base import NodeListener, Subscriptions, Unsubscribe

logger = logging.getLogger(__name__)

DEFAULT_API_URL = os.getenv("CANVAS_API_URL", "http://localhost:8000")


class CanvasClient:
    """Canvas store backed by the REST API.

    Every successful mutation is followed by a fresh ``list_nodes`` read
    that is pushed to subscribers, so views see their own writes.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the canvas server
            timeout: HTTP request timeout in seconds
            transport: Optional transport (e.g. httpx.ASGITransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._subscriptions = Subscriptions()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """Send one request and translate error responses into CanvasError."""
        url = f"{self.base_url}/api{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, json=json, params=params)
        except httpx.RequestError as e:
            raise PersistenceFailure(
                f"Failed to connect to server at {self.base_url}: {e}"
            ) from e

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            if not isinstance(payload, dict):
                payload = {"detail": response.text or response.reason_phrase}
            payload.setdefault("detail", f"HTTP {response.status_code}")
            raise error_from_payload(payload)
        return response.json()

    async def _mutated(self) -> None:
        """Re-read after a committed write and notify subscribers."""
        if not len(self._subscriptions):
            return
        try:
            await self.refresh()
        except CanvasError as e:
            # the write itself succeeded; the next refresh will catch up
            logger.warning("refresh after mutation failed: %s", e)

    async def refresh(self) -> list[Node]:
        """Fetch the node list and push it to subscribers (polling hook)."""
        nodes = await self.list_nodes()
        self._subscriptions.publish(nodes)
        return nodes

    # --- nodes ---

    async def list_nodes(self) -> list[Node]:
        data = await self._request("GET", "/nodes")
        return [Node.model_validate(item) for item in data]

    async def get_node(self, node_id: str) -> Node:
        data = await self._request("GET", f"/nodes/{node_id}")
        return Node.model_validate(data)

    async def create_node(self, data: NodeCreate) -> str:
        created = await self._request("POST", "/nodes", json=data.model_dump(mode="json"))
        await self._mutated()
        return created["node_id"]

    async def update_node_position(self, node_id: str, x: float, y: float) -> None:
        await self._request("PUT", f"/nodes/{node_id}/position", json={"x": x, "y": y})
        await self._mutated()

    async def update_node_fields(self, node_id: str, update: NodeUpdate) -> Node:
        data = await self._request(
            "PATCH",
            f"/nodes/{node_id}",
            json=update.model_dump(mode="json", exclude_unset=True),
        )
        await self._mutated()
        return Node.model_validate(data)

    async def delete_node(self, node_id: str) -> None:
        await self._request("DELETE", f"/nodes/{node_id}")
        await self._mutated()

    # --- connections ---

    async def list_connections(self) -> list[Connection]:
        data = await self._request("GET", "/connections")
        return [Connection.model_validate(item) for item in data]

    async def add_connection(
        self,
        from_id: str,
        to_id: str,
        style: ConnectionCreate | None = None,
    ) -> Connection:
        body = (style or ConnectionCreate()).model_dump(mode="json")
        body.update({"from_id": from_id, "to_id": to_id})
        data = await self._request("POST", "/connections", json=body)
        await self._mutated()
        return Connection.model_validate(data)

    async def update_connection(
        self,
        from_id: str,
        to_id: str,
        update: ConnectionUpdate,
    ) -> Connection:
        data = await self._request(
            "PATCH",
            f"/connections/{from_id}/{to_id}",
            json=update.model_dump(mode="json", exclude_unset=True),
        )
        await self._mutated()
        return Connection.model_validate(data)

    async def remove_connection(self, from_id: str, to_id: str) -> None:
        await self._request("DELETE", f"/connections/{from_id}/{to_id}")
        await self._mutated()

    async def clear_connections(self) -> int:
        data = await self._request("DELETE", "/connections")
        await self._mutated()
        return data["cleared"]

    def subscribe(self, listener: NodeListener) -> Unsubscribe:
        return self._subscriptions.subscribe(listener)
