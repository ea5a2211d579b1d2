"""API routes for connections between nodes."""

from fastapi import APIRouter

from orgcanvas.errors import ConnectionNotFound
from orgcanvas.models.connection import Connection, ConnectionCreate, ConnectionUpdate
from server.connection_db import (
    clear_connections as db_clear_connections,
    delete_connection as db_delete_connection,
    insert_connection as db_insert_connection,
    list_connections as db_list_connections,
    update_connection as db_update_connection,
)

router = APIRouter()


class AddConnectionRequest(ConnectionCreate):
    """request body for connecting two nodes."""

    from_id: str
    to_id: str


@router.get("/connections")
def list_connections() -> list[Connection]:
    """list every connection between two active nodes."""
    return db_list_connections()


@router.post("/connections", status_code=201)
def add_connection(request: AddConnectionRequest) -> Connection:
    """connect two nodes.

    Rejected with 409 when the pair is already connected in either
    direction and with 422 for a node connected to itself.
    """
    style = ConnectionCreate.model_validate(
        request.model_dump(exclude={"from_id", "to_id"})
    )
    return db_insert_connection(request.from_id, request.to_id, style)


@router.patch("/connections/{from_id}/{to_id}")
def update_connection(from_id: str, to_id: str, request: ConnectionUpdate) -> Connection:
    return db_update_connection(from_id, to_id, request)


@router.delete("/connections/{from_id}/{to_id}")
def delete_connection(from_id: str, to_id: str) -> dict:
    """remove the connection between the pair, whichever side stores it."""
    if not db_delete_connection(from_id, to_id):
        raise ConnectionNotFound(from_id, to_id)
    return {"deleted": [from_id, to_id]}


@router.delete("/connections")
def clear_connections() -> dict:
    """remove every connection on the canvas."""
    return {"cleared": db_clear_connections()}
