"""Error taxonomy shared by the stores, the server and the controllers."""


class CanvasError(Exception):
    """Base class for every canvas mutation or lookup failure."""


class NodeNotFound(CanvasError):
    """An id does not resolve to an active node."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class ConnectionNotFound(CanvasError):
    """The pair is not connected in either direction."""

    def __init__(self, from_id: str, to_id: str) -> None:
        super().__init__(f"Connection not found: {from_id} <-> {to_id}")
        self.from_id = from_id
        self.to_id = to_id


class DuplicateConnection(CanvasError):
    """A connection already exists between the pair (either direction)."""

    def __init__(self, from_id: str, to_id: str) -> None:
        super().__init__(f"Connection already exists: {from_id} <-> {to_id}")
        self.from_id = from_id
        self.to_id = to_id


class SelfConnection(CanvasError):
    """A node cannot be connected to itself."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Cannot connect a node to itself: {node_id}")
        self.node_id = node_id


class PersistenceFailure(CanvasError):
    """Generic network or store failure."""


ERRORS_BY_NAME: dict[str, type[CanvasError]] = {
    cls.__name__: cls
    for cls in (
        NodeNotFound,
        ConnectionNotFound,
        DuplicateConnection,
        SelfConnection,
        PersistenceFailure,
    )
}


def error_payload(exc: CanvasError) -> dict:
    """Serialize an error into the JSON body returned by the server."""
    context = {
        key: value
        for key, value in vars(exc).items()
        if key in ("node_id", "from_id", "to_id")
    }
    return {"detail": str(exc), "error": type(exc).__name__, "context": context}


def error_from_payload(payload: dict) -> CanvasError:
    """Rebuild the error described by a server JSON body.

    Unknown or malformed payloads become PersistenceFailure.
    """
    cls = ERRORS_BY_NAME.get(payload.get("error", ""))
    context = payload.get("context") or {}
    if cls is None or cls is PersistenceFailure:
        return PersistenceFailure(payload.get("detail") or "Unknown store error")
    try:
        return cls(**context)
    except TypeError:
        return PersistenceFailure(payload.get("detail") or cls.__name__)
