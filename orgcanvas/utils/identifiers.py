"""ID generation and timestamp utilities."""

import uuid
from datetime import datetime, timezone


def generate_node_id() -> str:
    """Generate a unique node ID (UUID4)."""
    return str(uuid.uuid4())


def generate_notification_id() -> str:
    """Generate a short notification ID (12-char hex string)."""
    return uuid.uuid4().hex[:12]


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
