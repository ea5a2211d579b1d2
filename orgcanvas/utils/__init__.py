"""Utility functions for the canvas engine."""

from orgcanvas.utils.identifiers import (
    generate_node_id,
    generate_notification_id,
    utc_timestamp,
)

__all__ = [
    "generate_node_id",
    "generate_notification_id",
    "utc_timestamp",
]
