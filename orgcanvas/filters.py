"""Filtering and sorting of node lists.

One immutable filter configuration per page and a pure function applying
it, instead of a dozen independent dropdown flags.
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, Field

from orgcanvas.models.node import Node


class NodeSortKey(str, Enum):
    """sortable node attributes."""

    name = "name"
    role = "role"
    created_at = "created_at"


class NodeFilter(BaseModel):
    """an immutable filter configuration for node lists."""

    model_config = {"frozen": True}

    search: str | None = None  # case-insensitive substring
    roles: frozenset[str] = Field(default_factory=frozenset)
    include_inactive: bool = False
    sort_by: NodeSortKey | None = None
    descending: bool = False


def _haystack(node: Node) -> str:
    parts = [node.name, node.role or "", node.note or "", *node.description_lines]
    return "\n".join(parts).lower()


def _matches(node: Node, config: NodeFilter) -> bool:
    if not node.is_active and not config.include_inactive:
        return False
    if config.roles and node.role not in config.roles:
        return False
    if config.search and config.search.strip().lower() not in _haystack(node):
        return False
    return True


def _sort_value(node: Node, key: NodeSortKey) -> str:
    if key is NodeSortKey.role:
        return (node.role or "").lower()
    if key is NodeSortKey.created_at:
        return node.created_at
    return node.name.lower()


def apply_filters(nodes: Iterable[Node], config: NodeFilter | None = None) -> list[Node]:
    """return the nodes matching ``config`` in the requested order.

    Without ``sort_by`` the input order is kept.
    """
    config = config or NodeFilter()
    result = [node for node in nodes if _matches(node, config)]
    if config.sort_by is not None:
        result.sort(key=lambda n: _sort_value(n, config.sort_by), reverse=config.descending)
    return result
