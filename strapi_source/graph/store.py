"""In-memory content graph.

Creates nodes, derives stable node ids and content digests, and records
which nodes were touched (reused from an earlier build) so stale nodes can
be told apart.
"""

import hashlib
import json
import uuid
from typing import Any, Optional

import structlog

from strapi_source.models.nodes import Node

logger = structlog.get_logger(__name__)

# Namespace for deterministic node ids; the same seed always yields the same id.
NODE_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "strapi-source")


def create_content_digest(content: Any) -> str:
    """MD5 hex digest of a string, or of the canonical JSON of any other value."""
    if not isinstance(content, str):
        content = json.dumps(content, sort_keys=True, default=str)
    return hashlib.md5(content.encode("utf-8")).hexdigest()


def create_node_id(seed: str) -> str:
    return str(uuid.uuid5(NODE_ID_NAMESPACE, seed))


class InMemoryNodeStore:
    """Node sink that keeps every node in a dict keyed by id."""

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._touched: set[str] = set()

    async def create_node(self, node: Node) -> None:
        """Add or replace a node."""
        if node.id in self._nodes:
            logger.debug("node_replaced", node_id=node.id, type=node.internal.type)
        self._nodes[node.id] = node

    def create_node_id(self, seed: str) -> str:
        return create_node_id(seed)

    def create_content_digest(self, content: Any) -> str:
        return create_content_digest(content)

    def touch_node(self, node_id: str) -> None:
        """Mark a node as still referenced."""
        self._touched.add(node_id)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def get_nodes_by_type(self, node_type: str) -> list[Node]:
        return [node for node in self._nodes.values() if node.internal.type == node_type]

    @property
    def nodes(self) -> dict[str, Node]:
        return dict(self._nodes)

    @property
    def touched(self) -> set[str]:
        return set(self._touched)
