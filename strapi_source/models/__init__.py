"""Pydantic models for schemas, path indexes and content graph nodes."""

from strapi_source.models.nodes import (
    FILE_NODE_TYPE,
    NODE_REFERENCE_SUFFIX,
    RICH_TEXT_MEDIA_TYPE,
    RICH_TEXT_NODE_TYPE,
    MediaDescriptor,
    Node,
    NodeInternal,
)
from strapi_source.models.schema import (
    APPLICATION_PREFIX,
    AttributeSpec,
    PathIndex,
    SchemaItem,
    SchemaMaps,
)

__all__ = [
    # Schema
    "APPLICATION_PREFIX",
    "AttributeSpec",
    "PathIndex",
    "SchemaItem",
    "SchemaMaps",
    # Nodes
    "FILE_NODE_TYPE",
    "NODE_REFERENCE_SUFFIX",
    "RICH_TEXT_MEDIA_TYPE",
    "RICH_TEXT_NODE_TYPE",
    "MediaDescriptor",
    "Node",
    "NodeInternal",
]
