"""
Source pipeline.

Runs rich-text discovery once, then for every configured content type
fetches, normalizes and turns each record into an entity node.

Example:
    configure_logging(settings.log_level)
    async with SourceContext.from_settings(settings) as ctx:
        nodes = await source_nodes(ctx, settings.content_types)
"""

import re
from typing import Any, Optional

import structlog

from strapi_source.collectors.fetch import fetch_data, fetch_metadata
from strapi_source.core.context import SourceContext
from strapi_source.core.tasks import gather_or_cancel
from strapi_source.models.nodes import Node, NodeInternal
from strapi_source.models.schema import PathIndex
from strapi_source.normalization.extractor import download_media_files

logger = structlog.get_logger(__name__)

NODE_TYPE_PREFIX = "Strapi"

# Node fields an entity may not overwrite; they are kept as strapi_<name>.
RESERVED_NODE_FIELDS = ("id", "parent", "children", "internal", "fields")


def node_type_name(content_type: str) -> str:
    """``blog-post`` -> ``StrapiBlogPost``."""
    parts = [part for part in re.split(r"[^0-9A-Za-z]+", content_type) if part]
    return NODE_TYPE_PREFIX + "".join(part[0].upper() + part[1:] for part in parts)


def build_entity_node(content_type: str, entity: dict[str, Any], ctx: SourceContext) -> Node:
    """Wrap a normalized entity in a content graph node."""
    fields = {
        (f"strapi_{key}" if key in RESERVED_NODE_FIELDS else key): value
        for key, value in entity.items()
    }
    return Node(
        id=ctx.store.create_node_id(f"{content_type}-{entity.get('id')}"),
        parent=None,
        children=[],
        internal=NodeInternal(
            type=node_type_name(content_type),
            content_digest=ctx.store.create_content_digest(entity),
        ),
        **fields,
    )


async def source_content_type(
    content_type: str,
    path_index: PathIndex,
    ctx: SourceContext,
) -> list[Node]:
    """Fetch, normalize and create the nodes of one content type."""
    entities = await fetch_data(content_type, ctx)
    normalized = await download_media_files(content_type, path_index, entities, ctx)

    nodes = []
    for entity in normalized:
        if not isinstance(entity, dict):
            logger.warning("entity_skipped", content_type=content_type, value_type=type(entity).__name__)
            continue
        node = build_entity_node(content_type, entity, ctx)
        await ctx.store.create_node(node)
        nodes.append(node)

    logger.info("content_type_sourced", content_type=content_type, nodes=len(nodes))
    return nodes


async def source_nodes(
    ctx: SourceContext,
    content_types: list[str],
    path_index: Optional[PathIndex] = None,
) -> dict[str, list[Node]]:
    """Source every content type.

    Args:
        ctx: Source context.
        content_types: Endpoints to fetch, e.g. ["article", "category"].
        path_index: Precomputed discovery result. Fetched when omitted.

    Returns:
        Created entity nodes per content type.

    Raises:
        FatalSourceError: When any content type fails; the other content
            types are cancelled before it propagates.
    """
    if path_index is None:
        path_index = await fetch_metadata(ctx)

    results = await gather_or_cancel(
        *(source_content_type(content_type, path_index, ctx) for content_type in content_types)
    )
    return dict(zip(content_types, results))
