"""Entity normalization: media and rich-text extraction.

Walks fetched entities and replaces

- media descriptors with a copy carrying ``localFile___NODE``, pointing at
  a downloaded file node, and
- rich-text fields registered in the PathIndex with ``<field>___NODE``,
  pointing at a ``StrapiRichText`` node.

Both kinds of node are cached by a content-addressed key so unchanged media
is not downloaded again and identical text maps to one node. Normalization
returns new trees; the fetched entities are left untouched.
"""

import json
from typing import Any, Optional

import structlog

from strapi_source.core.context import SourceContext
from strapi_source.core.tasks import gather_or_cancel
from strapi_source.models.nodes import (
    NODE_REFERENCE_SUFFIX,
    RICH_TEXT_MEDIA_TYPE,
    RICH_TEXT_NODE_TYPE,
    MediaDescriptor,
    Node,
    NodeInternal,
)
from strapi_source.models.schema import PathIndex

logger = structlog.get_logger(__name__)

MEDIA_CACHE_PREFIX = "strapi-media-"
RICH_TEXT_CACHE_PREFIX = "strapi-richtext-"
LOCAL_FILE_FIELD = f"localFile{NODE_REFERENCE_SUFFIX}"


def media_cache_key(media_id: Any) -> str:
    return f"{MEDIA_CACHE_PREFIX}{media_id}"


def rich_text_cache_key(content_digest: str) -> str:
    return f"{RICH_TEXT_CACHE_PREFIX}{content_digest}"


def resolve_media_url(url: str, api_url: str) -> str:
    """Prefix relative upload URLs with the API base URL."""
    return url if url.startswith("http") else f"{api_url}{url}"


def rich_text_content(value: Any) -> str:
    """Text stored in a rich-text node for a field value.

    Empty scalars (None, False, 0, "") become an empty string; other
    non-string values are stored as JSON.
    """
    if not isinstance(value, (list, dict)) and not value:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


async def extract_image(image: dict[str, Any], ctx: SourceContext) -> dict[str, Any]:
    """Attach a file node to a media descriptor.

    A cached file node is reused while the descriptor's ``updatedAt`` is
    unchanged. A failed download leaves the reference out.

    Returns:
        A copy of ``image`` with ``localFile___NODE`` when a file node exists.
    """
    media = MediaDescriptor.from_entity(image)
    cache_key = media_cache_key(media.id)
    file_node_id: Optional[str] = None

    cached = await ctx.cache.get(cache_key)
    if cached and cached.get("updatedAt") == media.updated_at:
        file_node_id = cached.get("fileNodeID")
        if file_node_id:
            ctx.store.touch_node(file_node_id)
            logger.debug("media_cache_hit", media_id=media.id, node_id=file_node_id)

    if not file_node_id:
        source_url = resolve_media_url(media.url, ctx.api_url)
        file_node = await ctx.create_remote_file_node(
            url=source_url,
            ext=media.ext,
            name=media.name,
            auth=ctx.auth,
        )

        if file_node is not None:
            file_node_id = file_node.id
            await ctx.cache.set(
                cache_key,
                {"fileNodeID": file_node_id, "updatedAt": media.updated_at},
            )
        else:
            logger.warning("media_download_skipped", media_id=media.id, url=source_url)

    result = dict(image)
    if file_node_id:
        result[LOCAL_FILE_FIELD] = file_node_id
    return result


async def extract_rich_text(value: Any, ctx: SourceContext, node_id: str) -> str:
    """Create (or reuse) the rich-text node for a field value.

    Args:
        value: Current field value.
        ctx: Source context.
        node_id: Position of the field inside its entity, for logging.

    Returns:
        Id of the rich-text node.
    """
    content = rich_text_content(value)
    content_digest = ctx.store.create_content_digest(content)
    cache_key = rich_text_cache_key(content_digest)

    cached = await ctx.cache.get(cache_key)
    if cached and cached.get("nodeId"):
        rich_text_id = cached["nodeId"]
        ctx.store.touch_node(rich_text_id)
        logger.debug("rich_text_cache_hit", field=node_id, node_id=rich_text_id)
        return rich_text_id

    node = Node(
        id=ctx.store.create_node_id(content_digest),
        parent=None,
        children=[],
        internal=NodeInternal(
            content=content,
            type=RICH_TEXT_NODE_TYPE,
            media_type=RICH_TEXT_MEDIA_TYPE,
            content_digest=content_digest,
        ),
    )
    await ctx.store.create_node(node)
    await ctx.cache.set(cache_key, {"nodeId": node.id})
    logger.debug("rich_text_node_created", field=node_id, node_id=node.id)
    return node.id


async def extract_fields(
    path_index: PathIndex,
    value: Any,
    ctx: SourceContext,
    path: str,
    node_id: Optional[str] = None,
) -> Any:
    """Normalize one JSON value found at a dotted ``path`` of an entity.

    Sequence elements share their parent's path; only ``node_id`` records
    the index. Keys and elements of one value are processed in order.

    Returns:
        The normalized value.
    """
    if node_id is None:
        node_id = path

    if MediaDescriptor.matches(value):
        return await extract_image(value, ctx)

    if isinstance(value, list):
        elements = []
        for i, element in enumerate(value):
            if path_index.is_rich_text(path):
                elements.append(await extract_rich_text(element, ctx, node_id))
                continue
            elements.append(await extract_fields(path_index, element, ctx, path, f"{node_id}.{i}"))
        return elements

    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            new_path = f"{path}.{key}"

            if path_index.is_rich_text(new_path):
                result[f"{key}{NODE_REFERENCE_SUFFIX}"] = await extract_rich_text(
                    item, ctx, f"{node_id}.{key}"
                )
                continue

            result[key] = await extract_fields(path_index, item, ctx, new_path, f"{node_id}.{key}")
        return result

    return value


async def download_media_files(
    type_name: str,
    path_index: PathIndex,
    entities: list[Any],
    ctx: SourceContext,
) -> list[Any]:
    """Normalize every entity of one content type concurrently.

    Args:
        type_name: Content type name; root of every dotted path.
        path_index: Result of rich-text path discovery.
        entities: Cleaned entities as returned by fetch_data.
        ctx: Source context.

    Returns:
        Normalized entities, in input order.
    """
    logger.info("normalizing_entities", type_name=type_name, count=len(entities))
    return await gather_or_cancel(
        *(
            extract_fields(path_index, entity, ctx, type_name, f"{type_name}.{i}")
            for i, entity in enumerate(entities)
        )
    )
