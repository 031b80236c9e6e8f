"""Entity and schema fetching.

Both operations are fatal on failure: without the primary content or the
schema there is nothing to build, so errors go to ``reporter.panic``.
"""

from typing import Any

import structlog

from strapi_source.collectors.cleaning import clean
from strapi_source.core.context import SourceContext
from strapi_source.core.exceptions import StrapiSourceError
from strapi_source.core.tasks import gather_or_cancel
from strapi_source.discovery.rich_text_paths import build_path_index
from strapi_source.models.schema import PathIndex, SchemaMaps

logger = structlog.get_logger(__name__)

CONTENT_TYPE_BUILDER = "content-type-builder"


async def fetch_data(endpoint: str, ctx: SourceContext) -> list[Any]:
    """Fetch all entities of one endpoint and clean their keys.

    Args:
        endpoint: Endpoint relative to the API URL, e.g. "articles".
        ctx: Source context.

    Returns:
        Cleaned entities in API order. A single-object response is wrapped
        in a list.
    """
    url = f"{ctx.api_url}/{endpoint}?_limit={ctx.query_limit}"
    ctx.reporter.info(f"Starting to fetch data from Strapi - {url}")

    try:
        data = await ctx.client.get_json(endpoint, params={"_limit": ctx.query_limit})
    except StrapiSourceError as e:
        ctx.reporter.panic("Failed to fetch data from Strapi", e)

    entities = data if isinstance(data, list) else [data]
    logger.info("strapi_entities_fetched", endpoint=endpoint, count=len(entities))
    return [clean(entity) for entity in entities]


async def fetch_schema_maps(ctx: SourceContext) -> SchemaMaps:
    """Fetch content types and components concurrently."""
    types, components = await gather_or_cancel(
        ctx.client.get_json(f"{CONTENT_TYPE_BUILDER}/content-types"),
        ctx.client.get_json(f"{CONTENT_TYPE_BUILDER}/components"),
    )
    return SchemaMaps.from_api(types, components)


async def fetch_metadata(ctx: SourceContext) -> PathIndex:
    """Fetch the schema and discover every rich-text path.

    Returns:
        PathIndex used by download_media_files.
    """
    ctx.reporter.info(f"Starting to fetch metadata from Strapi - {ctx.api_url}/{CONTENT_TYPE_BUILDER}")

    try:
        maps = await fetch_schema_maps(ctx)
    except (StrapiSourceError, KeyError, TypeError, AttributeError, ValueError) as e:
        ctx.reporter.panic("Failed to fetch metadata from Strapi", e)

    return build_path_index(maps)
