"""
Strapi API access.

- client: async httpx client with bearer-token injection
- cleaning: reserved-key cleanup for fetched entities
- fetch: fetch_data / fetch_metadata pipeline entry points

Example:
    from strapi_source.collectors import fetch_data, fetch_metadata

    path_index = await fetch_metadata(ctx)
    articles = await fetch_data("articles", ctx)
"""

from strapi_source.collectors.cleaning import clean
from strapi_source.collectors.client import StrapiClient, add_authorization_header
from strapi_source.collectors.fetch import fetch_data, fetch_metadata, fetch_schema_maps

__all__ = [
    "StrapiClient",
    "add_authorization_header",
    "clean",
    "fetch_data",
    "fetch_metadata",
    "fetch_schema_maps",
]
