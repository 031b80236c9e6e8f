"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- store / cache: fresh in-memory collaborators
- remote_file_factory: AsyncMock standing in for media downloads
- make_context: SourceContext bound to an httpx.MockTransport handler
- content_types_payload / components_payload: Content-Type Builder responses
"""

from typing import Callable, Optional
from unittest.mock import AsyncMock

import httpx
import pytest

from strapi_source.collectors.client import StrapiClient
from strapi_source.core.context import SourceContext
from strapi_source.graph.cache import InMemoryCache
from strapi_source.graph.reporter import StructlogReporter
from strapi_source.graph.store import InMemoryNodeStore
from strapi_source.models.nodes import FILE_NODE_TYPE, Node, NodeInternal

API_URL = "https://cms.test"


def make_file_node(url: str) -> Node:
    """File node as the remote-file collaborator would return it."""
    return Node(
        id=f"file-{url.rsplit('/', 1)[-1]}",
        internal=NodeInternal(type=FILE_NODE_TYPE, content_digest="digest"),
        url=url,
    )


@pytest.fixture
def store() -> InMemoryNodeStore:
    return InMemoryNodeStore()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def remote_file_factory() -> AsyncMock:
    """Remote-file collaborator that always succeeds."""

    async def create(*, url, ext, name, auth=None):
        return make_file_node(url)

    return AsyncMock(side_effect=create)


@pytest.fixture
def make_context(store, cache, remote_file_factory) -> Callable[..., SourceContext]:
    """Build a SourceContext whose HTTP traffic goes to ``handler``."""

    def factory(
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        *,
        jwt_token: Optional[str] = None,
        query_limit: int = 100,
    ) -> SourceContext:
        if handler is None:
            handler = lambda request: httpx.Response(404)  # noqa: E731
        client = StrapiClient(API_URL, jwt_token=jwt_token, transport=httpx.MockTransport(handler))
        return SourceContext(
            api_url=API_URL,
            query_limit=query_limit,
            jwt_token=jwt_token,
            client=client,
            cache=cache,
            store=store,
            reporter=StructlogReporter(),
            create_remote_file_node=remote_file_factory,
        )

    return factory


@pytest.fixture
def content_types_payload() -> dict:
    """Content types: an article with a body, a SEO component and an author relation."""
    return {
        "data": [
            {
                "uid": "application::article.article",
                "schema": {
                    "kind": "collectionType",
                    "attributes": {
                        "title": {"type": "string"},
                        "body": {"type": "richtext"},
                        "seo": {"type": "component", "component": "shared.seo"},
                        "author": {"model": "writer", "target": "application::writer.writer"},
                        "cover": {"model": "file", "plugin": "upload"},
                    },
                },
            },
            {
                "uid": "application::writer.writer",
                "schema": {
                    "kind": "collectionType",
                    "attributes": {
                        "name": {"type": "string"},
                        "bio": {"type": "richtext"},
                    },
                },
            },
            {
                "uid": "plugins::users-permissions.user",
                "schema": {
                    "kind": "collectionType",
                    "attributes": {"about": {"type": "richtext"}},
                },
            },
        ]
    }


@pytest.fixture
def components_payload() -> dict:
    return {
        "data": [
            {
                "uid": "shared.seo",
                "schema": {
                    "attributes": {
                        "metaTitle": {"type": "string"},
                        "metaDescription": {"type": "richtext"},
                    },
                },
            },
        ]
    }
