"""
Dependency context for the connector.

Every pipeline step receives a SourceContext instead of reaching for
module-level state. The collaborator interfaces are Protocols so the host
environment can supply its own cache, node store, reporter and remote-file
ingestion.

Usage:
    async with SourceContext.from_settings(get_settings()) as ctx:
        index = await fetch_metadata(ctx)
        entities = await fetch_data("articles", ctx)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NoReturn, Optional, Protocol

import structlog

if TYPE_CHECKING:
    from strapi_source.collectors.client import StrapiClient
    from strapi_source.config.settings import Settings
    from strapi_source.models.nodes import Node

logger = structlog.get_logger(__name__)


class Cache(Protocol):
    """Async key/value cache."""

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any) -> None: ...


class NodeStore(Protocol):
    """Content graph sink."""

    async def create_node(self, node: Node) -> None: ...

    def create_node_id(self, seed: str) -> str: ...

    def create_content_digest(self, content: Any) -> str: ...

    def touch_node(self, node_id: str) -> None: ...


class RemoteFileFactory(Protocol):
    """Turns a URL into a file node, or None when the download fails."""

    async def __call__(
        self,
        *,
        url: str,
        ext: str,
        name: str,
        auth: Optional[tuple[str, str]] = None,
    ) -> Optional[Node]: ...


class Reporter(Protocol):
    """Progress and fatal-error reporting."""

    def info(self, message: str) -> None: ...

    def panic(self, message: str, error: BaseException) -> NoReturn: ...


@dataclass
class SourceContext:
    """Everything a pipeline step needs, passed explicitly."""

    api_url: str
    query_limit: int
    client: StrapiClient
    cache: Cache
    store: NodeStore
    reporter: Reporter
    create_remote_file_node: RemoteFileFactory
    jwt_token: Optional[str] = None
    auth: Optional[tuple[str, str]] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        cache: Optional[Cache] = None,
        store: Optional[NodeStore] = None,
        reporter: Optional[Reporter] = None,
    ) -> "SourceContext":
        """
        Wire a context with the bundled in-process collaborators.

        Args:
            settings: Connector settings.
            cache: Cache to use. Defaults to a fresh InMemoryCache.
            store: Node store to use. Defaults to a fresh InMemoryNodeStore.
            reporter: Reporter to use. Defaults to StructlogReporter.
        """
        from strapi_source.collectors.client import StrapiClient
        from strapi_source.graph.cache import InMemoryCache
        from strapi_source.graph.remote_file import RemoteFileDownloader
        from strapi_source.graph.reporter import StructlogReporter
        from strapi_source.graph.store import InMemoryNodeStore

        jwt_token = settings.jwt_token.get_secret_value() if settings.jwt_token else None
        store = store if store is not None else InMemoryNodeStore()

        ctx = cls(
            api_url=settings.api_url,
            query_limit=settings.query_limit,
            jwt_token=jwt_token,
            client=StrapiClient(
                settings.api_url,
                jwt_token=jwt_token,
                timeout=settings.request_timeout,
            ),
            cache=cache if cache is not None else InMemoryCache(),
            store=store,
            reporter=reporter if reporter is not None else StructlogReporter(),
            create_remote_file_node=RemoteFileDownloader(
                store,
                settings.media_dir,
                timeout=settings.request_timeout,
            ),
            auth=settings.media_auth,
        )
        logger.info("source_context_created", api_url=settings.api_url)
        return ctx

    async def __aenter__(self) -> "SourceContext":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP clients owned by this context."""
        await self.client.aclose()
        closer = getattr(self.create_remote_file_node, "aclose", None)
        if closer is not None:
            await closer()
