"""In-process implementations of the cache, node store, reporter and remote-file collaborators."""

from strapi_source.graph.cache import InMemoryCache
from strapi_source.graph.remote_file import RemoteFileDownloader
from strapi_source.graph.reporter import StructlogReporter
from strapi_source.graph.store import InMemoryNodeStore, create_content_digest, create_node_id

__all__ = [
    "InMemoryCache",
    "InMemoryNodeStore",
    "RemoteFileDownloader",
    "StructlogReporter",
    "create_content_digest",
    "create_node_id",
]
