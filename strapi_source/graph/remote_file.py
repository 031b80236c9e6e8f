"""Remote file ingestion: download a media URL and create a File node.

Failures are best-effort: one broken image must not stop a content sync,
so every download or write error is logged and turned into a None result.
"""

import asyncio
import hashlib
import re
from pathlib import Path
from typing import Optional

import httpx
import structlog

from strapi_source.core.context import NodeStore
from strapi_source.models.nodes import FILE_NODE_TYPE, Node, NodeInternal

logger = structlog.get_logger(__name__)

_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z0-9]+$")


def safe_extension(ext: str) -> str:
    """Trailing ``.[A-Za-z0-9]+`` suffix of ``ext``, or "" when there is none."""
    match = _EXTENSION_PATTERN.search(ext or "")
    return match.group(0) if match else ""


class RemoteFileDownloader:
    """Downloads media into a local directory.

    Example:
        downloader = RemoteFileDownloader(store, Path(".cache/strapi-media"))
        node = await downloader(url="https://cms.example.com/uploads/a.png", ext=".png", name="a")
        await downloader.aclose()
    """

    def __init__(
        self,
        store: NodeStore,
        media_dir: Path,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the downloader.

        Args:
            store: Node store the File nodes are created in.
            media_dir: Directory downloaded files are written to.
            timeout: Download timeout in seconds.
            transport: Custom httpx transport (used by tests).
        """
        self._store = store
        self._media_dir = Path(media_dir)
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __call__(
        self,
        *,
        url: str,
        ext: str,
        name: str,
        auth: Optional[tuple[str, str]] = None,
    ) -> Optional[Node]:
        """Download ``url`` and create a File node for it.

        Args:
            url: Absolute media URL.
            ext: File extension including the dot, e.g. ".png".
            name: Original file name without extension.
            auth: Optional basic auth pair.

        Returns:
            The created File node, or None when the download or the file
            write failed.
        """
        client = await self._ensure_client()

        try:
            response = await client.get(url, auth=auth)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("remote_file_download_failed", url=url, error=str(e))
            return None

        content_digest = self._store.create_content_digest(url)
        path = self._media_dir / f"{content_digest}{safe_extension(ext)}"

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._write, path, response.content)
        except OSError as e:
            logger.warning("remote_file_write_failed", url=url, path=str(path), error=str(e))
            return None

        node = Node(
            id=self._store.create_node_id(url),
            parent=None,
            children=[],
            internal=NodeInternal(
                type=FILE_NODE_TYPE,
                content_digest=hashlib.md5(response.content).hexdigest(),
                media_type=response.headers.get("content-type"),
            ),
            url=url,
            name=name,
            ext=ext,
            absolute_path=str(path.resolve()),
            size=len(response.content),
        )
        await self._store.create_node(node)
        logger.info("remote_file_created", url=url, node_id=node.id, size=node.size)
        return node

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
