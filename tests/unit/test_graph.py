"""Unit tests for the in-process collaborators."""

import hashlib
from pathlib import Path

import httpx
import pytest
from unittest.mock import MagicMock

from strapi_source.core.exceptions import FatalSourceError
from strapi_source.graph.cache import InMemoryCache
from strapi_source.graph.remote_file import RemoteFileDownloader, safe_extension
from strapi_source.graph.reporter import StructlogReporter
from strapi_source.graph.store import InMemoryNodeStore, create_content_digest, create_node_id
from strapi_source.models.nodes import FILE_NODE_TYPE, Node, NodeInternal


class TestInMemoryCache:
    """Test InMemoryCache."""

    @pytest.mark.asyncio
    async def test_miss_returns_none(self):
        assert await InMemoryCache().get("missing") is None

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        """Mutating a returned value does not change the cache."""
        cache = InMemoryCache()
        await cache.set("key", {"nodeId": "a"})

        value = await cache.get("key")
        value["nodeId"] = "b"

        assert await cache.get("key") == {"nodeId": "a"}

    @pytest.mark.asyncio
    async def test_last_writer_wins(self):
        cache = InMemoryCache()
        await cache.set("key", 1)
        await cache.set("key", 2)

        assert await cache.get("key") == 2
        assert cache.keys() == ["key"]


class TestInMemoryNodeStore:
    """Test InMemoryNodeStore."""

    def test_content_digest_is_md5(self):
        assert create_content_digest("text") == hashlib.md5(b"text").hexdigest()

    def test_content_digest_of_objects_is_key_order_independent(self):
        assert create_content_digest({"a": 1, "b": 2}) == create_content_digest({"b": 2, "a": 1})

    def test_node_id_is_deterministic(self):
        assert create_node_id("seed") == create_node_id("seed")
        assert create_node_id("seed") != create_node_id("other")

    @pytest.mark.asyncio
    async def test_create_and_touch(self):
        store = InMemoryNodeStore()
        node = Node(id="n1", internal=NodeInternal(type="StrapiRichText", content_digest="d"))

        await store.create_node(node)
        store.touch_node("n1")

        assert store.get_node("n1") is node
        assert store.get_nodes_by_type("StrapiRichText") == [node]
        assert store.touched == {"n1"}


class TestRemoteFileDownloader:
    """Test RemoteFileDownloader."""

    @pytest.mark.asyncio
    async def test_downloads_and_creates_file_node(self, tmp_path):
        """The body is written to disk and a File node is created."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, content=b"png-bytes", headers={"content-type": "image/png"})

        store = InMemoryNodeStore()
        downloader = RemoteFileDownloader(store, tmp_path, transport=httpx.MockTransport(handler))

        node = await downloader(
            url="https://cms.test/uploads/a.png",
            ext=".png",
            name="a",
            auth=("user", "pass"),
        )
        await downloader.aclose()

        assert node.internal.type == FILE_NODE_TYPE
        assert node.id == create_node_id("https://cms.test/uploads/a.png")
        assert store.get_node(node.id) is node
        assert node.size == 9
        with open(node.absolute_path, "rb") as f:
            assert f.read() == b"png-bytes"
        assert seen[0].headers["authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_failed_download_returns_none(self, tmp_path):
        """Error statuses are tolerated."""
        store = InMemoryNodeStore()
        downloader = RemoteFileDownloader(
            store,
            tmp_path,
            transport=httpx.MockTransport(lambda request: httpx.Response(404)),
        )

        node = await downloader(url="https://cms.test/uploads/gone.png", ext=".png", name="gone")
        await downloader.aclose()

        assert node is None
        assert store.nodes == {}

    @pytest.mark.asyncio
    async def test_extension_cannot_leave_media_dir(self, tmp_path):
        """Only the trailing alphanumeric suffix of ext is used in the file name."""
        media_dir = tmp_path / "media"
        store = InMemoryNodeStore()
        downloader = RemoteFileDownloader(
            store,
            media_dir,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"x")),
        )

        node = await downloader(url="https://cms.test/uploads/e.png", ext="/../../escaped.png", name="e")
        await downloader.aclose()

        written = Path(node.absolute_path)
        assert written.parent == media_dir.resolve()
        assert written.suffix == ".png"
        assert not (tmp_path / "escaped.png").exists()

    def test_safe_extension(self):
        assert safe_extension(".jpg") == ".jpg"
        assert safe_extension("/../../escaped.png") == ".png"
        assert safe_extension("../../") == ""
        assert safe_extension("") == ""

    @pytest.mark.asyncio
    async def test_write_failure_returns_none(self, tmp_path):
        """A media dir that cannot be created is tolerated like a failed download."""
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")
        store = InMemoryNodeStore()
        downloader = RemoteFileDownloader(
            store,
            blocker,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"x")),
        )

        node = await downloader(url="https://cms.test/uploads/a.png", ext=".png", name="a")
        await downloader.aclose()

        assert node is None
        assert store.nodes == {}


class TestStructlogReporter:
    """Test StructlogReporter."""

    def test_panic_raises_fatal_error(self):
        cause = ValueError("boom")

        with pytest.raises(FatalSourceError, match="stop") as exc_info:
            StructlogReporter().panic("stop", cause)

        assert exc_info.value.__cause__ is cause

    def test_info_logs(self):
        with pytest.MonkeyPatch.context() as mp:
            mock_logger = MagicMock()
            mp.setattr("strapi_source.graph.reporter.logger", mock_logger)

            StructlogReporter().info("hello")

        mock_logger.info.assert_called_once_with("hello")
