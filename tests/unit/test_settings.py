"""Unit tests for settings and context wiring."""

import logging
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from strapi_source.collectors.client import StrapiClient
from strapi_source.config.settings import Settings, get_settings
from strapi_source.core.context import SourceContext
from strapi_source.core.logging import configure_logging
from strapi_source.graph.cache import InMemoryCache
from strapi_source.graph.remote_file import RemoteFileDownloader
from strapi_source.graph.reporter import StructlogReporter
from strapi_source.graph.store import InMemoryNodeStore


@pytest.fixture
def env(monkeypatch):
    """Minimal environment for Settings."""
    monkeypatch.setenv("STRAPI_API_URL", "https://cms.test/")
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestSettings:
    """Test Settings loading."""

    def test_defaults(self, env):
        settings = Settings(_env_file=None)

        assert settings.api_url == "https://cms.test"
        assert settings.query_limit == 100
        assert settings.jwt_token is None
        assert settings.content_types == []
        assert settings.media_dir == Path(".cache/strapi-media")
        assert settings.media_auth is None

    def test_reads_prefixed_environment(self, env):
        env.setenv("STRAPI_QUERY_LIMIT", "25")
        env.setenv("STRAPI_JWT_TOKEN", "secret")
        env.setenv("STRAPI_CONTENT_TYPES", '["articles", "writers"]')
        env.setenv("STRAPI_HTACCESS_USER", "user")
        env.setenv("STRAPI_HTACCESS_PASS", "pass")

        settings = Settings(_env_file=None)

        assert settings.query_limit == 25
        assert settings.jwt_token.get_secret_value() == "secret"
        assert settings.content_types == ["articles", "writers"]
        assert settings.media_auth == ("user", "pass")

    def test_query_limit_must_be_positive(self, env):
        env.setenv("STRAPI_QUERY_LIMIT", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_api_url_is_required(self, monkeypatch):
        monkeypatch.delenv("STRAPI_API_URL", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self, env):
        assert get_settings() is get_settings()


class TestSourceContext:
    """Test SourceContext.from_settings."""

    @pytest.mark.asyncio
    async def test_wires_default_collaborators(self, env):
        env.setenv("STRAPI_JWT_TOKEN", "secret")
        settings = Settings(_env_file=None)

        async with SourceContext.from_settings(settings) as ctx:
            assert ctx.api_url == "https://cms.test"
            assert ctx.jwt_token == "secret"
            assert isinstance(ctx.client, StrapiClient)
            assert isinstance(ctx.cache, InMemoryCache)
            assert isinstance(ctx.store, InMemoryNodeStore)
            assert isinstance(ctx.reporter, StructlogReporter)
            assert isinstance(ctx.create_remote_file_node, RemoteFileDownloader)

    @pytest.mark.asyncio
    async def test_uses_given_collaborators(self, env):
        settings = Settings(_env_file=None)
        cache, store = InMemoryCache(), InMemoryNodeStore()

        async with SourceContext.from_settings(settings, cache=cache, store=store) as ctx:
            assert ctx.cache is cache
            assert ctx.store is store


class TestConfigureLogging:
    """Test structlog setup."""

    def test_configures_stdlib_backed_structlog(self):
        root = logging.getLogger()
        previous_level, previous_handlers = root.level, list(root.handlers)
        root.handlers = []
        try:
            configure_logging("DEBUG")

            assert root.level == logging.DEBUG
            assert structlog.is_configured()
            assert structlog.get_config()["logger_factory"].__class__ is structlog.stdlib.LoggerFactory
        finally:
            structlog.reset_defaults()
            root.handlers = previous_handlers
            root.setLevel(previous_level)
