"""
Core infrastructure modules for strapi-source.

Provides common utilities used across the connector:
- exceptions: Standardized exception hierarchy
- context: Explicit dependency context and collaborator protocols
- logging: structlog configuration
- tasks: fail-fast concurrent execution
"""

from strapi_source.core.exceptions import (
    StrapiSourceError,
    FatalSourceError,
    StrapiRequestError,
    StrapiAuthError,
    StrapiNotFoundError,
    StrapiTimeoutError,
    StrapiResponseError,
)

from strapi_source.core.context import (
    Cache,
    NodeStore,
    RemoteFileFactory,
    Reporter,
    SourceContext,
)

from strapi_source.core.logging import configure_logging

from strapi_source.core.tasks import gather_or_cancel

__all__ = [
    # Exceptions
    "StrapiSourceError",
    "FatalSourceError",
    "StrapiRequestError",
    "StrapiAuthError",
    "StrapiNotFoundError",
    "StrapiTimeoutError",
    "StrapiResponseError",
    # Context
    "Cache",
    "NodeStore",
    "RemoteFileFactory",
    "Reporter",
    "SourceContext",
    # Logging
    "configure_logging",
    # Tasks
    "gather_or_cancel",
]
