"""
Core exception hierarchy for strapi-source.

Distinguishes fatal fetch failures (the build cannot continue without the
primary content) from everything else. Best-effort media failures are not
exceptions at all; the remote-file collaborator returns None instead.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class StrapiSourceError(Exception):
    """Base exception for all strapi-source errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class FatalSourceError(StrapiSourceError):
    """
    Raised by the reporter when a pipeline step cannot continue.

    The underlying cause is chained as ``__cause__``.
    """

    pass


# =============================================================================
# Request Errors
# =============================================================================


class StrapiRequestError(StrapiSourceError):
    """Base exception for failed requests against the Strapi API."""

    def __init__(
        self,
        endpoint: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.endpoint = endpoint
        super().__init__(f"[{endpoint}] {message}", details)


class StrapiAuthError(StrapiRequestError):
    """Raised when Strapi rejects the bearer token (401/403)."""

    pass


class StrapiNotFoundError(StrapiRequestError):
    """Raised when the requested endpoint does not exist."""

    pass


class StrapiTimeoutError(StrapiRequestError):
    """Raised when a request times out."""

    pass


class StrapiResponseError(StrapiRequestError):
    """Raised on any other error status or an undecodable response body."""

    pass
