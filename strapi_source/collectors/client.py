"""Async HTTP client for the Strapi REST API.

Wraps httpx.AsyncClient with bearer-token injection and maps transport and
status failures onto the connector's exception hierarchy. There is no
retry or rate limiting at this layer.
"""

from typing import Any, Optional

import httpx
import structlog

from strapi_source.core.exceptions import (
    StrapiAuthError,
    StrapiNotFoundError,
    StrapiResponseError,
    StrapiTimeoutError,
)

logger = structlog.get_logger(__name__)


def add_authorization_header(headers: dict[str, str], token: Optional[str]) -> dict[str, str]:
    """Set ``Authorization: Bearer <token>`` when a token is configured."""
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class StrapiClient:
    """Async JSON client bound to one Strapi base URL.

    Example:
        async with StrapiClient("https://cms.example.com", jwt_token="...") as client:
            articles = await client.get_json("articles", params={"_limit": 100})
    """

    def __init__(
        self,
        api_url: str,
        jwt_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            api_url: Base URL of the Strapi instance.
            jwt_token: Optional bearer token.
            timeout: Request timeout in seconds.
            transport: Custom httpx transport (used by tests).
        """
        self._api_url = api_url.rstrip("/")
        self._jwt_token = jwt_token
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "StrapiClient":
        """Enter async context manager."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers=add_authorization_header({"Accept": "application/json"}, self._jwt_token),
                transport=self._transport,
            )
        return self._client

    def url_for(self, endpoint: str) -> str:
        return f"{self._api_url}/{endpoint.lstrip('/')}"

    async def get_json(
        self,
        endpoint: str,
        *,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """GET an endpoint and decode the JSON body.

        Args:
            endpoint: Path relative to the API base URL.
            params: Query string parameters.

        Returns:
            Decoded JSON value (object or array).

        Raises:
            StrapiAuthError: On 401/403.
            StrapiNotFoundError: On 404.
            StrapiTimeoutError: When the request times out.
            StrapiResponseError: On other error statuses, transport failures
                or an undecodable body.
        """
        client = await self._ensure_client()
        url = self.url_for(endpoint)

        try:
            response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.error("strapi_timeout", endpoint=endpoint, error=str(e))
            raise StrapiTimeoutError(
                endpoint,
                f"Request timeout: {e}",
                {"url": url},
            ) from e
        except httpx.RequestError as e:
            logger.error("strapi_request_error", endpoint=endpoint, error=str(e))
            raise StrapiResponseError(
                endpoint,
                f"Request failed: {e}",
                {"url": url, "original_error": str(e)},
            ) from e

        if response.status_code in (401, 403):
            raise StrapiAuthError(
                endpoint,
                "Strapi rejected the credentials",
                {"url": url, "status_code": response.status_code},
            )
        elif response.status_code == 404:
            raise StrapiNotFoundError(
                endpoint,
                f"Resource not found: {endpoint}",
                {"url": url},
            )
        elif response.status_code >= 400:
            logger.error(
                "strapi_api_error",
                status_code=response.status_code,
                endpoint=endpoint,
            )
            raise StrapiResponseError(
                endpoint,
                f"API error {response.status_code}",
                {"url": url, "status_code": response.status_code},
            )

        try:
            return response.json()
        except ValueError as e:
            raise StrapiResponseError(
                endpoint,
                f"Malformed JSON response: {e}",
                {"url": url},
            ) from e
