"""Async HTTP client for the Lexia backend API."""

import logging
from typing import Any

import httpx

from lexia.config import Settings, get_settings
from lexia.errors import APIRequestError

logger = logging.getLogger(__name__)


class APIClient:
    """
    HTTP client for sending data to the Lexia backend.

    Uses httpx for async HTTP requests. Every call returns the
    response regardless of status code so callers can inspect it;
    only transport-level failures raise (as APIRequestError).
    """

    def __init__(
        self,
        default_headers: dict[str, str] | None = None,
        timeout: httpx.Timeout | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            default_headers: Headers sent with every request
            timeout: Request timeout configuration (defaults from settings)
            settings: Settings instance (defaults to the cached settings)
        """
        config = settings or get_settings()
        self.default_headers: dict[str, str] = {"Content-Type": "application/json"}
        if default_headers:
            self.default_headers.update(default_headers)
        self._timeout = timeout or httpx.Timeout(
            config.http_timeout_read,
            connect=config.http_timeout_connect,
        )
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    def _merge_headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        """Merge per-call headers over the defaults."""
        merged = dict(self.default_headers)
        if headers:
            merged.update(headers)
        return merged

    async def _request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request with common logging and error handling.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: Request URL
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            APIRequestError: If the request could not be built or completed
        """
        client = await self._get_client()
        logger.debug(f"{method} {url}")

        try:
            response = await client.request(method, url, **kwargs)
        except (httpx.RequestError, httpx.InvalidURL, UnicodeEncodeError) as e:
            logger.error(f"{method} {url} failed: {e}")
            raise APIRequestError(method, url, e) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    async def post(
        self,
        url: str,
        data: Any,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a POST request with a JSON body."""
        return await self._request(
            "POST", url, json=data, headers=self._merge_headers(headers)
        )

    async def put(
        self,
        url: str,
        data: Any,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a PUT request with a JSON body."""
        return await self._request(
            "PUT", url, json=data, headers=self._merge_headers(headers)
        )

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a GET request."""
        return await self._request(
            "GET", url, params=params, headers=self._merge_headers(headers)
        )

    async def delete(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a DELETE request."""
        return await self._request(
            "DELETE", url, headers=self._merge_headers(headers)
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
            logger.info("API client closed")

    async def __aenter__(self) -> "APIClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
