"""Centrifugo publishing client for production streaming."""

import logging
from typing import Any

import httpx

from lexia.config import Settings, get_settings
from lexia.errors import CentrifugoError
from lexia.streaming.base import StreamClient

logger = logging.getLogger(__name__)


class CentrifugoClient(StreamClient):
    """
    Publishes stream messages through the Centrifugo server HTTP API.

    Every failure (missing configuration, network error, non-2xx
    status, or an error object in the reply) raises CentrifugoError;
    nothing is swallowed here.
    """

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: httpx.Timeout | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the Centrifugo client.

        Args:
            url: Centrifugo API URL (defaults to CENTRIFUGO_URL)
            api_key: Centrifugo API key (defaults to CENTRIFUGO_API_KEY)
            timeout: Request timeout configuration
            settings: Settings instance (defaults to the cached settings)
        """
        config = settings or get_settings()
        self.url = url or config.centrifugo_url
        self.api_key = api_key or config.centrifugo_api_key
        self._timeout = timeout or httpx.Timeout(
            config.http_timeout_read,
            connect=config.http_timeout_connect,
        )
        self._client: httpx.AsyncClient | None = None

        if not self.url or not self.api_key:
            logger.warning(
                "Centrifugo URL or API key not configured; "
                "publishing will fail until update_config() is called"
            )

    @property
    def name(self) -> str:
        return "centrifugo"

    def update_config(self, url: str, api_key: str) -> None:
        """
        Update the Centrifugo configuration dynamically.

        Args:
            url: New Centrifugo API URL
            api_key: New Centrifugo API key
        """
        self.url = url
        self.api_key = api_key
        logger.debug(f"Centrifugo config updated - URL: {url}")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send(self, channel: str, data: dict[str, Any]) -> None:
        """
        Publish data to a Centrifugo channel.

        Args:
            channel: Channel name to publish to
            data: Message payload

        Raises:
            CentrifugoError: If the message was not accepted
        """
        if not self.url or not self.api_key:
            raise CentrifugoError("Centrifugo URL and API key must be configured")

        body = {
            "method": "publish",
            "params": {"channel": channel, "data": data},
        }
        headers = {
            "Authorization": f"apikey {self.api_key}",
            "Content-Type": "application/json",
        }

        client = await self._get_client()
        try:
            response = await client.post(self.url, json=body, headers=headers)
        except httpx.RequestError as e:
            raise CentrifugoError(f"Failed to reach Centrifugo at {self.url}: {e}") from e

        if not response.is_success:
            raise CentrifugoError(
                f"Centrifugo publish to {channel} failed: {response.text}",
                status_code=response.status_code,
            )

        try:
            reply = response.json()
        except ValueError:
            reply = {}
        if isinstance(reply, dict) and reply.get("error"):
            error = reply["error"]
            raise CentrifugoError(
                f"Centrifugo rejected publish to {channel}: {error}",
                status_code=response.status_code,
            )

        logger.debug(f"Published to Centrifugo channel {channel}")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
