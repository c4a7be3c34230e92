"""
Unified Lexia handler.

Single interface for streaming AI responses to the Lexia platform.
Supports production (Centrifugo) and dev mode (in-memory streaming);
the transport is picked once, at construction.
"""

from __future__ import annotations

import logging
from typing import Any

from lexia.config import Settings, get_settings
from lexia.errors import APIRequestError
from lexia.http.client import APIClient
from lexia.models import ChatMessage, UsageInfo
from lexia.response import (
    create_complete_response,
    create_error_response,
    default_usage,
    prompt_tokens_of,
)
from lexia.streaming.base import StreamClient
from lexia.streaming.factory import create_stream_client, resolve_dev_mode
from lexia.streaming.store import ChannelStore

logger = logging.getLogger(__name__)


class LexiaHandler:
    """
    Streams a response to Lexia and persists the outcome.

    Lifecycle per response: stream_chunk() zero or more times, then
    exactly one of complete_response() or send_error(). The terminal
    calls notify the stream first and then POST a record to the
    backend URL from the request, if one was given. Persistence is
    best-effort: failures are logged, never raised. Transport failures
    in production mode do propagate, and skip persistence.
    """

    def __init__(
        self,
        dev_mode: bool | None = None,
        settings: Settings | None = None,
        store: ChannelStore | None = None,
        stream_client: StreamClient | None = None,
        api_client: APIClient | None = None,
    ) -> None:
        """
        Initialize the handler.

        Args:
            dev_mode: True for the in-memory transport, False for Centrifugo,
                None to read LEXIA_DEV_MODE
            settings: Settings instance (defaults to the cached settings)
            store: Channel registry used by the dev transport
            stream_client: Prebuilt transport (skips transport selection)
            api_client: Prebuilt backend API client
        """
        self.settings = settings or get_settings()
        self.dev_mode = resolve_dev_mode(dev_mode, self.settings)
        self.stream_client = stream_client or create_stream_client(
            self.dev_mode, settings=self.settings, store=store
        )
        self.api = api_client or APIClient(settings=self.settings)

        if self.dev_mode:
            logger.info("LexiaHandler initialized in DEV MODE (no Centrifugo)")
        else:
            logger.info("LexiaHandler initialized in PRODUCTION MODE (Centrifugo)")

    @staticmethod
    def _as_message(data: ChatMessage | dict[str, Any]) -> ChatMessage:
        if isinstance(data, ChatMessage):
            return data
        return ChatMessage.model_validate(data)

    def update_centrifugo_config(
        self,
        stream_url: str | None,
        stream_token: str | None,
    ) -> None:
        """
        Point the Centrifugo client at request-supplied credentials.

        Only applies in production mode, and only when both values are
        present; otherwise the current configuration is kept.
        """
        if self.dev_mode:
            logger.info("Dev mode active - skipping Centrifugo config update")
            return

        if stream_url and stream_token:
            self.stream_client.update_config(stream_url, stream_token)
            logger.info(f"Updated Centrifugo config - URL: {stream_url}")
        else:
            logger.warning(
                "Stream URL or token not provided, using default configuration"
            )

    def _apply_stream_credentials(self, message: ChatMessage) -> None:
        if not self.dev_mode and message.stream_url and message.stream_token:
            self.update_centrifugo_config(message.stream_url, message.stream_token)

    async def stream_chunk(
        self,
        data: ChatMessage | dict[str, Any],
        content: str,
    ) -> None:
        """
        Stream a chunk of the AI response.

        Args:
            data: Request context
            content: Content chunk to stream
        """
        message = self._as_message(data)
        logger.debug(f"Streaming chunk to {message.channel} ({len(content)} chars)")

        self._apply_stream_credentials(message)
        await self.stream_client.send_delta(
            message.channel, message.response_uuid, message.thread_id, content
        )

    async def complete_response(
        self,
        data: ChatMessage | dict[str, Any],
        full_response: str,
        usage_info: UsageInfo | dict[str, Any] | None = None,
        file_url: str | None = None,
    ) -> None:
        """
        Signal completion and persist the response to the backend.

        Args:
            data: Request context
            full_response: Complete AI response
            usage_info: Token accounting (optional)
            file_url: URL of a generated file (optional)
        """
        message = self._as_message(data)

        self._apply_stream_credentials(message)
        await self.stream_client.send_completion(
            message.channel, message.response_uuid, message.thread_id, full_response
        )

        backend_data = create_complete_response(
            message.response_uuid,
            message.thread_id,
            full_response,
            usage_info,
            file_url,
        )
        backend_data["conversation_id"] = message.conversation_id

        if usage_info is None or prompt_tokens_of(usage_info) == 0:
            backend_data["usage"] = default_usage(full_response)

        await self._persist(message, backend_data, "response")

    async def send_error(
        self,
        data: ChatMessage | dict[str, Any],
        error_message: str,
    ) -> None:
        """
        Send an error via the stream and persist it to the backend.

        Args:
            data: Request context
            error_message: Error message to send
        """
        message = self._as_message(data)

        self._apply_stream_credentials(message)
        await self.stream_client.send_error(
            message.channel, message.response_uuid, message.thread_id, error_message
        )

        error_data = create_error_response(
            message.response_uuid, message.conversation_id, error_message
        )
        await self._persist(message, error_data, "error")

    async def _persist(
        self,
        message: ChatMessage,
        payload: dict[str, Any],
        kind: str,
    ) -> bool:
        """
        POST a payload to the request's backend URL.

        Returns:
            True if the backend accepted it, False if skipped or failed
        """
        if not message.url:
            if self.dev_mode:
                logger.info(f"Dev mode: skipping backend {kind} call (no URL provided)")
            else:
                logger.warning(f"No URL provided, skipping backend {kind} call")
            return False

        headers = dict(message.headers or {})
        logger.info(f"Sending {kind} to Lexia API: {message.url}")
        logger.debug(f"Headers: {headers}")
        logger.debug(f"Payload: {payload}")

        try:
            response = await self.api.post(message.url, payload, headers)
        except APIRequestError as e:
            logger.error(f"Failed to send {kind} to Lexia API: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error sending {kind} to Lexia API: {e}")
            return False

        if not response.is_success:
            logger.error(
                f"Lexia API {kind} error: {response.status_code} - {response.text}"
            )
            return False

        logger.info(f"Lexia API accepted {kind} for {message.response_uuid}")
        return True
