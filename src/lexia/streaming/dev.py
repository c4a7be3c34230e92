"""
Dev stream client.

Handles streaming for local development without Centrifugo, using
in-memory channel records and local event listeners.
"""

import logging
import sys
from typing import Any

from lexia.streaming.base import StreamClient
from lexia.streaming.store import ChannelStore, StreamRecord, default_channel_store

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An error occurred"


class DevStreamClient(StreamClient):
    """
    In-process stand-in for the Centrifugo relay.

    Best for:
    - Local iteration without a running relay
    - Tests that inspect what was streamed

    Delivery is best-effort: send() logs and swallows every failure.
    """

    def __init__(self, store: ChannelStore | None = None) -> None:
        """
        Initialize the dev client.

        Args:
            store: Channel registry (defaults to the process-wide store)
        """
        self.store = store if store is not None else default_channel_store
        logger.info("Dev stream client initialized (no Centrifugo)")

    @property
    def name(self) -> str:
        return "dev"

    def get_stream(self, channel: str) -> StreamRecord:
        """Get the current stream state for a channel."""
        return self.store.get_or_create(channel)

    def clear_stream(self, channel: str) -> bool:
        """Clear a stream's data."""
        return self.store.clear(channel)

    async def send(self, channel: str, data: dict[str, Any]) -> None:
        """Store data for a channel and notify its listeners."""
        try:
            self._apply(channel, data)
        except Exception as e:
            logger.error(f"Error in dev stream send to {channel}: {e}")

    def _apply(self, channel: str, data: dict[str, Any]) -> None:
        stream = self.store.get_or_create(channel)

        try:
            delta = data.get("delta")
            if delta and stream.finished:
                logger.warning(
                    f"Dropping delta for finished stream {channel}; clear it first"
                )
            elif delta:
                if not isinstance(delta, str):
                    raise TypeError(
                        f"delta must be a string, got {type(delta).__name__}"
                    )
                stream.full_response += delta
                stream.chunks.append(delta)
                logger.debug(f"Added chunk to {channel}. Total chunks: {len(stream.chunks)}")

                stream.events.emit("delta", delta)

                sys.stdout.write(delta)
                sys.stdout.flush()

            if data.get("finished"):
                stream.finished = True
                final_text = data.get("full_response")
                if final_text:
                    stream.full_response = final_text
                logger.info(f"Dev stream completed for {channel}")

                stream.events.emit("complete", stream.full_response)
                sys.stdout.write("\n")
                sys.stdout.flush()

            if data.get("error"):
                stream.error = data.get("content") or DEFAULT_ERROR_MESSAGE
                stream.finished = True
                logger.error(f"Dev stream error for {channel}: {stream.error}")

                stream.events.emit("error", stream.error)
        finally:
            stream.last_message = data
