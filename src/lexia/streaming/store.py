"""
In-process channel state for dev-mode streaming.

Each channel name maps to a StreamRecord holding the text received so
far and a small event hub that local observers subscribe to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

STREAM_EVENTS = ("delta", "complete", "error")

StreamListener = Callable[[str], Any]


class StreamEvents:
    """Per-record publish/subscribe hub for stream state transitions."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[StreamListener]] = {
            event: [] for event in STREAM_EVENTS
        }

    def _check_event(self, event: str) -> None:
        if event not in self._listeners:
            raise ValueError(
                f"Unknown stream event: {event!r} (expected one of {STREAM_EVENTS})"
            )

    def on(self, event: str, callback: StreamListener) -> None:
        """Register a callback for an event."""
        self._check_event(event)
        self._listeners[event].append(callback)

    def off(self, event: str, callback: StreamListener) -> bool:
        """
        Unregister a callback.

        Returns:
            True if the callback was registered, False otherwise
        """
        self._check_event(event)
        try:
            self._listeners[event].remove(callback)
            return True
        except ValueError:
            return False

    def emit(self, event: str, value: str) -> int:
        """
        Notify every listener of an event.

        Listener exceptions propagate to the caller.

        Returns:
            Number of listeners notified
        """
        self._check_event(event)
        listeners = list(self._listeners[event])
        for callback in listeners:
            callback(value)
        return len(listeners)

    def listener_count(self, event: str) -> int:
        """Get the number of listeners for an event."""
        self._check_event(event)
        return len(self._listeners[event])


@dataclass
class StreamRecord:
    """
    Streaming state for one channel.

    Attributes:
        chunks: Deltas received, in arrival order
        full_response: Concatenated deltas, or the explicit final text
        finished: Set once a completion or error arrives
        error: Error message, if the stream failed
        last_message: Last raw payload delivered to the channel
        events: Subscription hub for delta/complete/error
    """

    chunks: list[str] = field(default_factory=list)
    full_response: str = ""
    finished: bool = False
    error: str | None = None
    last_message: Any = None
    events: StreamEvents = field(default_factory=StreamEvents)

    def reset(self) -> None:
        """
        Return the record to its empty state.

        A new StreamEvents hub is created, so existing subscribers
        stop receiving events.
        """
        self.chunks = []
        self.full_response = ""
        self.finished = False
        self.error = None
        self.last_message = None
        self.events = StreamEvents()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "chunks": list(self.chunks),
            "full_response": self.full_response,
            "finished": self.finished,
            "error": self.error,
            "last_message": self.last_message,
        }


class ChannelStore:
    """
    Registry of StreamRecords keyed by channel name.

    Records are created on first access and live until removed.
    No locking is done; callers on one event loop are serialized by
    invocation order.
    """

    def __init__(self) -> None:
        self._streams: dict[str, StreamRecord] = {}

    def get_or_create(self, channel: str) -> StreamRecord:
        """Get the record for a channel, creating an empty one if needed."""
        record = self._streams.get(channel)
        if record is None:
            record = StreamRecord()
            self._streams[channel] = record
        return record

    def get(self, channel: str) -> StreamRecord | None:
        """Get the record for a channel without creating it."""
        return self._streams.get(channel)

    def clear(self, channel: str) -> bool:
        """
        Reset a channel's record.

        Returns:
            True if a record existed, False otherwise
        """
        record = self._streams.get(channel)
        if record is None:
            return False
        record.reset()
        logger.info(f"Cleared stream data for channel {channel}")
        return True

    def remove(self, channel: str) -> bool:
        """Drop a channel's record entirely."""
        return self._streams.pop(channel, None) is not None

    def channels(self) -> list[str]:
        """Get all known channel names."""
        return list(self._streams.keys())

    def __contains__(self, channel: object) -> bool:
        return channel in self._streams

    def __len__(self) -> int:
        return len(self._streams)


# Global default instance
default_channel_store = ChannelStore()
