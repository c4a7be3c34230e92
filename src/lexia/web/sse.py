"""
Server-Sent Events for dev-mode channels.

Lets a browser watch a dev stream live by subscribing to the
channel record's delta/complete/error events.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator

from fastapi.responses import StreamingResponse

from lexia.streaming.store import STREAM_EVENTS, StreamRecord

logger = logging.getLogger(__name__)

TERMINAL_EVENTS = ("complete", "error")


def format_sse_event(
    data: Any,
    event: str | None = None,
    id: str | None = None,
) -> str:
    """
    Format a Server-Sent Event.

    Args:
        data: Event data (will be JSON encoded if not a string)
        event: Optional event type
        id: Optional event ID

    Returns:
        Formatted SSE string
    """
    lines = []

    if id is not None:
        lines.append(f"id: {id}")

    if event is not None:
        lines.append(f"event: {event}")

    if isinstance(data, str):
        data_str = data
    else:
        data_str = json.dumps(data)

    for line in data_str.split("\n"):
        lines.append(f"data: {line}")

    return "\n".join(lines) + "\n\n"


async def stream_record_events(
    record: StreamRecord,
    heartbeat_interval: float = 15.0,
) -> AsyncIterator[str]:
    """
    Yield a record's events as SSE strings until it finishes.

    The first event is a snapshot of what has been received so far.
    If the record is already finished, the snapshot is followed by the
    terminal event and the stream ends.
    """
    yield format_sse_event(record.to_dict(), event="snapshot")

    if record.finished:
        if record.error is not None:
            yield format_sse_event({"error": record.error}, event="error")
        else:
            yield format_sse_event({"full_response": record.full_response}, event="complete")
        return

    queue: asyncio.Queue[tuple[str, str]] = asyncio.Queue()
    events = record.events
    listeners = {
        event: (lambda value, event=event: queue.put_nowait((event, value)))
        for event in STREAM_EVENTS
    }
    for event, callback in listeners.items():
        events.on(event, callback)

    try:
        while True:
            try:
                event, value = await asyncio.wait_for(
                    queue.get(), timeout=heartbeat_interval
                )
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue

            key = "delta" if event == "delta" else (
                "full_response" if event == "complete" else "error"
            )
            yield format_sse_event({key: value}, event=event)

            if event in TERMINAL_EVENTS:
                break
    finally:
        for event, callback in listeners.items():
            events.off(event, callback)


def create_sse_response(
    record: StreamRecord,
    heartbeat_interval: float = 15.0,
) -> StreamingResponse:
    """Wrap a record's event stream in a StreamingResponse."""
    return StreamingResponse(
        stream_record_events(record, heartbeat_interval),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
