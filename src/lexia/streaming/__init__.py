"""
Streaming transports for delivering AI responses to Lexia.

Provides two interchangeable transports:
- CentrifugoClient: publishes to a Centrifugo relay (production)
- DevStreamClient: keeps streams in memory for local development
"""

from lexia.streaming.base import StreamClient
from lexia.streaming.centrifugo import CentrifugoClient
from lexia.streaming.dev import DevStreamClient
from lexia.streaming.factory import create_stream_client, resolve_dev_mode
from lexia.streaming.store import (
    ChannelStore,
    StreamEvents,
    StreamRecord,
    default_channel_store,
)

__all__ = [
    "StreamClient",
    "CentrifugoClient",
    "DevStreamClient",
    "ChannelStore",
    "StreamEvents",
    "StreamRecord",
    "create_stream_client",
    "resolve_dev_mode",
    "default_channel_store",
]
