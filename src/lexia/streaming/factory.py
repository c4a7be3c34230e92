"""Factory for selecting the streaming transport."""

import logging

from lexia.config import Settings, get_settings
from lexia.streaming.base import StreamClient
from lexia.streaming.centrifugo import CentrifugoClient
from lexia.streaming.dev import DevStreamClient
from lexia.streaming.store import ChannelStore

logger = logging.getLogger(__name__)


def resolve_dev_mode(
    dev_mode: bool | None = None,
    settings: Settings | None = None,
) -> bool:
    """
    Decide whether dev mode is active.

    An explicit argument wins; otherwise LEXIA_DEV_MODE from settings
    is used, which itself defaults to production.
    """
    if dev_mode is not None:
        return bool(dev_mode)
    return (settings or get_settings()).lexia_dev_mode


def create_stream_client(
    dev_mode: bool | None = None,
    settings: Settings | None = None,
    store: ChannelStore | None = None,
) -> StreamClient:
    """
    Create a streaming transport.

    Args:
        dev_mode: Force dev (True) or production (False); None reads settings
        settings: Settings instance for defaults
        store: Channel registry for the dev transport

    Returns:
        DevStreamClient in dev mode, CentrifugoClient otherwise
    """
    if resolve_dev_mode(dev_mode, settings):
        return DevStreamClient(store=store)
    return CentrifugoClient(settings=settings)
