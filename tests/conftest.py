"""Pytest configuration and fixtures."""

from collections.abc import Callable

import httpx
import pytest

from lexia.config import Settings
from lexia.models import ChatMessage
from lexia.streaming.store import ChannelStore


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        lexia_dev_mode=False,
        centrifugo_url="http://centrifugo.test/api",
        centrifugo_api_key="default-key",
    )


@pytest.fixture
def store() -> ChannelStore:
    """A fresh channel registry per test."""
    return ChannelStore()


@pytest.fixture
def chat_message() -> ChatMessage:
    """Request context without a backend URL."""
    return ChatMessage(
        thread_id="t1",
        message="Hello",
        response_uuid="u1",
        channel="chat-1",
        conversation_id=42,
    )


@pytest.fixture
def mock_http_client() -> Callable[..., httpx.AsyncClient]:
    """Build an httpx.AsyncClient served by a request handler function."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
