"""
Lexia Integration Package
=========================

Streams AI responses to the Lexia platform through Centrifugo, or
through an in-memory dev transport for local work, and persists the
final response to the Lexia backend.
"""

VERSION = "1.0.0"

from lexia.config import Settings, get_settings
from lexia.errors import APIRequestError, CentrifugoError
from lexia.handler import LexiaHandler
from lexia.http.client import APIClient
from lexia.models import ChatMessage, ChatResponse, Memory, UsageInfo, Variable
from lexia.response import (
    create_complete_response,
    create_error_response,
    create_success_response,
)
from lexia.streaming import (
    CentrifugoClient,
    ChannelStore,
    DevStreamClient,
    StreamRecord,
)
from lexia.utils import MemoryHelper, Variables, get_openai_api_key, get_variable_value

__all__ = [
    "VERSION",
    "Settings",
    "get_settings",
    "APIRequestError",
    "CentrifugoError",
    "LexiaHandler",
    "APIClient",
    "ChatMessage",
    "ChatResponse",
    "Memory",
    "UsageInfo",
    "Variable",
    "create_complete_response",
    "create_error_response",
    "create_success_response",
    "CentrifugoClient",
    "ChannelStore",
    "DevStreamClient",
    "StreamRecord",
    "MemoryHelper",
    "Variables",
    "get_openai_api_key",
    "get_variable_value",
]
