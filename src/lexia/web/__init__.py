"""
Web framework utilities for Lexia integrations.

Provides a FastAPI app factory and the standard endpoints that hand
incoming messages to an AI processing function.
"""

from lexia.web.app import create_lexia_app
from lexia.web.endpoints import add_standard_endpoints
from lexia.web.sse import format_sse_event, stream_record_events

__all__ = [
    "create_lexia_app",
    "add_standard_endpoints",
    "format_sse_event",
    "stream_record_events",
]
