"""Standard Lexia endpoints for FastAPI applications."""

import logging
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, BackgroundTasks, FastAPI, HTTPException

from lexia import VERSION
from lexia.handler import LexiaHandler
from lexia.models import ChatMessage, ChatResponse
from lexia.response import create_success_response
from lexia.streaming.dev import DevStreamClient
from lexia.web.sse import create_sse_response

logger = logging.getLogger(__name__)

ProcessMessageFunc = Callable[[ChatMessage], Awaitable[None]]


def add_standard_endpoints(
    app: FastAPI,
    conversation_manager: Any | None = None,
    lexia_handler: LexiaHandler | None = None,
    process_message_func: ProcessMessageFunc | None = None,
    prefix: str = "/api/v1",
) -> FastAPI:
    """
    Add standard Lexia endpoints to a FastAPI application.

    Args:
        app: FastAPI application instance
        conversation_manager: Optional object with get_history(thread_id)
            and clear_history(thread_id) for the history endpoints
        lexia_handler: Handler used for streaming (created if omitted)
        process_message_func: Coroutine function run in the background
            for each accepted message
        prefix: URL prefix for all routes

    Returns:
        The same application, for chaining
    """
    handler = lexia_handler or LexiaHandler()
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy", "version": VERSION, "dev_mode": handler.dev_mode}

    @router.get("/")
    async def root():
        return {
            "name": "Lexia Integration",
            "version": VERSION,
            "dev_mode": handler.dev_mode,
            "transport": handler.stream_client.name,
        }

    @router.post("/send_message", response_model=ChatResponse)
    async def send_message(
        message: ChatMessage,
        background_tasks: BackgroundTasks,
    ) -> ChatResponse:
        """
        Accept a chat message and process it in the background.

        The AI response is delivered over the stream channel named in
        the request, not in this HTTP response.
        """
        if process_message_func is None:
            raise HTTPException(status_code=503, detail="No message processor configured")

        logger.info(
            f"Accepted message for thread {message.thread_id} "
            f"(response {message.response_uuid})"
        )
        background_tasks.add_task(process_message_func, message)
        return create_success_response(message.response_uuid, message.thread_id)

    if conversation_manager is not None:

        @router.get("/conversation/{thread_id}/history")
        async def get_history(thread_id: str):
            history = conversation_manager.get_history(thread_id)
            return {"thread_id": thread_id, "history": history, "count": len(history)}

        @router.delete("/conversation/{thread_id}/history")
        async def clear_history(thread_id: str):
            conversation_manager.clear_history(thread_id)
            return {"status": "success", "thread_id": thread_id}

    if isinstance(handler.stream_client, DevStreamClient):
        dev_client = handler.stream_client

        @router.get("/poll/{channel}")
        async def poll_stream(channel: str):
            """Get what a dev channel has received so far."""
            return {"channel": channel, **dev_client.get_stream(channel).to_dict()}

        @router.get("/stream/{channel}")
        async def stream_channel(channel: str):
            """Follow a dev channel as Server-Sent Events."""
            return create_sse_response(dev_client.get_stream(channel))

        @router.delete("/stream/{channel}")
        async def clear_stream(channel: str):
            cleared = dev_client.clear_stream(channel)
            return {"channel": channel, "cleared": cleared}

        logger.info("Dev streaming endpoints enabled")

    app.include_router(router, prefix=prefix)
    return app
