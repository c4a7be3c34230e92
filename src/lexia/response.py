"""Builders for payloads persisted to the Lexia backend."""

from typing import Any

from lexia.models import ChatResponse, UsageInfo
from lexia.streaming.base import ERROR_ROLE, ERROR_STATUS

PLACEHOLDER_TOKEN = {"token": "default", "logprob": 0.0}


def _usage_block(
    input_tokens: int,
    output_tokens: int,
    total_tokens: int,
    input_details: list[dict[str, Any]] | None = None,
    output_details: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": total_tokens,
        "input_token_details": {"tokens": input_details or []},
        "output_token_details": {"tokens": output_details or []},
    }


def prompt_tokens_of(usage_info: UsageInfo | dict[str, Any] | None) -> int | None:
    """Get the reported prompt_tokens, or None when the field was not reported."""
    if usage_info is None:
        return None
    if isinstance(usage_info, UsageInfo):
        if "prompt_tokens" not in usage_info.model_fields_set:
            return None
        return usage_info.prompt_tokens
    value = usage_info.get("prompt_tokens")
    return None if value is None else int(value)


def usage_from_info(usage_info: UsageInfo | dict[str, Any] | None) -> dict[str, Any]:
    """Convert provider token accounting into the backend usage block."""
    if usage_info is None:
        return _usage_block(0, 0, 0)
    if not isinstance(usage_info, UsageInfo):
        usage_info = UsageInfo.model_validate(
            {k: v for k, v in usage_info.items() if v is not None}
        )

    total = usage_info.total_tokens
    if total is None:
        total = usage_info.prompt_tokens + usage_info.completion_tokens
    return _usage_block(usage_info.prompt_tokens, usage_info.completion_tokens, total)


def default_usage(full_response: str | None) -> dict[str, Any]:
    """
    Fallback usage block for when no accounting was reported.

    Input is counted as a single token and output as the number of
    whitespace-separated words, so the backend's required fields are
    never empty.
    """
    output_tokens = len(full_response.split()) if full_response else 0
    return _usage_block(
        1,
        output_tokens,
        1 + output_tokens,
        input_details=[dict(PLACEHOLDER_TOKEN)],
        output_details=[dict(PLACEHOLDER_TOKEN)],
    )


def create_complete_response(
    response_uuid: str,
    thread_id: str,
    full_response: str,
    usage_info: UsageInfo | dict[str, Any] | None = None,
    file_url: str | None = None,
) -> dict[str, Any]:
    """
    Build the completion payload for the backend.

    Args:
        response_uuid: UUID of the response
        thread_id: Conversation thread ID
        full_response: Final response text
        usage_info: Provider token accounting (optional)
        file_url: URL of a generated file (optional)

    Returns:
        Payload dict ready for JSON encoding
    """
    payload: dict[str, Any] = {
        "uuid": response_uuid,
        "thread_id": thread_id,
        "full_response": full_response,
        "usage": usage_from_info(usage_info),
    }
    if file_url:
        payload["file_url"] = file_url
    return payload


def create_error_response(
    response_uuid: str,
    conversation_id: int | str | None,
    message: str,
) -> dict[str, Any]:
    """Build the error record persisted when a response fails."""
    return {
        "uuid": response_uuid,
        "conversation_id": conversation_id,
        "content": message,
        "role": ERROR_ROLE,
        "status": ERROR_STATUS,
        "usage": _usage_block(0, 0, 0),
    }


def create_success_response(
    response_uuid: str,
    thread_id: str,
    message: str = "Message received and being processed",
) -> ChatResponse:
    """Build the acknowledgement for an accepted message."""
    return ChatResponse(
        status="success",
        message=message,
        response_uuid=response_uuid,
        thread_id=thread_id,
    )
