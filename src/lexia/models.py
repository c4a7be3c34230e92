"""Pydantic models for Lexia requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Variable(BaseModel):
    """A named value passed along with a request (API keys, settings)."""

    name: str
    value: str | None = None


class Memory(BaseModel):
    """User profile memory attached to a request."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    goals: list[str] = Field(default_factory=list)
    location: str | None = None
    interests: list[str] = Field(default_factory=list)
    preferences: list[str] = Field(default_factory=list)
    past_experiences: list[str] = Field(default_factory=list)


class UsageInfo(BaseModel):
    """Token accounting reported by the model provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int | None = None


class ChatMessage(BaseModel):
    """
    Incoming chat request.

    Carries both the user's message and the routing context needed to
    stream the answer back: the channel, response UUID and thread ID,
    optional per-request Centrifugo credentials, and the optional
    backend URL/headers used to persist the final response.
    """

    model_config = ConfigDict(extra="allow")

    thread_id: str = Field(..., description="Conversation thread ID")
    message: str = Field(default="", description="User message")
    response_uuid: str = Field(..., description="UUID of the response being produced")
    channel: str = Field(..., description="Streaming channel name")
    conversation_id: int | str | None = None
    model: str = ""
    message_uuid: str | None = None
    variables: list[Variable] = Field(default_factory=list)

    # Backend persistence
    url: str | None = None
    headers: dict[str, str] | None = None

    # Per-request Centrifugo credentials
    stream_url: str | None = None
    stream_token: str | None = None

    # Optional context
    file_url: str | None = None
    file_type: str | None = None
    system_message: str | None = None
    memory: Memory | None = None
    force_search: bool = False
    project_id: str | None = None


class ChatResponse(BaseModel):
    """Acknowledgement returned when a message is accepted for processing."""

    status: str = "success"
    message: str = "Message received and being processed"
    response_uuid: str
    thread_id: str
    data: dict[str, Any] | None = None
