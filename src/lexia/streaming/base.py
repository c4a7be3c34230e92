"""Abstract base class for streaming transports."""

from abc import ABC, abstractmethod
from typing import Any

ERROR_STATUS = "FAILED"
ERROR_ROLE = "developer"


def build_delta_payload(uuid: str, thread_id: str, delta: str) -> dict[str, Any]:
    """Build the message for an incremental text fragment."""
    return {
        "delta": delta,
        "finished": False,
        "uuid": uuid,
        "thread_id": thread_id,
    }


def build_completion_payload(
    uuid: str,
    thread_id: str,
    full_response: str | None,
) -> dict[str, Any]:
    """Build the terminal message carrying the full response."""
    return {
        "finished": True,
        "uuid": uuid,
        "thread_id": thread_id,
        "full_response": full_response,
    }


def build_error_payload(uuid: str, thread_id: str, message: str) -> dict[str, Any]:
    """Build the terminal message for a failed response."""
    return {
        "error": True,
        "content": message,
        "finished": True,
        "uuid": uuid,
        "thread_id": thread_id,
        "status": ERROR_STATUS,
        "role": ERROR_ROLE,
    }


class StreamClient(ABC):
    """
    Abstract base class for streaming transports.

    Both variants expose the same coroutine API so callers always
    await them, whether delivery goes over the network or stays
    in-process. The delta/completion/error helpers all funnel into
    send() so the message shapes stay identical across transports.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique identifier for this transport.

        Returns:
            Transport name (e.g., 'dev', 'centrifugo')
        """
        ...

    @abstractmethod
    async def send(self, channel: str, data: dict[str, Any]) -> None:
        """
        Deliver a message to a channel.

        Args:
            channel: Channel name
            data: Message payload (JSON-serializable)
        """
        ...

    def update_config(self, url: str, api_key: str) -> None:
        """
        Apply per-request relay credentials.

        Transports without a remote relay ignore them.
        """

    async def send_delta(
        self,
        channel: str,
        uuid: str,
        thread_id: str,
        delta: str,
    ) -> None:
        """
        Send a streaming delta message.

        Args:
            channel: Channel name
            uuid: Response UUID
            thread_id: Thread ID
            delta: Text delta to send
        """
        await self.send(channel, build_delta_payload(uuid, thread_id, delta))

    async def send_completion(
        self,
        channel: str,
        uuid: str,
        thread_id: str,
        full_response: str | None,
    ) -> None:
        """
        Send a completion signal.

        Args:
            channel: Channel name
            uuid: Response UUID
            thread_id: Thread ID
            full_response: Complete response text
        """
        await self.send(
            channel, build_completion_payload(uuid, thread_id, full_response)
        )

    async def send_error(
        self,
        channel: str,
        uuid: str,
        thread_id: str,
        message: str,
    ) -> None:
        """
        Send an error notification.

        Args:
            channel: Channel name
            uuid: Response UUID
            thread_id: Thread ID
            message: Error message
        """
        await self.send(channel, build_error_payload(uuid, thread_id, message))
