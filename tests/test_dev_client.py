"""Tests for the in-memory dev stream client."""

import logging
from unittest.mock import MagicMock

import pytest

from lexia.streaming.dev import DEFAULT_ERROR_MESSAGE, DevStreamClient
from lexia.streaming.store import ChannelStore


@pytest.fixture
def client(store: ChannelStore) -> DevStreamClient:
    """Create a dev client over an isolated store."""
    return DevStreamClient(store=store)


class TestDevStreamClientDeltas:
    """Tests for delta handling."""

    def test_name(self, client: DevStreamClient) -> None:
        """Test transport name."""
        assert client.name == "dev"

    def test_update_config_ignored(self, client: DevStreamClient) -> None:
        """Test relay credentials leave the in-memory transport untouched."""
        client.update_config("http://relay/api", "key")
        assert client.name == "dev"
        assert len(client.store) == 0

    @pytest.mark.asyncio
    async def test_deltas_concatenate_in_order(self, client: DevStreamClient) -> None:
        """Test full_response is the deltas joined in call order."""
        for delta in ["The ", "quick ", "brown ", "fox"]:
            await client.send_delta("chat-1", "u1", "t1", delta)

        stream = client.get_stream("chat-1")
        assert stream.chunks == ["The ", "quick ", "brown ", "fox"]
        assert stream.full_response == "The quick brown fox"
        assert stream.finished is False

    @pytest.mark.asyncio
    async def test_delta_notifies_listeners(self, client: DevStreamClient) -> None:
        """Test delta subscribers receive each fragment."""
        listener = MagicMock()
        client.get_stream("chat-1").events.on("delta", listener)

        await client.send_delta("chat-1", "u1", "t1", "Hi")

        listener.assert_called_once_with("Hi")

    @pytest.mark.asyncio
    async def test_delta_echoed_to_stdout(self, client: DevStreamClient, capsys) -> None:
        """Test deltas are written to stdout, completion adds a newline."""
        await client.send_delta("chat-1", "u1", "t1", "Hel")
        await client.send_delta("chat-1", "u1", "t1", "lo")
        await client.send_completion("chat-1", "u1", "t1", None)

        assert capsys.readouterr().out == "Hello\n"

    @pytest.mark.asyncio
    async def test_empty_delta_ignored(self, client: DevStreamClient) -> None:
        """Test an empty delta leaves chunks untouched."""
        await client.send_delta("chat-1", "u1", "t1", "")

        stream = client.get_stream("chat-1")
        assert stream.chunks == []
        assert stream.last_message["delta"] == ""

    @pytest.mark.asyncio
    async def test_delta_after_finish_dropped(self, client: DevStreamClient) -> None:
        """Test a finished stream takes no more chunks until cleared."""
        await client.send_delta("chat-1", "u1", "t1", "Done")
        await client.send_completion("chat-1", "u1", "t1", None)
        await client.send_delta("chat-1", "u1", "t1", " extra")

        stream = client.get_stream("chat-1")
        assert stream.chunks == ["Done"]
        assert stream.full_response == "Done"

        client.clear_stream("chat-1")
        await client.send_delta("chat-1", "u2", "t1", "Again")
        assert client.get_stream("chat-1").full_response == "Again"


class TestDevStreamClientCompletion:
    """Tests for completion handling."""

    @pytest.mark.asyncio
    async def test_completion_without_final_text(self, client: DevStreamClient) -> None:
        """Test completion keeps the accumulated text when none is given."""
        await client.send_delta("chat-1", "u1", "t1", "Hel")
        await client.send_delta("chat-1", "u1", "t1", "lo")
        await client.send_completion("chat-1", "u1", "t1", None)

        stream = client.get_stream("chat-1")
        assert stream.finished is True
        assert stream.full_response == "Hello"

    @pytest.mark.asyncio
    async def test_completion_final_text_overrides(self, client: DevStreamClient) -> None:
        """Test an explicit final text replaces the accumulated deltas."""
        await client.send_delta("chat-1", "u1", "t1", "draft text")
        await client.send_completion("chat-1", "u1", "t1", "FINAL")

        stream = client.get_stream("chat-1")
        assert stream.full_response == "FINAL"
        assert stream.chunks == ["draft text"]

    @pytest.mark.asyncio
    async def test_completion_notifies_with_full_response(
        self, client: DevStreamClient
    ) -> None:
        """Test complete subscribers receive the final text."""
        listener = MagicMock()
        client.get_stream("chat-1").events.on("complete", listener)

        await client.send_delta("chat-1", "u1", "t1", "abc")
        await client.send_completion("chat-1", "u1", "t1", None)

        listener.assert_called_once_with("abc")

    @pytest.mark.asyncio
    async def test_completion_payload_stored(self, client: DevStreamClient) -> None:
        """Test the raw completion payload is kept as last_message."""
        await client.send_completion("chat-1", "u1", "t1", "Bye")

        assert client.get_stream("chat-1").last_message == {
            "finished": True,
            "uuid": "u1",
            "thread_id": "t1",
            "full_response": "Bye",
        }


class TestDevStreamClientErrors:
    """Tests for error handling."""

    @pytest.mark.asyncio
    async def test_send_error_marks_stream(self, client: DevStreamClient) -> None:
        """Test an error finishes the stream with its message."""
        listener = MagicMock()
        client.get_stream("chat-1").events.on("error", listener)

        await client.send_error("chat-1", "u1", "t1", "model timeout")

        stream = client.get_stream("chat-1")
        assert stream.finished is True
        assert stream.error == "model timeout"
        assert stream.last_message["status"] == "FAILED"
        assert stream.last_message["role"] == "developer"
        listener.assert_called_once_with("model timeout")

    @pytest.mark.asyncio
    async def test_error_default_message(self, client: DevStreamClient) -> None:
        """Test a missing error message falls back to the default text."""
        await client.send("chat-1", {"error": True})

        stream = client.get_stream("chat-1")
        assert stream.error == DEFAULT_ERROR_MESSAGE
        assert stream.finished is True

    @pytest.mark.asyncio
    async def test_payload_without_markers(self, client: DevStreamClient) -> None:
        """Test a payload with no markers is only recorded."""
        payload = {"uuid": "u1", "note": "ping"}
        await client.send("chat-1", payload)

        stream = client.get_stream("chat-1")
        assert stream.last_message == payload
        assert stream.chunks == []
        assert stream.finished is False

    @pytest.mark.asyncio
    async def test_non_string_delta_does_not_raise(
        self, client: DevStreamClient, caplog
    ) -> None:
        """Test a malformed delta is logged instead of raised."""
        with caplog.at_level(logging.ERROR, logger="lexia.streaming.dev"):
            await client.send("chat-1", {"delta": 123})

        stream = client.get_stream("chat-1")
        assert stream.chunks == []
        assert stream.full_response == ""
        assert stream.last_message == {"delta": 123}
        assert "Error in dev stream send to chat-1" in caplog.text

    @pytest.mark.asyncio
    async def test_non_dict_payload_does_not_raise(self, client: DevStreamClient) -> None:
        """Test a payload of the wrong type is swallowed."""
        await client.send("chat-1", "not a dict")  # type: ignore[arg-type]

        assert client.get_stream("chat-1").last_message == "not a dict"

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_raise(self, client: DevStreamClient) -> None:
        """Test a listener exception stays inside send."""
        client.get_stream("chat-1").events.on("delta", MagicMock(side_effect=RuntimeError))

        await client.send_delta("chat-1", "u1", "t1", "x")

        assert client.get_stream("chat-1").full_response == "x"


class TestDevStreamClientClear:
    """Tests for clearing streams."""

    @pytest.mark.asyncio
    async def test_clear_after_finish(self, client: DevStreamClient) -> None:
        """Test clear_stream restores a finished stream to defaults."""
        await client.send_delta("chat-1", "u1", "t1", "abc")
        await client.send_error("chat-1", "u1", "t1", "oops")

        assert client.clear_stream("chat-1") is True

        stream = client.get_stream("chat-1")
        assert stream.chunks == []
        assert stream.full_response == ""
        assert stream.finished is False
        assert stream.error is None

    @pytest.mark.asyncio
    async def test_clear_drops_subscribers(self, client: DevStreamClient) -> None:
        """Test listeners registered before a clear see nothing after it."""
        listener = MagicMock()
        client.get_stream("chat-1").events.on("delta", listener)

        client.clear_stream("chat-1")
        await client.send_delta("chat-1", "u1", "t1", "after")

        listener.assert_not_called()

    def test_default_store_shared(self) -> None:
        """Test clients without an explicit store share the default one."""
        a = DevStreamClient()
        b = DevStreamClient()
        assert a.store is b.store
