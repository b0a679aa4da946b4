# -*- coding: utf-8 -*-
"""Unit tests for the RealtimeTransport class."""
import asyncio
import json
import unittest
from typing import AsyncIterator
from unittest.mock import AsyncMock, MagicMock, patch

from websockets.exceptions import ConnectionClosedError

from realtime_conversation import (
    ProtocolDecodeError,
    RealtimeConfig,
    RealtimeTransport,
    TransportError,
)
from realtime_conversation._events import (
    ConversationItemDeletedEvent,
    InputAudioBufferAppendEvent,
    ResponseCancelEvent,
)

_DELETED_A = json.dumps({"type": "conversation.item.deleted", "item_id": "a"})
_DELETED_B = json.dumps({"type": "conversation.item.deleted", "item_id": "b"})


class FakeWebSocket:
    """An in-memory websocket connection."""

    def __init__(
        self,
        frames: list,
        error: Exception | None = None,
        hold: bool = False,
    ) -> None:
        self.frames = frames
        self.error = error
        self.hold = hold
        self.sent = []
        self.close_codes = []
        self._closed = asyncio.Event()

    def __aiter__(self) -> AsyncIterator:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator:
        for frame in self.frames:
            yield frame
        if self.error is not None:
            raise self.error
        if self.hold:
            await self._closed.wait()

    async def send(self, message: str) -> None:
        """Record the sent message."""
        self.sent.append(message)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Record the close code and end the iteration."""
        self.close_codes.append(code)
        self._closed.set()


async def _collect(transport: RealtimeTransport) -> list:
    return [event async for event in transport.events]


class RealtimeTransportConfigTest(unittest.TestCase):
    """Test building a transport session."""

    def test_from_config(self) -> None:
        """The URL and headers come from the configuration."""
        transport = RealtimeTransport.from_config(
            RealtimeConfig(api_key="test_key", model="test-model"),
        )
        self.assertEqual(
            transport.url,
            "wss://api.openai.com/v1/realtime?model=test-model",
        )
        self.assertEqual(
            transport.headers,
            {
                "Authorization": "Bearer test_key",
                "OpenAI-Beta": "realtime=v1",
            },
        )
        self.assertFalse(transport.connected)


class RealtimeTransportTest(unittest.IsolatedAsyncioTestCase):
    """Test the receive loop, the sends and the teardown."""

    async def _connect(self, websocket: FakeWebSocket) -> RealtimeTransport:
        transport = RealtimeTransport("wss://test", {"X-Test": "1"})
        self.disconnects = MagicMock()
        transport.on_disconnect = self.disconnects

        with patch(
            "realtime_conversation._transport.websockets.connect",
            new=AsyncMock(return_value=websocket),
        ) as mock_connect:
            await transport.connect()

        mock_connect.assert_awaited_once_with(
            "wss://test",
            additional_headers={"X-Test": "1"},
        )
        return transport

    async def test_events_in_order(self) -> None:
        """Frames are decoded in arrival order until the server closes."""
        transport = await self._connect(
            FakeWebSocket([_DELETED_A, _DELETED_B]),
        )

        events = await _collect(transport)

        self.assertEqual(
            events,
            [
                ConversationItemDeletedEvent(item_id="a"),
                ConversationItemDeletedEvent(item_id="b"),
            ],
        )
        self.disconnects.assert_called_once_with()

    async def test_second_subscription_is_empty(self) -> None:
        """The event sequence can be consumed only once."""
        transport = await self._connect(FakeWebSocket([_DELETED_A]))

        self.assertEqual(len(await _collect(transport)), 1)
        self.assertEqual(await _collect(transport), [])

    async def test_decode_error_is_terminal(self) -> None:
        """No frame after a malformed one is observed."""
        websocket = FakeWebSocket([_DELETED_A, "{not json", _DELETED_B])
        transport = await self._connect(websocket)

        events = []
        with self.assertRaises(ProtocolDecodeError):
            async for event in transport.events:
                events.append(event)

        self.assertEqual(events, [ConversationItemDeletedEvent(item_id="a")])
        self.assertEqual(websocket.close_codes, [1001])
        self.disconnects.assert_called_once_with()

    async def test_unknown_type_is_terminal(self) -> None:
        """An unknown event type ends the sequence."""
        transport = await self._connect(
            FakeWebSocket(['{"type": "response.unknown"}', _DELETED_A]),
        )

        with self.assertRaises(ProtocolDecodeError):
            await _collect(transport)

    async def test_binary_frame_is_terminal(self) -> None:
        """A non-text frame ends the sequence."""
        transport = await self._connect(
            FakeWebSocket([_DELETED_A.encode("utf-8"), _DELETED_B]),
        )

        with self.assertRaises(ProtocolDecodeError):
            await _collect(transport)
        self.assertFalse(transport.connected)

    async def test_connection_error_is_terminal(self) -> None:
        """An abnormal closure ends the sequence with a TransportError."""
        transport = await self._connect(
            FakeWebSocket(
                [_DELETED_A],
                error=ConnectionClosedError(None, None),
            ),
        )

        events = []
        with self.assertRaises(TransportError):
            async for event in transport.events:
                events.append(event)

        self.assertEqual(len(events), 1)
        self.disconnects.assert_called_once_with()

    async def test_send(self) -> None:
        """Events are sent as JSON text frames."""
        websocket = FakeWebSocket([], hold=True)
        transport = await self._connect(websocket)

        await transport.send(InputAudioBufferAppendEvent(audio=b"\x01\x02"))

        self.assertEqual(
            [json.loads(message) for message in websocket.sent],
            [{"type": "input_audio_buffer.append", "audio": "AQI="}],
        )
        await transport.close()

    async def test_concurrent_sends_do_not_interleave(self) -> None:
        """Each write completes before the next one starts."""
        websocket = FakeWebSocket([], hold=True)
        trace = []

        async def slow_send(message: str) -> None:
            trace.append(("start", message))
            await asyncio.sleep(0)
            trace.append(("end", message))

        websocket.send = slow_send
        transport = await self._connect(websocket)

        await asyncio.gather(
            *(
                transport.send(ResponseCancelEvent(event_id=str(i)))
                for i in range(3)
            ),
        )

        self.assertEqual([step for step, _ in trace], ["start", "end"] * 3)
        await transport.close()

    async def test_send_errors(self) -> None:
        """Sending fails when not connected or when the write fails."""
        transport = RealtimeTransport("wss://test")
        with self.assertRaises(TransportError):
            await transport.send(ResponseCancelEvent())

        websocket = FakeWebSocket([], hold=True)
        websocket.send = AsyncMock(
            side_effect=ConnectionClosedError(None, None),
        )
        transport = await self._connect(websocket)
        with self.assertRaises(TransportError):
            await transport.send(ResponseCancelEvent())

        await transport.close()
        with self.assertRaises(TransportError):
            await transport.send(ResponseCancelEvent())

    async def test_close_is_idempotent(self) -> None:
        """Closing finishes the sequence and notifies once."""
        websocket = FakeWebSocket([], hold=True)
        transport = await self._connect(websocket)

        await transport.close()
        await transport.close()

        self.assertEqual(websocket.close_codes, [1001])
        self.assertEqual(await _collect(transport), [])
        self.disconnects.assert_called_once_with()
        self.assertFalse(transport.connected)

    async def test_connect_errors(self) -> None:
        """Connection failures are reported as TransportError."""
        transport = RealtimeTransport("wss://test")
        with patch(
            "realtime_conversation._transport.websockets.connect",
            new=AsyncMock(side_effect=OSError("refused")),
        ):
            with self.assertRaises(TransportError):
                await transport.connect()

        transport = await self._connect(FakeWebSocket([], hold=True))
        with self.assertRaises(TransportError):
            await transport.connect()
        await transport.close()

    async def test_disconnect_callback_errors_are_logged(self) -> None:
        """A failing disconnect hook does not break the teardown."""
        transport = await self._connect(FakeWebSocket([], hold=True))
        transport.on_disconnect = MagicMock(side_effect=RuntimeError("boom"))

        with self.assertLogs("realtime_conversation", level="ERROR"):
            await transport.close()

    async def test_finalizer_tears_down_once(self) -> None:
        """Finalizing twice finishes the sequence and notifies once."""
        transport = await self._connect(FakeWebSocket([], hold=True))

        transport.__del__()
        transport.__del__()

        self.assertFalse(transport.connected)
        self.assertEqual(await _collect(transport), [])
        self.disconnects.assert_called_once_with()

    async def test_finalizer_from_another_thread(self) -> None:
        """Finalizing off the loop thread still ends the sequence."""
        transport = await self._connect(
            FakeWebSocket([_DELETED_A], hold=True),
        )
        await asyncio.sleep(0)

        await asyncio.to_thread(transport.__del__)

        self.assertEqual(
            await asyncio.wait_for(_collect(transport), timeout=1),
            [ConversationItemDeletedEvent(item_id="a")],
        )
        self.disconnects.assert_called_once_with()

    async def test_async_context_manager(self) -> None:
        """The connection is opened on enter and closed on exit."""
        websocket = FakeWebSocket([], hold=True)
        transport = RealtimeTransport("wss://test")

        with patch(
            "realtime_conversation._transport.websockets.connect",
            new=AsyncMock(return_value=websocket),
        ):
            async with transport:
                self.assertTrue(transport.connected)

        self.assertEqual(websocket.close_codes, [1001])


if __name__ == "__main__":
    unittest.main()
