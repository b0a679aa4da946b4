# -*- coding: utf-8 -*-
"""The transport session that owns one websocket connection to the realtime
endpoint."""

import asyncio
from typing import AsyncIterable, Callable

import websockets
from websockets import ClientConnection

from ._config import RealtimeConfig
from ._events import (
    ClientEvent,
    ServerEvent,
    deserialize_server_event,
    serialize_event,
)
from ._exception import ProtocolDecodeError, TransportError
from ._logging import logger
from ._utils import Channel

_GOING_AWAY = 1001

_CONNECTION_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    websockets.exceptions.WebSocketException,
)


class RealtimeTransport:
    """One duplex connection that turns websocket frames into a sequence of
    server events.

    The frames are read by a background task and decoded into
    `ServerEvent` objects, which are exposed through the single-consumer
    `events` sequence. A non-text frame, a frame that cannot be decoded or an
    abnormal closure ends the sequence with a terminal error, and the
    connection is closed. Sends are serialized so that frames never
    interleave.

    Example:
        .. code-block:: python

            transport = RealtimeTransport.from_config(
                RealtimeConfig.from_env(),
            )
            await transport.connect()

            async for event in transport.events:
                print(event.type)
    """

    url: str
    """The websocket URL of the realtime endpoint."""

    headers: dict[str, str]
    """The headers sent with the websocket handshake."""

    on_disconnect: Callable[[], None] | None
    """The hook invoked once when the connection ends, by any cause."""

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the transport session.

        Args:
            url (`str`):
                The websocket URL, including the model query parameter.
            headers (`dict[str, str] | None`, optional):
                The handshake headers, e.g. the bearer credential and the
                protocol version marker.
        """
        self.url = url
        self.headers = dict(headers or {})
        self.on_disconnect = None

        self._websocket: ClientConnection | None = None
        self._receive_task: asyncio.Task | None = None
        self._send_lock = asyncio.Lock()
        self._events: Channel[ServerEvent] = Channel("event sequence")
        self._closed = False
        self._disconnected = False

    @classmethod
    def from_config(cls, config: RealtimeConfig) -> "RealtimeTransport":
        """Create a transport session from the connection configuration.

        Args:
            config (`RealtimeConfig`):
                The endpoint, model and credential to connect with.

        Returns:
            `RealtimeTransport`:
                The transport session, not connected yet.
        """
        return cls(config.websocket_url, config.headers())

    @property
    def connected(self) -> bool:
        """Whether the connection is open and its events are being read."""
        return (
            self._websocket is not None
            and not self._closed
            and not self._events.finished
        )

    @property
    def events(self) -> AsyncIterable[ServerEvent]:
        """The decoded server events, in arrival order.

        The sequence can be consumed only once; a second subscription sees
        no events. It ends normally when the connection is closed, or raises
        `TransportError` or `ProtocolDecodeError` as its terminal element.
        """
        return self._events

    # =========================================================================
    # Connection Management
    # =========================================================================

    async def connect(self) -> None:
        """Open the websocket connection and start reading frames.

        Raises:
            `TransportError`:
                If the session was already connected or closed, or the
                connection cannot be established.
        """
        if self._closed:
            raise TransportError("The transport session is closed")
        if self._websocket is not None:
            raise TransportError("The transport session is already connected")

        logger.info("Connecting to %s", self.url)

        try:
            self._websocket = await websockets.connect(
                self.url,
                additional_headers=self.headers,
            )
        except _CONNECTION_ERRORS as e:
            raise TransportError(
                f"Failed to connect to {self.url}: {e}",
            ) from e

        logger.info("WebSocket connection opened")

        self._receive_task = asyncio.create_task(self._receive_loop())

    async def _receive_loop(self) -> None:
        """Read frames until the connection ends or a frame is rejected."""
        error: TransportError | ProtocolDecodeError | None = None

        try:
            async for message in self._websocket:
                if not isinstance(message, str):
                    error = ProtocolDecodeError(
                        f"Received a non-text frame of {len(message)} bytes",
                    )
                    break

                try:
                    event = deserialize_server_event(message)
                except ProtocolDecodeError as e:
                    error = e
                    break

                self._events.put(event)

        except _CONNECTION_ERRORS as e:
            error = TransportError(f"Connection lost: {e}")
            error.__cause__ = e

        if error is None:
            logger.info("WebSocket connection closed by the server")
        else:
            logger.warning("The event sequence ends with an error: %s", error)
            self._events.fail(error)
            await self._close_websocket()

        self._events.close()
        self._notify_disconnect()

    async def send(self, event: ClientEvent) -> None:
        """Encode and send one client event.

        Concurrent sends are serialized, so each event is written as one
        whole frame.

        Args:
            event (`ClientEvent`):
                The event to send.

        Raises:
            `TransportError`:
                If the session is not connected, or writing the frame fails.
        """
        if self._websocket is None or self._closed:
            raise TransportError(
                f"Cannot send {event.type}: the transport is not connected",
            )

        message = serialize_event(event)

        async with self._send_lock:
            try:
                await self._websocket.send(message)
            except _CONNECTION_ERRORS as e:
                raise TransportError(
                    f"Failed to send {event.type}: {e}",
                ) from e

        logger.debug("Sent %s", event.type)

    async def close(self) -> None:
        """Close the connection with the going-away code.

        The event sequence is finished and `on_disconnect` is invoked.
        Closing twice is a no-op.
        """
        if self._closed:
            return
        self._closed = True

        task = self._receive_task
        if (
            task is not None
            and not task.done()
            and task is not asyncio.current_task()
        ):
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        await self._close_websocket()

        self._events.close()
        self._notify_disconnect()
        logger.info("Transport session closed")

    async def _close_websocket(self) -> None:
        if self._websocket is None:
            return
        try:
            await self._websocket.close(code=_GOING_AWAY, reason="going away")
        except _CONNECTION_ERRORS as e:
            logger.error("Close error: %s", e)

    def _notify_disconnect(self) -> None:
        """Invoke the disconnect hook, exactly once."""
        if self._disconnected:
            return
        self._disconnected = True

        callback = self.on_disconnect
        if callback is not None:
            try:
                callback()
            except Exception as e:
                logger.error(
                    "Error in disconnect callback: %s",
                    e,
                    exc_info=True,
                )

    async def __aenter__(self) -> "RealtimeTransport":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def __del__(self) -> None:
        # Finalize without awaiting, the event loop may be gone already
        if getattr(self, "_events", None) is None:
            return

        self._closed = True

        task = self._receive_task
        loop = task.get_loop() if task is not None else None
        if loop is not None and not loop.is_closed():
            # May run on any thread, the queue belongs to the loop
            if not task.done():
                loop.call_soon_threadsafe(task.cancel)
            loop.call_soon_threadsafe(self._events.close)
        else:
            self._events.close()

        self._notify_disconnect()
