# -*- coding: utf-8 -*-
"""A single-consumer asynchronous channel.

The producer pushes values with `put`, and ends the channel either normally
with `close` or with a terminal error with `fail`. The consumer iterates the
channel once with ``async for``; a terminal error is raised from the
iteration after all values pushed before it have been consumed.
"""

import asyncio
from typing import AsyncIterator, Generic, TypeVar

from .._logging import logger

T = TypeVar("T")

_END = object()


class _Failure:
    """Wraps the terminal error of a channel."""

    def __init__(self, error: BaseException) -> None:
        self.error = error


class Channel(Generic[T]):
    """An unbounded, single-consumer, non-restartable async channel.

    Example:
        .. code-block:: python

            channel = Channel[str]()
            channel.put("hello")
            channel.close()

            async for value in channel:
                print(value)
    """

    def __init__(self, name: str = "channel") -> None:
        """Initialize the channel.

        Args:
            name (`str`, defaults to `"channel"`):
                The channel name used in log messages.
        """
        self.name = name
        self._queue: asyncio.Queue = asyncio.Queue()
        self._finished = False
        self._subscribed = False

    @property
    def finished(self) -> bool:
        """Whether the channel has been closed or failed."""
        return self._finished

    def put(self, value: T) -> bool:
        """Push a value into the channel.

        Values pushed after the channel finished are dropped.

        Args:
            value (`T`):
                The value to push.

        Returns:
            `bool`:
                True if the value was accepted, False if it was dropped.
        """
        if self._finished:
            logger.debug("Dropping value pushed to finished %s", self.name)
            return False
        self._queue.put_nowait(value)
        return True

    def fail(self, error: BaseException) -> bool:
        """Finish the channel with a terminal error.

        Args:
            error (`BaseException`):
                The error raised to the consumer after the pending values.

        Returns:
            `bool`:
                True if the channel was finished by this call.
        """
        if self._finished:
            return False
        self._finished = True
        self._queue.put_nowait(_Failure(error))
        self._queue.put_nowait(_END)
        return True

    def close(self) -> bool:
        """Finish the channel normally. Closing twice is a no-op.

        Returns:
            `bool`:
                True if the channel was finished by this call.
        """
        if self._finished:
            return False
        self._finished = True
        self._queue.put_nowait(_END)
        return True

    def __aiter__(self) -> AsyncIterator[T]:
        if self._subscribed:
            # The channel is already consumed
            return self._drained()
        self._subscribed = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            value = await self._queue.get()
            if value is _END:
                return
            if isinstance(value, _Failure):
                raise value.error
            yield value

    @staticmethod
    async def _drained() -> AsyncIterator[T]:
        return
        yield  # pylint: disable=unreachable
