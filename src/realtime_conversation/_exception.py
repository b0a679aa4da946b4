# -*- coding: utf-8 -*-
"""The exceptions raised by the realtime conversation package."""


class RealtimeError(Exception):
    """Base class for the errors raised by this package."""

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message (`str`):
                The error message.
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


class TransportError(RealtimeError):
    """The duplex connection failed, was closed, or was never opened.

    It terminates the event sequence of the transport it happened on.
    """


class ProtocolDecodeError(RealtimeError):
    """A frame could not be decoded into a known event.

    Raised for non-text frames, malformed JSON, unknown ``type``
    discriminators and payloads that do not match the variant's shape. It
    terminates the event sequence of the transport it happened on.
    """


class ConversationStateError(RealtimeError):
    """A local precondition of a conversation operation does not hold."""
