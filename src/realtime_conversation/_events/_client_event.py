# -*- coding: utf-8 -*-
"""Client events - events sent from the client to the realtime endpoint.

Each event is an independent dataclass whose ``type`` field holds the wire
discriminator. `ClientEvent` is the union of all of them.
"""

from dataclasses import dataclass, field
from typing import Literal

from .._models import Item, ResponseConfig, Session


# =============================================================================
# Session Events
# =============================================================================


@dataclass
class SessionUpdateEvent:
    """Update the session configuration.

    The session must not carry the server-assigned id.
    """

    session: Session
    event_id: str | None = None
    type: Literal["session.update"] = field(
        default="session.update",
        init=False,
    )


# =============================================================================
# Input Audio Buffer Events
# =============================================================================


@dataclass
class InputAudioBufferAppendEvent:
    """Append audio bytes to the input audio buffer.

    The audio is kept as raw bytes and base64-encoded on the wire.
    """

    audio: bytes
    event_id: str | None = None
    type: Literal["input_audio_buffer.append"] = field(
        default="input_audio_buffer.append",
        init=False,
    )


@dataclass
class InputAudioBufferCommitEvent:
    """Commit the input audio buffer into a user message."""

    event_id: str | None = None
    type: Literal["input_audio_buffer.commit"] = field(
        default="input_audio_buffer.commit",
        init=False,
    )


@dataclass
class InputAudioBufferClearEvent:
    """Clear the input audio buffer."""

    event_id: str | None = None
    type: Literal["input_audio_buffer.clear"] = field(
        default="input_audio_buffer.clear",
        init=False,
    )


# =============================================================================
# Conversation Item Events
# =============================================================================


@dataclass
class ConversationItemCreateEvent:
    """Add an item to the conversation."""

    item: Item
    previous_item_id: str | None = None
    event_id: str | None = None
    type: Literal["conversation.item.create"] = field(
        default="conversation.item.create",
        init=False,
    )


@dataclass
class ConversationItemTruncateEvent:
    """Truncate the audio of a previous assistant message."""

    item_id: str
    content_index: int
    audio_end_ms: int
    event_id: str | None = None
    type: Literal["conversation.item.truncate"] = field(
        default="conversation.item.truncate",
        init=False,
    )


@dataclass
class ConversationItemDeleteEvent:
    """Remove an item from the conversation history."""

    item_id: str
    event_id: str | None = None
    type: Literal["conversation.item.delete"] = field(
        default="conversation.item.delete",
        init=False,
    )


# =============================================================================
# Response Events
# =============================================================================


@dataclass
class ResponseCreateEvent:
    """Ask the server to generate a response."""

    response: ResponseConfig | None = None
    event_id: str | None = None
    type: Literal["response.create"] = field(
        default="response.create",
        init=False,
    )


@dataclass
class ResponseCancelEvent:
    """Cancel the in-progress response."""

    event_id: str | None = None
    type: Literal["response.cancel"] = field(
        default="response.cancel",
        init=False,
    )


ClientEvent = (
    SessionUpdateEvent
    | InputAudioBufferAppendEvent
    | InputAudioBufferCommitEvent
    | InputAudioBufferClearEvent
    | ConversationItemCreateEvent
    | ConversationItemTruncateEvent
    | ConversationItemDeleteEvent
    | ResponseCreateEvent
    | ResponseCancelEvent
)
"""An event sent from the client to the server."""

CLIENT_EVENT_TYPES: dict[str, type] = {
    cls.type: cls
    for cls in (
        SessionUpdateEvent,
        InputAudioBufferAppendEvent,
        InputAudioBufferCommitEvent,
        InputAudioBufferClearEvent,
        ConversationItemCreateEvent,
        ConversationItemTruncateEvent,
        ConversationItemDeleteEvent,
        ResponseCreateEvent,
        ResponseCancelEvent,
    )
}
"""The client event classes keyed by their wire type."""
