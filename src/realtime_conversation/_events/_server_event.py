# -*- coding: utf-8 -*-
"""Server events - events sent from the realtime endpoint to the client.

Each event is an independent dataclass whose ``type`` field holds the wire
discriminator, and every event carries the server-generated ``event_id``.
`ServerEvent` is the union of all of them.
"""

from dataclasses import dataclass, field
from typing import Literal, get_args

from .._models import (
    ContentPart,
    ConversationResource,
    Item,
    RateLimit,
    Response,
    ServerError,
    Session,
)


# =============================================================================
# Error & Session Events
# =============================================================================


@dataclass
class ErrorEvent:
    """The server reports an application-level error."""

    error: ServerError
    event_id: str | None = None
    type: Literal["error"] = field(default="error", init=False)


@dataclass
class SessionCreatedEvent:
    """The session was created. This is the first event of a connection."""

    session: Session
    event_id: str | None = None
    type: Literal["session.created"] = field(
        default="session.created",
        init=False,
    )


@dataclass
class SessionUpdatedEvent:
    """The session configuration was updated."""

    session: Session
    event_id: str | None = None
    type: Literal["session.updated"] = field(
        default="session.updated",
        init=False,
    )


# =============================================================================
# Conversation Events
# =============================================================================


@dataclass
class ConversationCreatedEvent:
    """The server-side conversation was created."""

    conversation: ConversationResource
    event_id: str | None = None
    type: Literal["conversation.created"] = field(
        default="conversation.created",
        init=False,
    )


@dataclass
class ConversationItemCreatedEvent:
    """An item was added to the conversation."""

    item: Item
    previous_item_id: str | None = None
    event_id: str | None = None
    type: Literal["conversation.item.created"] = field(
        default="conversation.item.created",
        init=False,
    )


@dataclass
class ConversationItemRetrievedEvent:
    """An item was retrieved from the conversation history."""

    item: Item
    event_id: str | None = None
    type: Literal["conversation.item.retrieved"] = field(
        default="conversation.item.retrieved",
        init=False,
    )


@dataclass
class ConversationItemInputAudioTranscriptionDeltaEvent:
    """A fragment of the transcription of an input audio part."""

    item_id: str
    content_index: int
    delta: str
    event_id: str | None = None
    type: Literal[
        "conversation.item.input_audio_transcription.delta"
    ] = field(
        default="conversation.item.input_audio_transcription.delta",
        init=False,
    )


@dataclass
class ConversationItemInputAudioTranscriptionCompletedEvent:
    """The transcription of an input audio part is complete."""

    item_id: str
    content_index: int
    transcript: str
    event_id: str | None = None
    type: Literal[
        "conversation.item.input_audio_transcription.completed"
    ] = field(
        default="conversation.item.input_audio_transcription.completed",
        init=False,
    )


@dataclass
class ConversationItemInputAudioTranscriptionFailedEvent:
    """The transcription of an input audio part failed."""

    item_id: str
    content_index: int
    error: ServerError
    event_id: str | None = None
    type: Literal[
        "conversation.item.input_audio_transcription.failed"
    ] = field(
        default="conversation.item.input_audio_transcription.failed",
        init=False,
    )


@dataclass
class ConversationItemTruncatedEvent:
    """The audio of an assistant message was truncated."""

    item_id: str
    content_index: int
    audio_end_ms: int
    event_id: str | None = None
    type: Literal["conversation.item.truncated"] = field(
        default="conversation.item.truncated",
        init=False,
    )


@dataclass
class ConversationItemDeletedEvent:
    """An item was removed from the conversation."""

    item_id: str
    event_id: str | None = None
    type: Literal["conversation.item.deleted"] = field(
        default="conversation.item.deleted",
        init=False,
    )


# =============================================================================
# Input Audio Buffer Events
# =============================================================================


@dataclass
class InputAudioBufferCommittedEvent:
    """The input audio buffer was committed into a user message."""

    item_id: str
    previous_item_id: str | None = None
    event_id: str | None = None
    type: Literal["input_audio_buffer.committed"] = field(
        default="input_audio_buffer.committed",
        init=False,
    )


@dataclass
class InputAudioBufferClearedEvent:
    """The input audio buffer was cleared."""

    event_id: str | None = None
    type: Literal["input_audio_buffer.cleared"] = field(
        default="input_audio_buffer.cleared",
        init=False,
    )


@dataclass
class InputAudioBufferSpeechStartedEvent:
    """Server VAD detected the start of speech."""

    audio_start_ms: int
    item_id: str
    event_id: str | None = None
    type: Literal["input_audio_buffer.speech_started"] = field(
        default="input_audio_buffer.speech_started",
        init=False,
    )


@dataclass
class InputAudioBufferSpeechStoppedEvent:
    """Server VAD detected the end of speech."""

    audio_end_ms: int
    item_id: str
    event_id: str | None = None
    type: Literal["input_audio_buffer.speech_stopped"] = field(
        default="input_audio_buffer.speech_stopped",
        init=False,
    )


# =============================================================================
# Response Events
# =============================================================================


@dataclass
class ResponseCreatedEvent:
    """A response started."""

    response: Response
    event_id: str | None = None
    type: Literal["response.created"] = field(
        default="response.created",
        init=False,
    )


@dataclass
class ResponseDoneEvent:
    """A response finished, successfully or not."""

    response: Response
    event_id: str | None = None
    type: Literal["response.done"] = field(
        default="response.done",
        init=False,
    )


@dataclass
class ResponseOutputItemAddedEvent:
    """A response produced a new output item."""

    response_id: str
    output_index: int
    item: Item
    event_id: str | None = None
    type: Literal["response.output_item.added"] = field(
        default="response.output_item.added",
        init=False,
    )


@dataclass
class ResponseOutputItemDoneEvent:
    """A response output item is complete."""

    response_id: str
    output_index: int
    item: Item
    event_id: str | None = None
    type: Literal["response.output_item.done"] = field(
        default="response.output_item.done",
        init=False,
    )


@dataclass
class ResponseContentPartAddedEvent:
    """A content part was added to an assistant message."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    part: ContentPart
    event_id: str | None = None
    type: Literal["response.content_part.added"] = field(
        default="response.content_part.added",
        init=False,
    )


@dataclass
class ResponseContentPartDoneEvent:
    """A content part of an assistant message is complete."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    part: ContentPart
    event_id: str | None = None
    type: Literal["response.content_part.done"] = field(
        default="response.content_part.done",
        init=False,
    )


@dataclass
class ResponseTextDeltaEvent:
    """A fragment of generated text."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    delta: str
    event_id: str | None = None
    type: Literal["response.text.delta"] = field(
        default="response.text.delta",
        init=False,
    )


@dataclass
class ResponseTextDoneEvent:
    """The final generated text of a content part."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    text: str
    event_id: str | None = None
    type: Literal["response.text.done"] = field(
        default="response.text.done",
        init=False,
    )


@dataclass
class ResponseAudioTranscriptDeltaEvent:
    """A fragment of the transcript of generated audio."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    delta: str
    event_id: str | None = None
    type: Literal["response.audio_transcript.delta"] = field(
        default="response.audio_transcript.delta",
        init=False,
    )


@dataclass
class ResponseAudioTranscriptDoneEvent:
    """The final transcript of generated audio."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    transcript: str
    event_id: str | None = None
    type: Literal["response.audio_transcript.done"] = field(
        default="response.audio_transcript.done",
        init=False,
    )


@dataclass
class ResponseAudioDeltaEvent:
    """A chunk of generated audio, base64-encoded on the wire."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    delta: bytes
    event_id: str | None = None
    type: Literal["response.audio.delta"] = field(
        default="response.audio.delta",
        init=False,
    )


@dataclass
class ResponseAudioDoneEvent:
    """The generated audio of a content part is complete."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int
    event_id: str | None = None
    type: Literal["response.audio.done"] = field(
        default="response.audio.done",
        init=False,
    )


@dataclass
class ResponseFunctionCallArgumentsDeltaEvent:
    """A fragment of the arguments of a function call."""

    response_id: str
    item_id: str
    output_index: int
    call_id: str
    delta: str
    event_id: str | None = None
    type: Literal["response.function_call_arguments.delta"] = field(
        default="response.function_call_arguments.delta",
        init=False,
    )


@dataclass
class ResponseFunctionCallArgumentsDoneEvent:
    """The final arguments of a function call."""

    response_id: str
    item_id: str
    output_index: int
    call_id: str
    arguments: str
    event_id: str | None = None
    type: Literal["response.function_call_arguments.done"] = field(
        default="response.function_call_arguments.done",
        init=False,
    )


# =============================================================================
# Rate Limit Events
# =============================================================================


@dataclass
class RateLimitsUpdatedEvent:
    """The rate limits were updated after a response was created."""

    rate_limits: list[RateLimit] = field(default_factory=list)
    event_id: str | None = None
    type: Literal["rate_limits.updated"] = field(
        default="rate_limits.updated",
        init=False,
    )


ServerEvent = (
    ErrorEvent
    | SessionCreatedEvent
    | SessionUpdatedEvent
    | ConversationCreatedEvent
    | ConversationItemCreatedEvent
    | ConversationItemRetrievedEvent
    | ConversationItemInputAudioTranscriptionDeltaEvent
    | ConversationItemInputAudioTranscriptionCompletedEvent
    | ConversationItemInputAudioTranscriptionFailedEvent
    | ConversationItemTruncatedEvent
    | ConversationItemDeletedEvent
    | InputAudioBufferCommittedEvent
    | InputAudioBufferClearedEvent
    | InputAudioBufferSpeechStartedEvent
    | InputAudioBufferSpeechStoppedEvent
    | ResponseCreatedEvent
    | ResponseDoneEvent
    | ResponseOutputItemAddedEvent
    | ResponseOutputItemDoneEvent
    | ResponseContentPartAddedEvent
    | ResponseContentPartDoneEvent
    | ResponseTextDeltaEvent
    | ResponseTextDoneEvent
    | ResponseAudioTranscriptDeltaEvent
    | ResponseAudioTranscriptDoneEvent
    | ResponseAudioDeltaEvent
    | ResponseAudioDoneEvent
    | ResponseFunctionCallArgumentsDeltaEvent
    | ResponseFunctionCallArgumentsDoneEvent
    | RateLimitsUpdatedEvent
)
"""An event sent from the server to the client."""

SERVER_EVENT_TYPES: dict[str, type] = {
    cls.type: cls for cls in get_args(ServerEvent)
}
"""The server event classes keyed by their wire type."""
