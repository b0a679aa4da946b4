# -*- coding: utf-8 -*-
"""The conversation items and their content parts.

Items and content parts are tagged unions: each variant is an independent
dataclass carrying its wire ``type`` literal, and the unions are plain type
aliases over the variants.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class ItemStatus(str, Enum):
    """The lifecycle status of an item."""

    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    INCOMPLETE = "incomplete"


class ItemRole(str, Enum):
    """The role that produced an item."""

    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"


# =============================================================================
# Content parts
# =============================================================================


@dataclass
class TextContent:
    """Text generated by the model."""

    text: str = ""
    type: Literal["text"] = field(default="text", init=False)


@dataclass
class InputTextContent:
    """Text provided by the client."""

    text: str = ""
    type: Literal["input_text"] = field(default="input_text", init=False)


@dataclass
class AudioContent:
    """Audio generated by the model, with its optional transcript."""

    audio: bytes = b""
    transcript: str | None = None
    type: Literal["audio"] = field(default="audio", init=False)


@dataclass
class InputAudioContent:
    """Audio provided by the client, with its optional transcript."""

    audio: bytes = b""
    transcript: str | None = None
    type: Literal["input_audio"] = field(default="input_audio", init=False)


Content = TextContent | InputTextContent | AudioContent | InputAudioContent
"""One content part of a message."""

ContentPart = TextContent | AudioContent
"""The content part carried by ``response.content_part.*`` events."""


def content_text(part: Content) -> str | None:
    """Get the text of a content part.

    Args:
        part (`Content`):
            The content part.

    Returns:
        `str | None`:
            The text of text parts, or the transcript of audio parts.
    """
    match part:
        case TextContent(text=text) | InputTextContent(text=text):
            return text
        case AudioContent(transcript=transcript) | InputAudioContent(
            transcript=transcript,
        ):
            return transcript
    raise TypeError(f"Unknown content part: {part!r}")


# =============================================================================
# Items
# =============================================================================


@dataclass
class Message:
    """A message item."""

    id: str
    role: ItemRole
    content: list[Content] = field(default_factory=list)
    status: ItemStatus = ItemStatus.COMPLETED
    type: Literal["message"] = field(default="message", init=False)


@dataclass
class FunctionCall:
    """A function call requested by the model."""

    id: str
    call_id: str
    name: str
    arguments: str = ""
    status: ItemStatus = ItemStatus.COMPLETED
    role: ItemRole | None = None
    type: Literal["function_call"] = field(
        default="function_call",
        init=False,
    )


@dataclass
class FunctionCallOutput:
    """The result of a function call, sent back by the client."""

    id: str
    call_id: str
    output: str
    status: ItemStatus = ItemStatus.COMPLETED
    role: ItemRole | None = None
    type: Literal["function_call_output"] = field(
        default="function_call_output",
        init=False,
    )


Item = Message | FunctionCall | FunctionCallOutput
"""One entry of a conversation."""
