# -*- coding: utf-8 -*-
"""The response related models."""

from dataclasses import dataclass, field
from enum import Enum

from ._item import Item
from ._session import AudioFormat, Modality, Tool, ToolChoice, Voice


class ResponseStatus(str, Enum):
    """The status of a response."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"
    INCOMPLETE = "incomplete"


@dataclass
class ResponseConfig:
    """Overrides of the session configuration for one response.

    Only the fields that are set are sent.
    """

    modalities: list[Modality] | None = None
    instructions: str | None = None
    voice: Voice | None = None
    output_audio_format: AudioFormat | None = None
    tools: list[Tool] | None = None
    tool_choice: ToolChoice | None = None
    temperature: float | None = None
    max_output_tokens: int | None = None


@dataclass
class Usage:
    """The token usage of a response."""

    total_tokens: int = 0
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Response:
    """A response generated by the server."""

    id: str
    status: ResponseStatus
    output: list[Item] = field(default_factory=list)
    usage: Usage | None = None


@dataclass
class RateLimit:
    """The state of one rate limit."""

    name: str
    limit: int
    remaining: int
    reset_seconds: float


@dataclass
class ConversationResource:
    """The server-side conversation announced by ``conversation.created``."""

    id: str
    object: str = "realtime.conversation"
