# -*- coding: utf-8 -*-
"""The data models of the realtime protocol."""

from ._error import ServerError
from ._item import (
    AudioContent,
    Content,
    ContentPart,
    FunctionCall,
    FunctionCallOutput,
    InputAudioContent,
    InputTextContent,
    Item,
    ItemRole,
    ItemStatus,
    Message,
    TextContent,
    content_text,
)
from ._response import (
    ConversationResource,
    RateLimit,
    Response,
    ResponseConfig,
    ResponseStatus,
    Usage,
)
from ._session import (
    AudioFormat,
    FunctionToolChoice,
    InputAudioTranscription,
    Modality,
    Session,
    Tool,
    ToolChoice,
    ToolChoiceMode,
    TurnDetection,
    TurnDetectionType,
    Voice,
)

__all__ = [
    # Session
    "Session",
    "Modality",
    "Voice",
    "AudioFormat",
    "InputAudioTranscription",
    "TurnDetection",
    "TurnDetectionType",
    "Tool",
    "ToolChoice",
    "ToolChoiceMode",
    "FunctionToolChoice",
    # Items
    "Item",
    "Message",
    "FunctionCall",
    "FunctionCallOutput",
    "ItemRole",
    "ItemStatus",
    "Content",
    "ContentPart",
    "TextContent",
    "InputTextContent",
    "AudioContent",
    "InputAudioContent",
    "content_text",
    # Response
    "Response",
    "ResponseConfig",
    "ResponseStatus",
    "Usage",
    "RateLimit",
    "ConversationResource",
    # Error
    "ServerError",
]
