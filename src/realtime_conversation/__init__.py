# -*- coding: utf-8 -*-
"""A client for duplex realtime conversations: the wire events, the
transport session and the conversation state they drive."""

from ._config import DEFAULT_BASE_URL, DEFAULT_MODEL, RealtimeConfig
from ._conversation import Conversation, ConversationState
from ._events import (
    ClientEvent,
    ServerEvent,
    deserialize_client_event,
    deserialize_server_event,
    event_to_dict,
    serialize_event,
)
from ._exception import (
    ConversationStateError,
    ProtocolDecodeError,
    RealtimeError,
    TransportError,
)
from ._logging import logger, setup_logger
from ._models import (
    AudioContent,
    FunctionCall,
    FunctionCallOutput,
    InputAudioContent,
    InputTextContent,
    Item,
    ItemRole,
    ItemStatus,
    Message,
    Modality,
    ResponseConfig,
    ServerError,
    Session,
    TextContent,
    Voice,
    content_text,
)
from ._transport import RealtimeTransport

__version__ = "0.1.0"

__all__ = [
    # Conversation
    "Conversation",
    "ConversationState",
    "RealtimeTransport",
    # Configuration
    "RealtimeConfig",
    "DEFAULT_MODEL",
    "DEFAULT_BASE_URL",
    # Events
    "ClientEvent",
    "ServerEvent",
    "serialize_event",
    "deserialize_client_event",
    "deserialize_server_event",
    "event_to_dict",
    # Models
    "Session",
    "Item",
    "Message",
    "FunctionCall",
    "FunctionCallOutput",
    "ItemRole",
    "ItemStatus",
    "TextContent",
    "InputTextContent",
    "AudioContent",
    "InputAudioContent",
    "Modality",
    "Voice",
    "content_text",
    "ResponseConfig",
    "ServerError",
    # Exceptions
    "RealtimeError",
    "TransportError",
    "ProtocolDecodeError",
    "ConversationStateError",
    # Logging
    "logger",
    "setup_logger",
    "__version__",
]
