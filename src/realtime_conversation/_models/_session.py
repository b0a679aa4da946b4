# -*- coding: utf-8 -*-
"""The session configuration of a realtime conversation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal


class Modality(str, Enum):
    """The modalities the model can respond with."""

    TEXT = "text"
    AUDIO = "audio"


class Voice(str, Enum):
    """The voices available for audio responses."""

    ALLOY = "alloy"
    ASH = "ash"
    BALLAD = "ballad"
    CORAL = "coral"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SAGE = "sage"
    SHIMMER = "shimmer"
    VERSE = "verse"


class AudioFormat(str, Enum):
    """The supported audio formats."""

    PCM16 = "pcm16"
    G711_ULAW = "g711_ulaw"
    G711_ALAW = "g711_alaw"


class TurnDetectionType(str, Enum):
    """The turn detection strategies."""

    SERVER_VAD = "server_vad"
    NONE = "none"


class ToolChoiceMode(str, Enum):
    """The plain string forms of the tool choice policy."""

    AUTO = "auto"
    NONE = "none"
    REQUIRED = "required"


@dataclass(frozen=True)
class FunctionToolChoice:
    """Force the model to call the named function.

    On the wire it is ``{"type": "function", "function": {"name": ...}}``.
    """

    name: str
    """The function name."""


ToolChoice = ToolChoiceMode | FunctionToolChoice
"""How the model chooses tools: a plain mode or a named function."""


@dataclass
class InputAudioTranscription:
    """The configuration of input audio transcription."""

    model: str = "whisper-1"
    """The transcription model."""


@dataclass
class TurnDetection:
    """The configuration of turn detection in audio conversations."""

    type: TurnDetectionType = TurnDetectionType.SERVER_VAD
    """The turn detection strategy."""

    threshold: float = 0.5
    """The VAD activation threshold, between 0.0 and 1.0."""

    prefix_padding_ms: int = 300
    """The audio included before the detected speech, in milliseconds."""

    silence_duration_ms: int = 500
    """The silence that ends a turn, in milliseconds."""


@dataclass
class Tool:
    """A function the model is allowed to call."""

    name: str
    """The function name."""

    description: str
    """What the function does, shown to the model."""

    parameters: dict[str, Any] = field(default_factory=dict)
    """The function parameters as a JSON schema object."""

    type: Literal["function"] = "function"
    """The tool type."""


@dataclass
class Session:
    """The mutable configuration of a realtime session.

    The ``id`` is assigned by the server and must never be sent back in a
    ``session.update`` event.
    """

    model: str
    """The model used by the session."""

    instructions: str
    """The default system instructions."""

    modalities: list[Modality] = field(
        default_factory=lambda: [Modality.TEXT, Modality.AUDIO],
    )
    """The modalities the model can respond with."""

    voice: Voice = Voice.ALLOY
    """The voice used for audio responses."""

    input_audio_format: AudioFormat = AudioFormat.PCM16
    """The format of input audio."""

    output_audio_format: AudioFormat = AudioFormat.PCM16
    """The format of output audio."""

    input_audio_transcription: InputAudioTranscription | None = None
    """The input audio transcription configuration, disabled if None."""

    turn_detection: TurnDetection | None = None
    """The turn detection configuration."""

    tools: list[Tool] = field(default_factory=list)
    """The tools available to the model."""

    tool_choice: ToolChoice = ToolChoiceMode.AUTO
    """How the model chooses tools."""

    temperature: float = 1.0
    """The sampling temperature."""

    max_output_tokens: int | None = None
    """The maximum number of output tokens per response."""

    id: str | None = None
    """The server-assigned session id."""
