# -*- coding: utf-8 -*-
"""Serialization utilities for protocol events.

Events are flat JSON objects: the ``type`` discriminator and the variant's
own fields share the top level, and field names are the snake_case dataclass
field names. Two values are not mapped one-to-one:

- audio bytes are base64 text on the wire;
- the tool choice is either a plain string (``"auto"``, ``"none"``,
  ``"required"``) or ``{"type": "function", "function": {"name": ...}}``.

Decoding is done in two passes: the ``type`` field is read first to select
the event class, then the remaining fields are decoded from the type hints of
that class.
"""

import base64
import binascii
import dataclasses
import json
import types
from enum import Enum
from functools import lru_cache
from typing import (
    Any,
    Literal,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from .._exception import ProtocolDecodeError
from .._models import FunctionToolChoice, ToolChoiceMode
from ._client_event import (
    CLIENT_EVENT_TYPES,
    ClientEvent,
    SessionUpdateEvent,
)
from ._server_event import SERVER_EVENT_TYPES, ServerEvent

_TOOL_CHOICE_TYPES = frozenset({ToolChoiceMode, FunctionToolChoice})


# =============================================================================
# Encoding
# =============================================================================


def _to_wire(value: Any) -> Any:
    """Convert a model value to its JSON-compatible wire form.

    Args:
        value (`Any`):
            The value to convert.

    Returns:
        `Any`:
            The wire value, with None dataclass fields omitted.
    """
    if isinstance(value, FunctionToolChoice):
        return {"type": "function", "function": {"name": value.name}}

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result = {}
        for f in dataclasses.fields(value):
            field_value = getattr(value, f.name)
            if field_value is None:
                continue
            result[f.name] = _to_wire(field_value)
        return result

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")

    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_to_wire(v) for v in value]

    return value


def event_to_dict(event: ClientEvent | ServerEvent) -> dict[str, Any]:
    """Convert an event to its flat wire dictionary.

    The session of a ``session.update`` event is written without its
    server-assigned id.

    Args:
        event (`ClientEvent | ServerEvent`):
            The event to convert.

    Returns:
        `dict[str, Any]`:
            The wire dictionary, with the ``type`` discriminator at the top
            level next to the event fields.
    """
    if not dataclasses.is_dataclass(event) or isinstance(event, type):
        raise TypeError(f"Expected dataclass event, got {type(event)}")

    data = _to_wire(event)

    if isinstance(event, SessionUpdateEvent):
        # The session id is assigned by the server and never sent back
        data["session"].pop("id", None)

    return data


def serialize_event(event: ClientEvent | ServerEvent) -> str:
    """Serialize an event to a JSON string.

    Args:
        event (`ClientEvent | ServerEvent`):
            The event to serialize.

    Returns:
        `str`:
            JSON string representation of the event.

    Example:
        .. code-block:: python

            event = SessionUpdateEvent(
                session=Session(model="gpt-test", instructions="x"),
            )
            json_str = serialize_event(event)
            # {"session": {"model": "gpt-test", ...},
            #  "type": "session.update"}
    """
    return json.dumps(event_to_dict(event), ensure_ascii=False)


# =============================================================================
# Decoding
# =============================================================================


@lru_cache(maxsize=None)
def _get_type_hints(cls: type) -> dict[str, Any]:
    return get_type_hints(cls)


@lru_cache(maxsize=None)
def _get_variants(options: tuple[type, ...]) -> dict[str, type] | None:
    """Map the ``type`` literal of each tagged dataclass to its class.

    Returns None when the options are not all tagged dataclasses.
    """
    variants = {}
    for option in options:
        tag = getattr(option, "type", None)
        if not dataclasses.is_dataclass(option) or not isinstance(tag, str):
            return None
        variants[tag] = option
    return variants


def _is_optional(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType) and type(
        None,
    ) in get_args(tp)


def _decode_base64(value: Any, path: str) -> bytes:
    if not isinstance(value, str):
        raise ProtocolDecodeError(
            f"Expected base64 text at '{path}', got {type(value).__name__}",
        )
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ProtocolDecodeError(
            f"Invalid base64-encoded data at '{path}': {e}",
        ) from e


def _decode_tool_choice(
    value: Any,
    path: str,
) -> ToolChoiceMode | FunctionToolChoice:
    """Decode the tool choice, trying the plain string form first."""
    if isinstance(value, str):
        try:
            return ToolChoiceMode(value)
        except ValueError as e:
            raise ProtocolDecodeError(
                f"Invalid tool choice at '{path}': {value!r}",
            ) from e

    if isinstance(value, dict) and value.get("type") == "function":
        function = value.get("function")
        if isinstance(function, dict) and isinstance(
            function.get("name"),
            str,
        ):
            return FunctionToolChoice(name=function["name"])

    raise ProtocolDecodeError(f"Invalid tool choice at '{path}': {value!r}")


def _decode_union(args: tuple[Any, ...], value: Any, path: str) -> Any:
    options = tuple(arg for arg in args if arg is not type(None))

    if value is None:
        if len(options) < len(args):
            return None
        raise ProtocolDecodeError(f"Unexpected null at '{path}'")

    if frozenset(options) == _TOOL_CHOICE_TYPES:
        return _decode_tool_choice(value, path)

    if len(options) == 1:
        return _decode_value(options[0], value, path)

    variants = _get_variants(options)
    if variants is None:
        raise ProtocolDecodeError(f"Cannot decode '{path}' as {args}")

    if not isinstance(value, dict):
        raise ProtocolDecodeError(
            f"Expected a JSON object at '{path}', "
            f"got {type(value).__name__}",
        )

    tag = value.get("type")
    variant = variants.get(tag)
    if variant is None:
        raise ProtocolDecodeError(f"Unknown type {tag!r} at '{path}'")

    return _decode_dataclass(variant, value, path)


def _decode_value(  # pylint: disable=too-many-return-statements
    tp: Any,
    value: Any,
    path: str,
) -> Any:
    """Decode a wire value into the given type."""
    if tp is Any:
        return value

    origin = get_origin(tp)

    if origin in (Union, types.UnionType):
        return _decode_union(get_args(tp), value, path)

    if origin is Literal:
        if value not in get_args(tp):
            raise ProtocolDecodeError(
                f"Expected one of {get_args(tp)} at '{path}', got {value!r}",
            )
        return value

    if origin is list:
        if not isinstance(value, list):
            raise ProtocolDecodeError(
                f"Expected a JSON array at '{path}', "
                f"got {type(value).__name__}",
            )
        (item_type,) = get_args(tp)
        return [
            _decode_value(item_type, item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if origin is dict or tp is dict:
        if not isinstance(value, dict):
            raise ProtocolDecodeError(
                f"Expected a JSON object at '{path}', "
                f"got {type(value).__name__}",
            )
        return dict(value)

    if tp is bytes:
        return _decode_base64(value, path)

    if isinstance(tp, type) and issubclass(tp, Enum):
        try:
            return tp(value)
        except ValueError as e:
            raise ProtocolDecodeError(
                f"Invalid {tp.__name__} value at '{path}': {value!r}",
            ) from e

    if tp is FunctionToolChoice:
        return _decode_tool_choice(value, path)

    if dataclasses.is_dataclass(tp):
        return _decode_dataclass(tp, value, path)

    if tp is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif tp is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif tp in (str, bool):
        if isinstance(value, tp):
            return value
    else:
        raise ProtocolDecodeError(f"Unsupported field type {tp} at '{path}'")

    raise ProtocolDecodeError(
        f"Expected {tp.__name__} at '{path}', got {type(value).__name__}",
    )


def _decode_dataclass(cls: type, data: Any, path: str) -> Any:
    """Decode a JSON object into a dataclass.

    Unknown keys are ignored. A null or missing value falls back to the
    field default, and is an error for fields without one.
    """
    if not isinstance(data, dict):
        raise ProtocolDecodeError(
            f"Expected a JSON object for {cls.__name__} at '{path}', "
            f"got {type(data).__name__}",
        )

    hints = _get_type_hints(cls)
    kwargs = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue

        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        value = data.get(f.name)

        if f.name not in data or (
            value is None and has_default and not _is_optional(hints[f.name])
        ):
            if not has_default:
                raise ProtocolDecodeError(
                    f"Missing field '{f.name}' for {cls.__name__} at "
                    f"'{path}'",
                )
            continue

        kwargs[f.name] = _decode_value(
            hints[f.name],
            value,
            f"{path}.{f.name}",
        )

    return cls(**kwargs)


def _load_event_object(json_str: str | bytes) -> tuple[str, dict[str, Any]]:
    """Parse the JSON text and read the ``type`` discriminator only."""
    try:
        data = json.loads(json_str)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProtocolDecodeError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ProtocolDecodeError(
            f"Expected JSON object, got {type(data).__name__}",
        )

    event_type = data.get("type")
    if not isinstance(event_type, str) or not event_type:
        raise ProtocolDecodeError("Missing 'type' field")

    return event_type, data


def deserialize_server_event(json_str: str | bytes) -> ServerEvent:
    """Deserialize a JSON string to a server event.

    Args:
        json_str (`str | bytes`):
            JSON string to deserialize.

    Returns:
        `ServerEvent`:
            The server event of the variant named by the ``type`` field.

    Raises:
        `ProtocolDecodeError`:
            If the JSON is invalid, the event type is unknown, or the fields
            do not match the event variant.

    Example:
        .. code-block:: python

            json_str = '{"type": "conversation.item.deleted", "item_id": "m1"}'
            event = deserialize_server_event(json_str)
    """
    event_type, data = _load_event_object(json_str)

    event_class = SERVER_EVENT_TYPES.get(event_type)
    if event_class is None:
        raise ProtocolDecodeError(f"Unknown server event type: {event_type}")

    return _decode_dataclass(event_class, data, event_type)


def deserialize_client_event(json_str: str | bytes) -> ClientEvent:
    """Deserialize a JSON string to a client event.

    Args:
        json_str (`str | bytes`):
            JSON string to deserialize.

    Returns:
        `ClientEvent`:
            The client event of the variant named by the ``type`` field.

    Raises:
        `ProtocolDecodeError`:
            If the JSON is invalid, the event type is unknown, or the fields
            do not match the event variant.
    """
    event_type, data = _load_event_object(json_str)

    event_class = CLIENT_EVENT_TYPES.get(event_type)
    if event_class is None:
        raise ProtocolDecodeError(f"Unknown client event type: {event_type}")

    return _decode_dataclass(event_class, data, event_type)
