# -*- coding: utf-8 -*-
"""The error reported by the server."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ServerError:
    """An application-level error reported by the remote endpoint.

    It is delivered on the conversation error channel and never stored in
    the conversation state.
    """

    type: str
    """The error type, e.g. "invalid_request_error" or "server_error"."""

    message: str
    """A human-readable message."""

    code: str | None = None
    """A machine-readable error code."""

    param: str | None = None
    """The parameter that caused the error."""

    event_id: str | None = None
    """The id of the client event that caused the error."""
