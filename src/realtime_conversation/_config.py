# -*- coding: utf-8 -*-
"""Connection configuration for the realtime endpoint."""

import os
from dataclasses import dataclass

DEFAULT_MODEL = "gpt-4o-realtime-preview-2024-10-01"
DEFAULT_BASE_URL = "wss://api.openai.com/v1/realtime"


@dataclass
class RealtimeConfig:
    """The endpoint, model and credential used to open a realtime session.

    Example:
        .. code-block:: python

            config = RealtimeConfig(api_key="sk-...")
            transport = RealtimeTransport.from_config(config)
    """

    api_key: str
    """The bearer token sent in the ``Authorization`` header."""

    model: str = DEFAULT_MODEL
    """The model identifier, passed as the ``model`` query parameter."""

    base_url: str = DEFAULT_BASE_URL
    """The websocket endpoint without query parameters."""

    beta_header: str = "realtime=v1"
    """The protocol version marker sent in the ``OpenAI-Beta`` header."""

    @property
    def websocket_url(self) -> str:
        """The websocket URL with the model parameter."""
        return f"{self.base_url}?model={self.model}"

    def headers(self) -> dict[str, str]:
        """Get the headers required by the realtime endpoint.

        Returns:
            `dict[str, str]`:
                The authentication and protocol version headers.
        """
        return {
            "Authorization": f"Bearer {self.api_key}",
            "OpenAI-Beta": self.beta_header,
        }

    @classmethod
    def from_env(cls) -> "RealtimeConfig":
        """Build the configuration from environment variables.

        ``OPENAI_API_KEY`` is required, ``OPENAI_REALTIME_MODEL`` and
        ``OPENAI_REALTIME_URL`` override the defaults.

        Returns:
            `RealtimeConfig`:
                The configuration read from the environment.

        Raises:
            `ValueError`:
                If ``OPENAI_API_KEY`` is not set.
        """
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError(
                "The OPENAI_API_KEY environment variable is not set.",
            )

        return cls(
            api_key=api_key,
            model=os.getenv("OPENAI_REALTIME_MODEL") or DEFAULT_MODEL,
            base_url=os.getenv("OPENAI_REALTIME_URL") or DEFAULT_BASE_URL,
        )
