# -*- coding: utf-8 -*-
"""The utilities shared across the package."""

from ._channel import Channel
from ._common import _generate_id

__all__ = [
    "Channel",
    "_generate_id",
]
