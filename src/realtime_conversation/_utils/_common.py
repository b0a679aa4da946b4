# -*- coding: utf-8 -*-
"""Common helper functions."""

import shortuuid


def _generate_id(length: int = 32) -> str:
    """Generate a random alphanumeric identifier.

    Args:
        length (`int`, defaults to `32`):
            The length of the identifier. The realtime API accepts client
            item ids of at most 32 characters.

    Returns:
        `str`:
            The random identifier.
    """
    return shortuuid.ShortUUID().random(length=length)
