"""Short random identifiers for registered handlers."""

from __future__ import annotations

import secrets

DEFAULT_ID_SIZE = 9


def generate_id(size: int = DEFAULT_ID_SIZE) -> str:
    """
    Generate a short url-safe random identifier.

    Args:
        size: Number of characters in the identifier

    Returns:
        Random identifier string
    """
    if size < 1:
        raise ValueError(f"Identifier size must be positive, got {size}")

    # token_urlsafe yields ~1.3 chars per byte
    return secrets.token_urlsafe(size)[:size]
