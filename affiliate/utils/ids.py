"""Identifier generation."""

from __future__ import annotations

import secrets
import string
import time

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def nanoid(size: int = 7) -> str:
    """Random alphanumeric id of ``size`` characters."""
    return "".join(secrets.choice(ALPHABET) for _ in range(size))


def _encode_base62(value: int, width: int) -> str:
    chars = []
    while value:
        value, rem = divmod(value, 62)
        chars.append(ALPHABET[rem])
    return "".join(reversed(chars)).rjust(width, "0")


def create_id(prefix: str = "") -> str:
    """Prefixed, roughly time-ordered id such as ``cus_1HkZ...``.

    The first 8 characters encode milliseconds since the epoch so ids sort by
    creation time; the remaining 16 are random.
    """
    millis = int(time.time() * 1000)
    return f"{prefix}{_encode_base62(millis, 8)}{nanoid(16)}"
