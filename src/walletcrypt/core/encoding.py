""" Byte / text / base64 conversion utilities. """

from __future__ import annotations

import base64
import binascii

from .exceptions import InvalidArgumentError


def to_bytes(value: str | bytes | bytearray | memoryview) -> bytes:
    # Text is UTF-8 encoded, buffers are copied into immutable bytes.
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise InvalidArgumentError(f"Expected str or bytes, got {type(value).__name__}")


def from_utf8(data: bytes) -> str:
    return bytes(data).decode("utf-8")


def to_b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def from_b64(text: str | bytes) -> bytes:
    """Decode standard base64 text, rejecting malformed input."""
    if not isinstance(text, (str, bytes)):
        raise InvalidArgumentError(
            f"Required base64 value was not provided or is not text (got {type(text).__name__})"
        )
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(f"Invalid base64 value: {e}") from e
