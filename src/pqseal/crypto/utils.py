"""Base64 encoding/decoding utilities for pqseal."""

from __future__ import annotations

import base64
import binascii

from ..errors import InvalidEncodingError


def to_base64(data: bytes) -> str:
    """Encode bytes to standard base64.

    Args:
        data: The bytes to encode.

    Returns:
        Standard base64 string with padding and no line breaks.
    """
    return base64.b64encode(data).decode("ascii")


def from_base64(s: str | bytes) -> bytes:
    """Decode a standard base64 string to bytes.

    Surrounding whitespace is ignored, anything else outside the standard
    alphabet is rejected.

    Args:
        s: The base64 string to decode.

    Returns:
        The decoded bytes.

    Raises:
        InvalidEncodingError: If the input is not valid base64.
    """
    try:
        if isinstance(s, str):
            s = s.strip().encode("ascii")
        else:
            s = s.strip()
        return base64.b64decode(s, validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise InvalidEncodingError(f"Invalid base64 input: {e}") from e
