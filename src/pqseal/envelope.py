"""Hybrid envelope wire format.

Layout, integers big-endian::

    [4 bytes]  length L of the KEM ciphertext (unsigned 32-bit)
    [L bytes]  KEM ciphertext
    [12 bytes] AES-GCM nonce
    [rest]     sealed data (ciphertext || tag)

The length prefix keeps the envelope self-describing, so a reader does not
need to know the KEM parameter set to split the fields. ``unpack`` checks
structure only; a bad tag or short sealed data is left to AEAD.
"""

from __future__ import annotations

from .crypto.constants import (
    AES_GCM_NONCE_SIZE,
    ENVELOPE_LENGTH_PREFIX_SIZE,
    ENVELOPE_MAX_KEM_CIPHERTEXT_SIZE,
)
from .errors import InvalidNonceError, TruncatedEnvelopeError
from .types import Envelope


def header_size(kem_ciphertext_length: int) -> int:
    """Number of bytes before the sealed data for a given KEM ciphertext length."""
    return ENVELOPE_LENGTH_PREFIX_SIZE + kem_ciphertext_length + AES_GCM_NONCE_SIZE


def pack(kem_ciphertext: bytes, nonce: bytes, sealed_data: bytes) -> bytes:
    """Serialize envelope fields into one byte string.

    Identical inputs always produce identical output.

    Args:
        kem_ciphertext: The KEM ciphertext.
        nonce: The 12-byte nonce.
        sealed_data: AES-GCM output including the tag.

    Returns:
        The packaged bytes.

    Raises:
        InvalidNonceError: If the nonce is not 12 bytes.
        ValueError: If the KEM ciphertext does not fit a 32-bit length.
    """
    if len(nonce) != AES_GCM_NONCE_SIZE:
        raise InvalidNonceError(
            f"Invalid nonce length: {len(nonce)}, expected {AES_GCM_NONCE_SIZE}"
        )
    if len(kem_ciphertext) > ENVELOPE_MAX_KEM_CIPHERTEXT_SIZE:
        raise ValueError(f"KEM ciphertext too long: {len(kem_ciphertext)} bytes")

    length_prefix = len(kem_ciphertext).to_bytes(ENVELOPE_LENGTH_PREFIX_SIZE, "big")
    return b"".join((length_prefix, kem_ciphertext, nonce, sealed_data))


def unpack(data: bytes) -> Envelope:
    """Split packaged bytes into envelope fields.

    Args:
        data: The packaged bytes.

    Returns:
        The parsed Envelope.

    Raises:
        TruncatedEnvelopeError: If the buffer is shorter than the length
            prefix, or shorter than the prefix, declared KEM ciphertext and
            nonce together.
    """
    if len(data) < ENVELOPE_LENGTH_PREFIX_SIZE:
        raise TruncatedEnvelopeError(
            f"Envelope too short: {len(data)} bytes, missing length prefix"
        )

    kem_length = int.from_bytes(data[:ENVELOPE_LENGTH_PREFIX_SIZE], "big")
    nonce_start = ENVELOPE_LENGTH_PREFIX_SIZE + kem_length
    sealed_start = header_size(kem_length)
    if len(data) < sealed_start:
        raise TruncatedEnvelopeError(
            f"Envelope too short: {len(data)} bytes, "
            f"expected at least {sealed_start} for a {kem_length}-byte KEM ciphertext"
        )

    return Envelope(
        kem_ciphertext=bytes(data[ENVELOPE_LENGTH_PREFIX_SIZE:nonce_start]),
        nonce=bytes(data[nonce_start:sealed_start]),
        sealed_data=bytes(data[sealed_start:]),
    )
