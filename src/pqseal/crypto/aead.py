"""AES-256-GCM sealing for pqseal.

No associated data is used. Sealed output is the ciphertext followed by
the 16-byte authentication tag.
"""

from __future__ import annotations

import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import AuthenticationFailedError, InvalidKeyLengthError, InvalidNonceError
from .constants import AES_GCM_NONCE_SIZE, AES_GCM_TAG_SIZE, AES_KEY_SIZE


def generate_nonce() -> bytes:
    """Generate a fresh random 12-byte nonce from the OS CSPRNG."""
    return secrets.token_bytes(AES_GCM_NONCE_SIZE)


def _check_params(key: bytes, nonce: bytes) -> None:
    if len(key) != AES_KEY_SIZE:
        raise InvalidKeyLengthError(f"Invalid AES key length: {len(key)}, expected {AES_KEY_SIZE}")
    if len(nonce) != AES_GCM_NONCE_SIZE:
        raise InvalidNonceError(
            f"Invalid nonce length: {len(nonce)}, expected {AES_GCM_NONCE_SIZE}"
        )


def seal(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """Encrypt and authenticate plaintext with AES-256-GCM.

    The caller must never reuse a nonce with the same key.

    Args:
        key: The 32-byte key.
        nonce: The 12-byte nonce.
        plaintext: Data to encrypt (may be empty).

    Returns:
        Ciphertext with the authentication tag appended.

    Raises:
        InvalidKeyLengthError: If the key is not 32 bytes.
        InvalidNonceError: If the nonce is not 12 bytes.
    """
    _check_params(key, nonce)
    return AESGCM(key).encrypt(nonce, plaintext, None)


def open_sealed(key: bytes, nonce: bytes, sealed: bytes) -> bytes:
    """Verify and decrypt AES-256-GCM output.

    Args:
        key: The 32-byte key.
        nonce: The 12-byte nonce used by ``seal``.
        sealed: Ciphertext with appended tag.

    Returns:
        The plaintext.

    Raises:
        InvalidKeyLengthError: If the key is not 32 bytes.
        InvalidNonceError: If the nonce is not 12 bytes.
        AuthenticationFailedError: If the tag does not verify.
    """
    _check_params(key, nonce)
    if len(sealed) < AES_GCM_TAG_SIZE:
        raise AuthenticationFailedError("Sealed data too short (missing authentication tag)")
    try:
        return AESGCM(key).decrypt(nonce, sealed, None)
    except InvalidTag as e:
        raise AuthenticationFailedError("Authentication tag verification failed") from e
