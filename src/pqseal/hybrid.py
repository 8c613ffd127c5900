"""Hybrid encryption: KEM-established key + AES-256-GCM."""

from __future__ import annotations

import logging

from . import envelope
from .constants import DECRYPTION_FAILED_MESSAGE, DEFAULT_KEM
from .crypto.aead import generate_nonce, open_sealed, seal
from .crypto.kem import KemAdapter, get_kem
from .crypto.utils import from_base64, to_base64
from .errors import DecryptionError, PQSealError
from .types import DecryptResult

logger = logging.getLogger("pqseal")


def _resolve(kem: KemAdapter | None) -> KemAdapter:
    return kem if kem is not None else get_kem(DEFAULT_KEM)


def encrypt(public_key: bytes, plaintext: bytes, kem: KemAdapter | None = None) -> bytes:
    """Encrypt plaintext for the holder of ``public_key``.

    Every call encapsulates a new shared secret and draws a new nonce, so
    encrypting the same plaintext twice gives different output.

    Args:
        public_key: The recipient's KEM public key.
        plaintext: Data to encrypt (may be empty).
        kem: KEM adapter matching the key. Defaults to Classic McEliece 8192128.

    Returns:
        The packaged envelope bytes.

    Raises:
        InvalidKeyError: If the public key does not fit the KEM.
        KemFaultError: If encapsulation fails.
    """
    kem = _resolve(kem)
    encapsulation = kem.encapsulate(public_key)
    nonce = generate_nonce()
    sealed_data = seal(encapsulation.shared_secret, nonce, plaintext)
    packaged = envelope.pack(encapsulation.kem_ciphertext, nonce, sealed_data)
    logger.debug(
        "Encrypted %d bytes with %s into a %d-byte envelope",
        len(plaintext),
        kem.algorithm.value,
        len(packaged),
    )
    return packaged


def _open_envelope(private_key: bytes, packaged: bytes, kem: KemAdapter) -> bytes:
    parsed = envelope.unpack(packaged)
    shared_secret = kem.decapsulate(private_key, parsed.kem_ciphertext)
    return open_sealed(shared_secret, parsed.nonce, parsed.sealed_data)


def decrypt_detailed(
    private_key: bytes, packaged: bytes, kem: KemAdapter | None = None
) -> DecryptResult:
    """Decrypt an envelope and report the specific failure kind.

    Intended for logging and tests. Do not show the failure kind to the
    party that supplied the envelope.

    Args:
        private_key: The recipient's KEM private key.
        packaged: The packaged envelope bytes.
        kem: KEM adapter matching the key. Defaults to Classic McEliece 8192128.

    Returns:
        DecryptResult with either the plaintext or the failure kind.
    """
    kem = _resolve(kem)
    try:
        plaintext = _open_envelope(private_key, packaged, kem)
    except PQSealError as e:
        return DecryptResult(failure=e.kind)
    return DecryptResult(plaintext=plaintext)


def decrypt(private_key: bytes, packaged: bytes, kem: KemAdapter | None = None) -> bytes:
    """Decrypt an envelope.

    All failures raise the same DecryptionError so the outcome does not
    reveal which stage rejected the input.

    Args:
        private_key: The recipient's KEM private key.
        packaged: The packaged envelope bytes.
        kem: KEM adapter matching the key. Defaults to Classic McEliece 8192128.

    Returns:
        The plaintext.

    Raises:
        DecryptionError: If decryption fails for any reason.
    """
    kem = _resolve(kem)
    try:
        return _open_envelope(private_key, packaged, kem)
    except PQSealError as e:
        logger.debug("Decryption failed: %s", e.kind.value if e.kind else type(e).__name__)
        raise DecryptionError(DECRYPTION_FAILED_MESSAGE) from e


def encrypt_text(public_key_b64: str, message: str, kem: KemAdapter | None = None) -> str:
    """Encrypt a text message for a base64-encoded public key.

    Args:
        public_key_b64: The recipient's public key in standard base64.
        message: The message to encrypt, encoded as UTF-8.
        kem: KEM adapter matching the key. Defaults to Classic McEliece 8192128.

    Returns:
        The envelope in standard base64.

    Raises:
        InvalidEncodingError: If the public key is not valid base64.
        InvalidKeyError: If the public key does not fit the KEM.
        KemFaultError: If encapsulation fails.
    """
    public_key = from_base64(public_key_b64)
    return to_base64(encrypt(public_key, message.encode("utf-8"), kem))


def decrypt_text(private_key_b64: str, ciphertext_b64: str, kem: KemAdapter | None = None) -> str:
    """Decrypt a base64 envelope into a text message.

    Invalid base64 is reported as InvalidEncodingError before any
    decryption is attempted. Everything after that raises DecryptionError.

    Args:
        private_key_b64: The recipient's private key in standard base64.
        ciphertext_b64: The envelope in standard base64.
        kem: KEM adapter matching the key. Defaults to Classic McEliece 8192128.

    Returns:
        The decrypted message.

    Raises:
        InvalidEncodingError: If the key or ciphertext is not valid base64.
        DecryptionError: If decryption fails.
    """
    private_key = from_base64(private_key_b64)
    packaged = from_base64(ciphertext_b64)
    plaintext = decrypt(private_key, packaged, kem)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptionError(DECRYPTION_FAILED_MESSAGE) from e
