"""Error hierarchy for pqseal."""

from __future__ import annotations

from .types import FailureKind


class PQSealError(Exception):
    """Base exception for all pqseal errors.

    Attributes:
        kind: The failure kind reported by ``decrypt_detailed``.
    """

    kind: FailureKind | None = None


class InvalidEncodingError(PQSealError):
    """Text input is not valid standard base64."""

    kind = FailureKind.INVALID_ENCODING


class TruncatedEnvelopeError(PQSealError):
    """Packaged bytes are too short for the declared KEM ciphertext length."""

    kind = FailureKind.TRUNCATED_ENVELOPE


class InvalidKeyError(PQSealError):
    """Key does not match the expected size for its role."""

    kind = FailureKind.INVALID_KEY


class InvalidKeyLengthError(InvalidKeyError):
    """Symmetric key is not 32 bytes."""

    pass


class InvalidCiphertextError(PQSealError):
    """KEM ciphertext has the wrong length."""

    kind = FailureKind.INVALID_CIPHERTEXT


class InvalidNonceError(PQSealError):
    """AEAD nonce is not 12 bytes."""

    kind = FailureKind.INVALID_CIPHERTEXT


class AuthenticationFailedError(PQSealError):
    """AEAD tag verification failed.

    Covers a wrong key, a wrong nonce, tampered data, or a private key that
    does not belong to the public key used for encryption.
    """

    kind = FailureKind.AUTHENTICATION_FAILED


class KemFaultError(PQSealError):
    """Internal failure of the KEM primitive."""

    kind = FailureKind.KEM_FAULT


class DecryptionError(PQSealError):
    """Decryption failed.

    Raised by ``decrypt`` for every failure mode so callers cannot tell
    which stage rejected the input. The underlying error is chained as
    ``__cause__``.
    """

    pass
