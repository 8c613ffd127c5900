"""Type definitions for pqseal."""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

from .constants import DEFAULT_KEM, ENV_KEM


class KemAlgorithm(str, Enum):
    """Supported KEM parameter sets."""

    MCELIECE_8192128 = "mceliece8192128"
    ML_KEM_768 = "ml-kem-768"


class FailureKind(str, Enum):
    """Specific reason a decryption attempt was rejected."""

    INVALID_ENCODING = "invalid_encoding"
    TRUNCATED_ENVELOPE = "truncated_envelope"
    INVALID_KEY = "invalid_key"
    INVALID_CIPHERTEXT = "invalid_ciphertext"
    AUTHENTICATION_FAILED = "authentication_failed"
    KEM_FAULT = "kem_fault"


@dataclass(frozen=True)
class KeyPair:
    """KEM keypair.

    The public key may be shared freely. The private key must stay with
    its holder.

    Attributes:
        public_key: The public key bytes.
        private_key: The private key bytes.
        algorithm: The KEM parameter set the keys belong to.
    """

    public_key: bytes = field(repr=False)
    private_key: bytes = field(repr=False)
    algorithm: KemAlgorithm

    @property
    def public_key_b64(self) -> str:
        """Standard base64 encoding of the public key."""
        from .crypto.utils import to_base64

        return to_base64(self.public_key)

    def __repr__(self) -> str:
        return (
            f"KeyPair(algorithm={self.algorithm.value}, "
            f"public_key_len={len(self.public_key)}, private_key_len={len(self.private_key)})"
        )


@dataclass(frozen=True)
class EncapsulationResult:
    """Output of encapsulating against a public key.

    The shared secret is used for exactly one encryption and then dropped.

    Attributes:
        kem_ciphertext: Ciphertext the recipient decapsulates.
        shared_secret: 32-byte secret used as the AES-256 key.
    """

    kem_ciphertext: bytes
    shared_secret: bytes = field(repr=False)

    def __repr__(self) -> str:
        return f"EncapsulationResult(kem_ciphertext_len={len(self.kem_ciphertext)})"


@dataclass(frozen=True)
class Envelope:
    """Parsed hybrid ciphertext.

    Iterates as ``(kem_ciphertext, nonce, sealed_data)``.

    Attributes:
        kem_ciphertext: The KEM ciphertext.
        nonce: The 12-byte AES-GCM nonce.
        sealed_data: AES-GCM output including the authentication tag.
    """

    kem_ciphertext: bytes
    nonce: bytes
    sealed_data: bytes

    def __iter__(self) -> Iterator[bytes]:
        return iter((self.kem_ciphertext, self.nonce, self.sealed_data))


@dataclass(frozen=True)
class DecryptResult:
    """Outcome of a decryption attempt.

    Exactly one of ``plaintext`` and ``failure`` is set.

    Attributes:
        plaintext: The recovered plaintext on success.
        failure: The failure kind on error.
    """

    plaintext: bytes | None = field(default=None, repr=False)
    failure: FailureKind | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class CipherConfig:
    """Configuration for HybridCipher.

    Attributes:
        kem: KEM parameter set used for key generation and encryption.
    """

    kem: KemAlgorithm = KemAlgorithm(DEFAULT_KEM)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CipherConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A CipherConfig instance.

        Raises:
            ValueError: If ``PQSEAL_KEM`` names an unknown parameter set.
        """
        env = os.environ if environ is None else environ
        kem_name = env.get(ENV_KEM)
        if not kem_name:
            return cls()
        try:
            return cls(kem=KemAlgorithm(kem_name.strip().lower()))
        except ValueError as e:
            supported = ", ".join(alg.value for alg in KemAlgorithm)
            raise ValueError(
                f"Unsupported KEM in {ENV_KEM}: {kem_name!r}, expected one of: {supported}"
            ) from e
