"""KEM adapters for pqseal.

Each supported parameter set is a ``PqcryptoKem`` wrapping one
``pqcrypto.kem`` module. The hybrid layer only sees the ``KemAdapter``
interface, so any KEM with a 32-byte shared secret can be plugged in.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from types import ModuleType

from pqcrypto.kem import mceliece8192128, ml_kem_768

from ..errors import InvalidCiphertextError, InvalidKeyError, KemFaultError
from ..types import EncapsulationResult, KemAlgorithm, KeyPair
from .constants import (
    MCELIECE8192128_CIPHERTEXT_SIZE,
    MCELIECE8192128_PUBLIC_KEY_SIZE,
    MCELIECE8192128_SECRET_KEY_SIZE,
    MLKEM768_CIPHERTEXT_SIZE,
    MLKEM768_PUBLIC_KEY_SIZE,
    MLKEM768_SECRET_KEY_SIZE,
    SHARED_SECRET_SIZE,
)

logger = logging.getLogger("pqseal")


class KemAdapter(ABC):
    """Key encapsulation capability used by the hybrid scheme."""

    algorithm: KemAlgorithm
    public_key_size: int
    private_key_size: int
    ciphertext_size: int
    shared_secret_size: int = SHARED_SECRET_SIZE

    @abstractmethod
    def generate_keypair(self) -> KeyPair:
        """Generate a fresh keypair."""
        ...

    @abstractmethod
    def encapsulate(self, public_key: bytes) -> EncapsulationResult:
        """Create a random shared secret and its ciphertext for ``public_key``."""
        ...

    @abstractmethod
    def decapsulate(self, private_key: bytes, kem_ciphertext: bytes) -> bytes:
        """Recover the shared secret from ``kem_ciphertext``."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.algorithm.value})"


class PqcryptoKem(KemAdapter):
    """KEM adapter backed by a ``pqcrypto.kem`` module.

    The module must expose ``generate_keypair() -> (pk, sk)``,
    ``encrypt(pk) -> (ct, ss)`` and ``decrypt(sk, ct) -> ss``.
    """

    def __init__(
        self,
        algorithm: KemAlgorithm,
        module: ModuleType,
        *,
        public_key_size: int,
        private_key_size: int,
        ciphertext_size: int,
    ) -> None:
        self.algorithm = algorithm
        self._module = module
        self.public_key_size = public_key_size
        self.private_key_size = private_key_size
        self.ciphertext_size = ciphertext_size

    def generate_keypair(self) -> KeyPair:
        """Generate a new keypair.

        Classic McEliece key generation takes seconds; use
        ``generate_keypair_async`` from an event loop.

        Returns:
            A new KeyPair.

        Raises:
            KemFaultError: If the underlying library fails.
        """
        logger.debug("Generating %s keypair", self.algorithm.value)
        try:
            public_key, private_key = self._module.generate_keypair()
        except Exception as e:
            raise KemFaultError(f"{self.algorithm.value} key generation failed: {e}") from e

        keypair = KeyPair(
            public_key=bytes(public_key),
            private_key=bytes(private_key),
            algorithm=self.algorithm,
        )
        if (
            len(keypair.public_key) != self.public_key_size
            or len(keypair.private_key) != self.private_key_size
        ):
            raise KemFaultError(
                f"{self.algorithm.value} produced keys of unexpected size: "
                f"{len(keypair.public_key)}/{len(keypair.private_key)} bytes"
            )
        return keypair

    def encapsulate(self, public_key: bytes) -> EncapsulationResult:
        """Encapsulate a fresh shared secret against a public key.

        Args:
            public_key: The recipient's public key.

        Returns:
            EncapsulationResult with the KEM ciphertext and shared secret.

        Raises:
            InvalidKeyError: If the public key has the wrong length.
            KemFaultError: If the underlying library fails or returns output of the
                wrong size.
        """
        if len(public_key) != self.public_key_size:
            raise InvalidKeyError(
                f"Invalid public key length: {len(public_key)}, expected {self.public_key_size}"
            )
        try:
            kem_ciphertext, shared_secret = self._module.encrypt(bytes(public_key))
        except Exception as e:
            raise KemFaultError(f"{self.algorithm.value} encapsulation failed: {e}") from e

        result = EncapsulationResult(
            kem_ciphertext=bytes(kem_ciphertext),
            shared_secret=bytes(shared_secret),
        )
        if len(result.kem_ciphertext) != self.ciphertext_size:
            raise KemFaultError(
                f"{self.algorithm.value} returned a {len(result.kem_ciphertext)}-byte "
                f"KEM ciphertext, expected {self.ciphertext_size}"
            )
        self._check_shared_secret(result.shared_secret)
        return result

    def decapsulate(self, private_key: bytes, kem_ciphertext: bytes) -> bytes:
        """Recover the shared secret for a KEM ciphertext.

        A private key that does not match the ciphertext may yield a wrong
        secret instead of an error; the AEAD layer rejects it afterwards.

        Args:
            private_key: The recipient's private key.
            kem_ciphertext: The KEM ciphertext from the envelope.

        Returns:
            The 32-byte shared secret.

        Raises:
            InvalidKeyError: If the private key has the wrong length.
            InvalidCiphertextError: If the KEM ciphertext has the wrong length.
            KemFaultError: If the underlying library fails.
        """
        if len(private_key) != self.private_key_size:
            raise InvalidKeyError(
                f"Invalid private key length: {len(private_key)}, "
                f"expected {self.private_key_size}"
            )
        if len(kem_ciphertext) != self.ciphertext_size:
            raise InvalidCiphertextError(
                f"Invalid KEM ciphertext length: {len(kem_ciphertext)}, "
                f"expected {self.ciphertext_size}"
            )
        try:
            shared_secret = bytes(self._module.decrypt(bytes(private_key), bytes(kem_ciphertext)))
        except Exception as e:
            raise KemFaultError(f"{self.algorithm.value} decapsulation failed: {e}") from e

        self._check_shared_secret(shared_secret)
        return shared_secret

    def _check_shared_secret(self, shared_secret: bytes) -> None:
        if len(shared_secret) != self.shared_secret_size:
            raise KemFaultError(
                f"{self.algorithm.value} returned a {len(shared_secret)}-byte shared secret, "
                f"expected {self.shared_secret_size}"
            )


MCELIECE_8192128 = PqcryptoKem(
    KemAlgorithm.MCELIECE_8192128,
    mceliece8192128,
    public_key_size=MCELIECE8192128_PUBLIC_KEY_SIZE,
    private_key_size=MCELIECE8192128_SECRET_KEY_SIZE,
    ciphertext_size=MCELIECE8192128_CIPHERTEXT_SIZE,
)

ML_KEM_768 = PqcryptoKem(
    KemAlgorithm.ML_KEM_768,
    ml_kem_768,
    public_key_size=MLKEM768_PUBLIC_KEY_SIZE,
    private_key_size=MLKEM768_SECRET_KEY_SIZE,
    ciphertext_size=MLKEM768_CIPHERTEXT_SIZE,
)

_REGISTRY: dict[KemAlgorithm, KemAdapter] = {
    KemAlgorithm.MCELIECE_8192128: MCELIECE_8192128,
    KemAlgorithm.ML_KEM_768: ML_KEM_768,
}


def get_kem(algorithm: KemAlgorithm | str) -> KemAdapter:
    """Look up the adapter for a KEM parameter set.

    Args:
        algorithm: A KemAlgorithm or its string value.

    Returns:
        The registered KemAdapter.

    Raises:
        ValueError: If the algorithm is not supported.
    """
    try:
        return _REGISTRY[KemAlgorithm(algorithm)]
    except ValueError as e:
        supported = ", ".join(alg.value for alg in KemAlgorithm)
        raise ValueError(f"Unsupported KEM: {algorithm!r}, expected one of: {supported}") from e


async def generate_keypair_async(kem: KemAdapter) -> KeyPair:
    """Generate a keypair in a worker thread.

    The event loop stays free to render progress while the KEM runs.
    Cancelling the awaiting task does not stop the generation itself.

    Args:
        kem: The adapter to generate with.

    Returns:
        A new KeyPair.
    """
    return await asyncio.to_thread(kem.generate_keypair)
