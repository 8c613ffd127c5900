"""HybridCipher - Main entry point for pqseal."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from . import hybrid, keys
from .crypto.kem import KemAdapter, generate_keypair_async, get_kem
from .types import CipherConfig, DecryptResult, KemAlgorithm, KeyPair

logger = logging.getLogger("pqseal")


class HybridCipher:
    """Hybrid post-quantum encryption bound to one KEM parameter set.

    Example:
        ```python
        import asyncio
        from pqseal import HybridCipher

        async def main():
            cipher = HybridCipher()
            keypair = await cipher.generate_keypair()
            envelope = cipher.encrypt(keypair.public_key, b"hello")
            assert cipher.decrypt(keypair.private_key, envelope) == b"hello"

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        *,
        kem: KemAlgorithm | str | None = None,
        config: CipherConfig | None = None,
    ) -> None:
        """Initialize the cipher.

        Args:
            kem: KEM parameter set. Overrides ``config.kem`` when given.
            config: Full configuration. Defaults to ``CipherConfig()``.
        """
        self._config = config or CipherConfig()
        if kem is not None:
            self._config = replace(self._config, kem=KemAlgorithm(kem))
        self._kem: KemAdapter = get_kem(self._config.kem)

    @classmethod
    def from_env(cls) -> HybridCipher:
        """Create a cipher configured from environment variables."""
        return cls(config=CipherConfig.from_env())

    @property
    def config(self) -> CipherConfig:
        return self._config

    @property
    def kem(self) -> KemAdapter:
        return self._kem

    async def generate_keypair(self) -> KeyPair:
        """Generate a keypair without blocking the event loop.

        Returns:
            A new KeyPair.

        Raises:
            KemFaultError: If key generation fails.
        """
        keypair = await generate_keypair_async(self._kem)
        logger.debug(
            "Generated %s keypair (public %d bytes, private %d bytes)",
            keypair.algorithm.value,
            len(keypair.public_key),
            len(keypair.private_key),
        )
        return keypair

    def generate_keypair_sync(self) -> KeyPair:
        """Generate a keypair on the calling thread."""
        return self._kem.generate_keypair()

    def encrypt(self, public_key: bytes, plaintext: bytes) -> bytes:
        """Encrypt plaintext into envelope bytes. See ``hybrid.encrypt``."""
        return hybrid.encrypt(public_key, plaintext, self._kem)

    def decrypt(self, private_key: bytes, packaged: bytes) -> bytes:
        """Decrypt envelope bytes. See ``hybrid.decrypt``."""
        return hybrid.decrypt(private_key, packaged, self._kem)

    def decrypt_detailed(self, private_key: bytes, packaged: bytes) -> DecryptResult:
        """Decrypt envelope bytes and report the failure kind."""
        return hybrid.decrypt_detailed(private_key, packaged, self._kem)

    def encrypt_text(self, public_key_b64: str, message: str) -> str:
        """Encrypt a text message into a base64 envelope."""
        return hybrid.encrypt_text(public_key_b64, message, self._kem)

    def decrypt_text(self, private_key_b64: str, ciphertext_b64: str) -> str:
        """Decrypt a base64 envelope into a text message."""
        return hybrid.decrypt_text(private_key_b64, ciphertext_b64, self._kem)

    def load_public_key(self, file_path: str | Path) -> bytes:
        """Read a public key file, checking its size against the KEM.

        Raises:
            InvalidEncodingError: If the file is not valid base64.
            InvalidKeyError: If the key has the wrong length.
        """
        return keys.read_key_file(file_path, self._kem.public_key_size)

    def load_private_key(self, file_path: str | Path) -> bytes:
        """Read a private key file, checking its size against the KEM.

        Raises:
            InvalidEncodingError: If the file is not valid base64.
            InvalidKeyError: If the key has the wrong length.
        """
        return keys.read_key_file(file_path, self._kem.private_key_size)

    def encrypt_to_file(
        self, public_key: bytes, plaintext: bytes, file_path: str | Path
    ) -> Path:
        """Encrypt plaintext and write the base64 envelope to a file.

        Returns:
            The path written.
        """
        return keys.write_ciphertext_file(file_path, self.encrypt(public_key, plaintext))

    def decrypt_file(self, private_key: bytes, file_path: str | Path) -> bytes:
        """Read a base64 envelope file and decrypt it.

        Raises:
            InvalidEncodingError: If the file is not valid base64.
            DecryptionError: If decryption fails.
        """
        return self.decrypt(private_key, keys.read_ciphertext_file(file_path))
