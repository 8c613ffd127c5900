"""pqseal - hybrid post-quantum public-key encryption.

A post-quantum KEM (Classic McEliece 8192128 by default, ML-KEM-768
optionally) establishes a 32-byte key for AES-256-GCM. The result is one
self-describing envelope: ``[u32 KEM ciphertext length][KEM ciphertext]
[12-byte nonce][sealed data]``.

Example:
    ```python
    import asyncio
    from pqseal import HybridCipher

    async def main():
        cipher = HybridCipher(kem="ml-kem-768")
        keypair = await cipher.generate_keypair()

        envelope = cipher.encrypt(keypair.public_key, b"attack at dawn")
        print(cipher.decrypt(keypair.private_key, envelope))

    asyncio.run(main())
    ```
"""

from .client import HybridCipher
from .constants import (
    DEFAULT_CIPHERTEXT_FILE,
    DEFAULT_KEM,
    DEFAULT_PRIVATE_KEY_FILE,
    DEFAULT_PUBLIC_KEY_FILE,
)
from .crypto import KemAdapter, generate_keypair_async, get_kem
from .envelope import pack, unpack
from .errors import (
    AuthenticationFailedError,
    DecryptionError,
    InvalidCiphertextError,
    InvalidEncodingError,
    InvalidKeyError,
    InvalidKeyLengthError,
    InvalidNonceError,
    KemFaultError,
    PQSealError,
    TruncatedEnvelopeError,
)
from .hybrid import decrypt, decrypt_detailed, decrypt_text, encrypt, encrypt_text
from .types import (
    CipherConfig,
    DecryptResult,
    EncapsulationResult,
    Envelope,
    FailureKind,
    KemAlgorithm,
    KeyPair,
)

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "HybridCipher",
    "KemAdapter",
    # Operations
    "decrypt",
    "decrypt_detailed",
    "decrypt_text",
    "encrypt",
    "encrypt_text",
    "generate_keypair_async",
    "get_kem",
    "pack",
    "unpack",
    # Constants
    "DEFAULT_KEM",
    "DEFAULT_PUBLIC_KEY_FILE",
    "DEFAULT_PRIVATE_KEY_FILE",
    "DEFAULT_CIPHERTEXT_FILE",
    # Configuration
    "CipherConfig",
    "KemAlgorithm",
    # Data types
    "DecryptResult",
    "EncapsulationResult",
    "Envelope",
    "FailureKind",
    "KeyPair",
    # Errors
    "PQSealError",
    "InvalidEncodingError",
    "TruncatedEnvelopeError",
    "InvalidKeyError",
    "InvalidKeyLengthError",
    "InvalidNonceError",
    "InvalidCiphertextError",
    "AuthenticationFailedError",
    "KemFaultError",
    "DecryptionError",
    # Version
    "__version__",
]
