"""Cryptographic primitives for pqseal."""

from .aead import generate_nonce, open_sealed, seal
from .constants import AES_GCM_NONCE_SIZE, AES_GCM_TAG_SIZE, AES_KEY_SIZE, SHARED_SECRET_SIZE
from .kem import (
    MCELIECE_8192128,
    ML_KEM_768,
    KemAdapter,
    PqcryptoKem,
    generate_keypair_async,
    get_kem,
)
from .utils import from_base64, to_base64

__all__ = [
    "AES_GCM_NONCE_SIZE",
    "AES_GCM_TAG_SIZE",
    "AES_KEY_SIZE",
    "MCELIECE_8192128",
    "ML_KEM_768",
    "SHARED_SECRET_SIZE",
    "KemAdapter",
    "PqcryptoKem",
    "from_base64",
    "generate_keypair_async",
    "generate_nonce",
    "get_kem",
    "open_sealed",
    "seal",
    "to_base64",
]
