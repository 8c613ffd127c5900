"""Cryptographic constants for pqseal."""

# Classic McEliece 8192128 sizes in bytes
MCELIECE8192128_PUBLIC_KEY_SIZE = 1_357_824
MCELIECE8192128_SECRET_KEY_SIZE = 14_120
MCELIECE8192128_CIPHERTEXT_SIZE = 208

# ML-KEM-768 sizes in bytes
MLKEM768_PUBLIC_KEY_SIZE = 1184
MLKEM768_SECRET_KEY_SIZE = 2400
MLKEM768_CIPHERTEXT_SIZE = 1088

# Both KEMs produce a 32-byte secret, used directly as the AES-256 key
SHARED_SECRET_SIZE = 32

# AES-256-GCM constants
AES_KEY_SIZE = 32
AES_GCM_NONCE_SIZE = 12
AES_GCM_TAG_SIZE = 16

# Envelope framing
ENVELOPE_LENGTH_PREFIX_SIZE = 4
ENVELOPE_MAX_KEM_CIPHERTEXT_SIZE = 2**32 - 1
