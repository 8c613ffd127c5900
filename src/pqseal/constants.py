"""Default configuration constants for pqseal."""

# Environment variables
ENV_KEM = "PQSEAL_KEM"
ENV_KEY_DIR = "PQSEAL_KEY_DIR"

# Default KEM parameter set (value of KemAlgorithm)
DEFAULT_KEM = "mceliece8192128"

# Default export file names
DEFAULT_PUBLIC_KEY_FILE = "mceliece_public_key.txt"
DEFAULT_PRIVATE_KEY_FILE = "mceliece_private_key.txt"
DEFAULT_CIPHERTEXT_FILE = "encrypted_message.txt"

# Progress indicator refresh for long key generation (milliseconds)
DEFAULT_PROGRESS_INTERVAL_MS = 250

DECRYPTION_FAILED_MESSAGE = "Decryption failed. Wrong key or corrupted data."
