"""Key and ciphertext text files for pqseal.

A key file holds exactly ``base64(raw key bytes)``: no header, no
metadata, no line wrapping. Ciphertext files hold a base64 envelope.

WARNING: Private key files are written in the clear. Protect them.
"""

from __future__ import annotations

from pathlib import Path

from .constants import (
    DEFAULT_CIPHERTEXT_FILE,
    DEFAULT_PRIVATE_KEY_FILE,
    DEFAULT_PUBLIC_KEY_FILE,
)
from .crypto.utils import from_base64, to_base64
from .errors import InvalidKeyError
from .types import KeyPair


def export_key(key: bytes) -> str:
    """Encode raw key bytes in the key export format."""
    return to_base64(key)


def import_key(text: str, expected_size: int | None = None) -> bytes:
    """Decode a key from the key export format.

    Args:
        text: The base64 text. Surrounding whitespace is ignored.
        expected_size: If given, the decoded key must have this length.

    Returns:
        The raw key bytes.

    Raises:
        InvalidEncodingError: If the text is not valid base64.
        InvalidKeyError: If the decoded key has the wrong length.
    """
    key = from_base64(text)
    if expected_size is not None and len(key) != expected_size:
        raise InvalidKeyError(f"Invalid key length: {len(key)} bytes, expected {expected_size}")
    return key


def write_key_file(file_path: str | Path, key: bytes) -> Path:
    """Write a key to a text file.

    Args:
        file_path: Path to the output file.
        key: The raw key bytes.

    Returns:
        The path written.
    """
    path = Path(file_path)
    path.write_text(export_key(key))
    return path


def read_key_file(file_path: str | Path, expected_size: int | None = None) -> bytes:
    """Read a key from a text file written by ``write_key_file``.

    Raises:
        InvalidEncodingError: If the file is not valid base64.
        InvalidKeyError: If the decoded key has the wrong length.
    """
    return import_key(Path(file_path).read_text(), expected_size)


def save_keypair(keypair: KeyPair, directory: str | Path) -> tuple[Path, Path]:
    """Write both halves of a keypair into a directory.

    The directory is created if missing. The private key file is made
    readable and writable by its owner only.

    Args:
        keypair: The keypair to save.
        directory: Target directory.

    Returns:
        Tuple of (public key path, private key path).
    """
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)
    public_path = write_key_file(target / DEFAULT_PUBLIC_KEY_FILE, keypair.public_key)
    private_path = write_key_file(target / DEFAULT_PRIVATE_KEY_FILE, keypair.private_key)
    private_path.chmod(0o600)
    return public_path, private_path


def write_ciphertext_file(file_path: str | Path, packaged: bytes) -> Path:
    """Write an envelope to a text file as base64."""
    path = Path(file_path)
    if path.is_dir():
        path = path / DEFAULT_CIPHERTEXT_FILE
    path.write_text(to_base64(packaged))
    return path


def read_ciphertext_file(file_path: str | Path) -> bytes:
    """Read an envelope from a base64 text file.

    Raises:
        InvalidEncodingError: If the file is not valid base64.
    """
    return from_base64(Path(file_path).read_text())
