"""Command-line interface for pqseal.

Usage:
    pqseal keygen [--out DIR]
    pqseal encrypt --key PUBLIC_KEY_FILE [--in FILE] [--out FILE]
    pqseal decrypt --key PRIVATE_KEY_FILE [--in FILE]

Global options ``--kem`` and ``--verbose`` go before the command.
``PQSEAL_KEM`` and ``PQSEAL_KEY_DIR`` are read from the environment or a
``.env`` file.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from dotenv import load_dotenv

from .client import HybridCipher
from .constants import DECRYPTION_FAILED_MESSAGE, ENV_KEY_DIR
from .crypto.utils import from_base64, to_base64
from .errors import DecryptionError, InvalidEncodingError, PQSealError
from .keys import save_keypair, write_ciphertext_file
from .types import CipherConfig, KemAlgorithm
from .utils import format_elapsed, format_size, with_progress

logger = logging.getLogger("pqseal")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pqseal",
        description="Hybrid post-quantum encryption (KEM + AES-256-GCM).",
    )
    parser.add_argument(
        "--kem",
        choices=[alg.value for alg in KemAlgorithm],
        help="KEM parameter set (default: PQSEAL_KEM or mceliece8192128)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    keygen = commands.add_parser("keygen", help="Generate a keypair")
    keygen.add_argument("--out", type=Path, help="Output directory (default: PQSEAL_KEY_DIR or .)")

    encrypt = commands.add_parser("encrypt", help="Encrypt a message")
    encrypt.add_argument("--key", type=Path, required=True, help="Public key file")
    encrypt.add_argument("--in", dest="input", type=Path, help="Message file (default: stdin)")
    encrypt.add_argument("--out", type=Path, help="Ciphertext file (default: stdout)")

    decrypt = commands.add_parser("decrypt", help="Decrypt a message")
    decrypt.add_argument("--key", type=Path, required=True, help="Private key file")
    decrypt.add_argument("--in", dest="input", type=Path, help="Ciphertext file (default: stdin)")
    return parser


def _read_input(path: Path | None, stdin: TextIO) -> str:
    if path is None:
        return stdin.read()
    return path.read_text()


async def keygen(cipher: HybridCipher, out_dir: Path, stdout: TextIO, stderr: TextIO) -> None:
    """Generate a keypair and save both halves into ``out_dir``."""
    start = time.perf_counter()
    keypair = await with_progress(
        cipher.generate_keypair(),
        f"Generating {cipher.kem.algorithm.value} keypair... This may take a while.",
        stderr,
    )
    elapsed = time.perf_counter() - start

    public_path, private_path = save_keypair(keypair, out_dir)
    print(f"Keypair generated in {format_elapsed(elapsed)}!", file=stdout)
    print(f"Public key:  {public_path} ({format_size(len(keypair.public_key))})", file=stdout)
    print(f"Private key: {private_path} ({format_size(len(keypair.private_key))})", file=stdout)


def encrypt(
    cipher: HybridCipher,
    key_path: Path,
    message: str,
    out_path: Path | None,
    stdout: TextIO,
    stderr: TextIO,
) -> None:
    """Encrypt ``message`` for the public key stored at ``key_path``."""
    public_key = cipher.load_public_key(key_path)
    start = time.perf_counter()
    packaged = cipher.encrypt(public_key, message.encode("utf-8"))
    elapsed = time.perf_counter() - start

    if out_path is None:
        print(to_base64(packaged), file=stdout)
    else:
        written = write_ciphertext_file(out_path, packaged)
        print(f"Ciphertext written to {written}", file=stdout)
    print(
        f"Encrypted in {format_elapsed(elapsed, 2)}! ({format_size(len(packaged))})",
        file=stderr,
    )


def decrypt(
    cipher: HybridCipher,
    private_key: bytes,
    ciphertext: str,
    stdout: TextIO,
    stderr: TextIO,
) -> None:
    """Decrypt a base64 envelope and write the message to ``stdout``."""
    packaged = from_base64(ciphertext)
    start = time.perf_counter()
    plaintext = cipher.decrypt(private_key, packaged)
    elapsed = time.perf_counter() - start

    try:
        message = plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptionError(DECRYPTION_FAILED_MESSAGE) from e
    stdout.write(message)
    print(f"Decrypted in {format_elapsed(elapsed, 2)}!", file=stderr)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run the CLI.

    Args:
        argv: Command-line arguments without the program name.
        stdin: Input stream (default: sys.stdin).
        stdout: Output stream (default: sys.stdout).
        stderr: Diagnostics stream (default: sys.stderr).

    Returns:
        Process exit code.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    load_dotenv()
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    try:
        config = CipherConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=stderr)
        return 1
    cipher = HybridCipher(kem=args.kem, config=config)

    try:
        if args.command == "keygen":
            out_dir = args.out or Path(os.environ.get(ENV_KEY_DIR) or ".")
            asyncio.run(keygen(cipher, out_dir, stdout, stderr))

        elif args.command == "encrypt":
            message = _read_input(args.input, stdin)
            if not message:
                print("Error: Please enter a message to encrypt", file=stderr)
                return 1
            encrypt(cipher, args.key, message, args.out, stdout, stderr)

        elif args.command == "decrypt":
            private_key = cipher.load_private_key(args.key)
            ciphertext = _read_input(args.input, stdin)
            if not ciphertext.strip():
                print("Error: Please enter the ciphertext to decrypt", file=stderr)
                return 1
            decrypt(cipher, private_key, ciphertext, stdout, stderr)

    except DecryptionError:
        print(DECRYPTION_FAILED_MESSAGE, file=stderr)
        return 1
    except InvalidEncodingError as e:
        print(f"Error: {e}", file=stderr)
        return 1
    except (PQSealError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
