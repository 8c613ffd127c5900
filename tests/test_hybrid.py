"""Tests for hybrid encrypt/decrypt composition."""

from __future__ import annotations

import base64
import os
from unittest.mock import MagicMock

import pytest

from pqseal.constants import DECRYPTION_FAILED_MESSAGE
from pqseal.crypto.constants import AES_GCM_TAG_SIZE, MLKEM768_CIPHERTEXT_SIZE
from pqseal.crypto.kem import MCELIECE_8192128, ML_KEM_768, KemAdapter
from pqseal.envelope import header_size, pack, unpack
from pqseal.errors import (
    AuthenticationFailedError,
    DecryptionError,
    InvalidEncodingError,
    InvalidKeyError,
    KemFaultError,
    TruncatedEnvelopeError,
)
from pqseal.hybrid import decrypt, decrypt_detailed, decrypt_text, encrypt, encrypt_text
from pqseal.types import EncapsulationResult, FailureKind, KeyPair


def flip_bit(data: bytes, bit: int) -> bytes:
    """Return a copy of data with one bit inverted."""
    mutated = bytearray(data)
    mutated[bit // 8] ^= 1 << (bit % 8)
    return bytes(mutated)


class TestRoundTrip:
    """Tests for Decrypt(sk, Encrypt(pk, m)) == m."""

    @pytest.mark.parametrize(
        "plaintext",
        [b"", b"x", b"Hello, post-quantum world!", bytes(range(256)) * 64],
    )
    def test_round_trip(self, mlkem_keypair: KeyPair, plaintext: bytes) -> None:
        """Test round trip for a range of plaintext sizes."""
        packaged = encrypt(mlkem_keypair.public_key, plaintext, ML_KEM_768)
        assert decrypt(mlkem_keypair.private_key, packaged, ML_KEM_768) == plaintext

    def test_multi_megabyte(self, mlkem_keypair: KeyPair) -> None:
        """Test round trip of a 4 MiB plaintext."""
        plaintext = os.urandom(4 * 1024 * 1024)
        packaged = encrypt(mlkem_keypair.public_key, plaintext, ML_KEM_768)
        assert decrypt(mlkem_keypair.private_key, packaged, ML_KEM_768) == plaintext

    def test_envelope_layout(self, mlkem_keypair: KeyPair) -> None:
        """Test the structure of an encrypted envelope."""
        plaintext = b"layout check"
        packaged = encrypt(mlkem_keypair.public_key, plaintext, ML_KEM_768)

        assert int.from_bytes(packaged[:4], "big") == MLKEM768_CIPHERTEXT_SIZE
        parsed = unpack(packaged)
        assert len(parsed.kem_ciphertext) == MLKEM768_CIPHERTEXT_SIZE
        assert len(parsed.nonce) == 12
        assert len(parsed.sealed_data) == len(plaintext) + AES_GCM_TAG_SIZE
        assert len(packaged) == header_size(MLKEM768_CIPHERTEXT_SIZE) + len(parsed.sealed_data)

    def test_default_kem_length_prefix(self) -> None:
        """Test that the default KEM declares a ciphertext length decapsulate accepts."""
        packaged = encrypt(bytes(MCELIECE_8192128.public_key_size), b"default")
        assert int.from_bytes(packaged[:4], "big") == MCELIECE_8192128.ciphertext_size == 208
        assert len(unpack(packaged).kem_ciphertext) == 208

    def test_encrypt_is_randomized(self, mlkem_keypair: KeyPair) -> None:
        """Test that encrypting the same plaintext twice gives different envelopes."""
        first = encrypt(mlkem_keypair.public_key, b"same", ML_KEM_768)
        second = encrypt(mlkem_keypair.public_key, b"same", ML_KEM_768)
        assert first != second

    def test_decrypt_detailed_success(self, mlkem_keypair: KeyPair) -> None:
        """Test that a successful detailed decrypt carries the plaintext."""
        packaged = encrypt(mlkem_keypair.public_key, b"ok", ML_KEM_768)
        result = decrypt_detailed(mlkem_keypair.private_key, packaged, ML_KEM_768)
        assert result.ok is True
        assert result.plaintext == b"ok"
        assert result.failure is None


class TestNonceUniqueness:
    """Tests that every encryption draws a fresh nonce."""

    def test_no_collisions(self, mlkem_keypair: KeyPair) -> None:
        """Test 10,000 encryptions under one public key for nonce collisions."""
        trials = 10_000
        nonces = {
            unpack(encrypt(mlkem_keypair.public_key, b"", ML_KEM_768)).nonce
            for _ in range(trials)
        }
        assert len(nonces) == trials

    def test_nonce_fresh_even_with_fixed_encapsulation(self) -> None:
        """Test that nonces differ even if the KEM returned the same secret twice."""
        kem = MagicMock(spec=KemAdapter)
        kem.algorithm = ML_KEM_768.algorithm
        kem.encapsulate.return_value = EncapsulationResult(
            kem_ciphertext=bytes(16), shared_secret=bytes(32)
        )

        nonces = {unpack(encrypt(b"pk", b"message", kem)).nonce for _ in range(100)}
        assert len(nonces) == 100


class TestTamperDetection:
    """Tests that modified envelopes never decrypt."""

    def test_every_sealed_bit_flip_fails(self, mlkem_keypair: KeyPair) -> None:
        """Test each single-bit flip in the sealed data fails authentication."""
        packaged = encrypt(mlkem_keypair.public_key, b"8 bytes!", ML_KEM_768)
        sealed_start = header_size(MLKEM768_CIPHERTEXT_SIZE)

        for bit in range(sealed_start * 8, len(packaged) * 8):
            result = decrypt_detailed(
                mlkem_keypair.private_key, flip_bit(packaged, bit), ML_KEM_768
            )
            assert result.failure == FailureKind.AUTHENTICATION_FAILED
            assert result.plaintext is None

    def test_nonce_bit_flip_fails(self, mlkem_keypair: KeyPair) -> None:
        """Test that a modified nonce fails authentication."""
        packaged = encrypt(mlkem_keypair.public_key, b"nonce", ML_KEM_768)
        nonce_bit = (4 + MLKEM768_CIPHERTEXT_SIZE) * 8
        with pytest.raises(DecryptionError) as exc_info:
            decrypt(mlkem_keypair.private_key, flip_bit(packaged, nonce_bit), ML_KEM_768)
        assert isinstance(exc_info.value.__cause__, AuthenticationFailedError)

    def test_kem_ciphertext_bit_flip_fails(self, mlkem_keypair: KeyPair) -> None:
        """Test that a modified KEM ciphertext fails downstream at AEAD."""
        packaged = encrypt(mlkem_keypair.public_key, b"kem", ML_KEM_768)
        result = decrypt_detailed(mlkem_keypair.private_key, flip_bit(packaged, 4 * 8), ML_KEM_768)
        assert result.failure == FailureKind.AUTHENTICATION_FAILED

    def test_sealed_data_shorter_than_tag(self, mlkem_keypair: KeyPair) -> None:
        """Test that an envelope with a cut-off tag is rejected by AEAD."""
        packaged = encrypt(mlkem_keypair.public_key, b"", ML_KEM_768)
        result = decrypt_detailed(mlkem_keypair.private_key, packaged[:-1], ML_KEM_768)
        assert result.failure == FailureKind.AUTHENTICATION_FAILED

    def test_length_prefix_changed(self, mlkem_keypair: KeyPair) -> None:
        """Test that a shrunken length prefix is rejected as a bad KEM ciphertext."""
        packaged = encrypt(mlkem_keypair.public_key, b"prefix", ML_KEM_768)
        shrunk = (MLKEM768_CIPHERTEXT_SIZE - 1).to_bytes(4, "big") + packaged[4:]
        result = decrypt_detailed(mlkem_keypair.private_key, shrunk, ML_KEM_768)
        assert result.failure == FailureKind.INVALID_CIPHERTEXT


class TestWrongKey:
    """Tests for decrypting with an unrelated private key."""

    def test_wrong_private_key_fails(
        self, mlkem_keypair: KeyPair, other_mlkem_keypair: KeyPair
    ) -> None:
        """Test that a foreign private key never yields a plaintext."""
        packaged = encrypt(mlkem_keypair.public_key, b"for your eyes only", ML_KEM_768)

        with pytest.raises(DecryptionError, match="Wrong key or corrupted data"):
            decrypt(other_mlkem_keypair.private_key, packaged, ML_KEM_768)

        result = decrypt_detailed(other_mlkem_keypair.private_key, packaged, ML_KEM_768)
        assert result.failure == FailureKind.AUTHENTICATION_FAILED

    def test_malformed_private_key(self, mlkem_keypair: KeyPair) -> None:
        """Test that a wrongly sized private key is reported as an invalid key."""
        packaged = encrypt(mlkem_keypair.public_key, b"data", ML_KEM_768)
        result = decrypt_detailed(b"not a key", packaged, ML_KEM_768)
        assert result.failure == FailureKind.INVALID_KEY

    def test_encrypt_invalid_public_key(self) -> None:
        """Test that encrypt surfaces InvalidKeyError directly."""
        with pytest.raises(InvalidKeyError):
            encrypt(b"bad", b"data", ML_KEM_768)


class TestTruncation:
    """Tests that structural failures are caught before any cryptography."""

    def test_truncated_envelope_skips_kem(self) -> None:
        """Test that a truncated envelope never reaches decapsulation."""
        kem = MagicMock(spec=KemAdapter)
        packaged = pack(bytes(240), bytes(12), b"sealed")

        for cut in (0, 3, 4, 100, header_size(240) - 1):
            result = decrypt_detailed(b"sk", packaged[:cut], kem)
            assert result.failure == FailureKind.TRUNCATED_ENVELOPE

        kem.decapsulate.assert_not_called()

    def test_decrypt_chains_truncation_cause(self) -> None:
        """Test that the collapsed error keeps the structural cause for debugging."""
        kem = MagicMock(spec=KemAdapter)
        with pytest.raises(DecryptionError) as exc_info:
            decrypt(b"sk", b"\x00\x00", kem)
        assert isinstance(exc_info.value.__cause__, TruncatedEnvelopeError)
        kem.decapsulate.assert_not_called()


class TestErrorCollapsing:
    """Tests that decrypt reports every failure the same way."""

    def test_same_message_for_every_failure(
        self, mlkem_keypair: KeyPair, other_mlkem_keypair: KeyPair
    ) -> None:
        """Test that structural, key and tag failures share one message."""
        packaged = encrypt(mlkem_keypair.public_key, b"oracle", ML_KEM_768)
        attempts = [
            (mlkem_keypair.private_key, packaged[:10]),
            (b"short key", packaged),
            (other_mlkem_keypair.private_key, packaged),
            (mlkem_keypair.private_key, flip_bit(packaged, len(packaged) * 8 - 1)),
        ]

        messages = set()
        for private_key, data in attempts:
            with pytest.raises(DecryptionError) as exc_info:
                decrypt(private_key, data, ML_KEM_768)
            messages.add(str(exc_info.value))

        assert messages == {DECRYPTION_FAILED_MESSAGE}

    def test_kem_fault_is_collapsed(self) -> None:
        """Test that an internal KEM failure also surfaces as DecryptionError."""
        kem = MagicMock(spec=KemAdapter)
        kem.decapsulate.side_effect = KemFaultError("internal")
        packaged = pack(bytes(16), bytes(12), bytes(16))

        with pytest.raises(DecryptionError) as exc_info:
            decrypt(b"sk", packaged, kem)
        assert isinstance(exc_info.value.__cause__, KemFaultError)
        assert decrypt_detailed(b"sk", packaged, kem).failure == FailureKind.KEM_FAULT


class TestTextApi:
    """Tests for encrypt_text() / decrypt_text()."""

    def test_round_trip(self, mlkem_keypair: KeyPair) -> None:
        """Test text round trip including non-ASCII characters."""
        message = "Grüße, 世界! 🔐"
        ciphertext = encrypt_text(mlkem_keypair.public_key_b64, message, ML_KEM_768)
        private_b64 = base64.b64encode(mlkem_keypair.private_key).decode()

        assert decrypt_text(private_b64, ciphertext, ML_KEM_768) == message

    def test_ciphertext_is_single_line_base64(self, mlkem_keypair: KeyPair) -> None:
        """Test that the envelope text is standard base64 with no line breaks."""
        ciphertext = encrypt_text(mlkem_keypair.public_key_b64, "a" * 500, ML_KEM_768)
        assert "\n" not in ciphertext
        assert base64.b64decode(ciphertext, validate=True)[:4] == b"\x00\x00\x04\x40"

    def test_tolerates_surrounding_whitespace(self, mlkem_keypair: KeyPair) -> None:
        """Test that pasted text with trailing newlines still decrypts."""
        ciphertext = encrypt_text(mlkem_keypair.public_key_b64, "padded", ML_KEM_768)
        private_b64 = base64.b64encode(mlkem_keypair.private_key).decode()
        assert decrypt_text(f"  {private_b64}\n", f"{ciphertext}\n", ML_KEM_768) == "padded"

    def test_invalid_public_key_encoding(self) -> None:
        """Test that a non-base64 public key raises InvalidEncodingError."""
        with pytest.raises(InvalidEncodingError):
            encrypt_text("not*base64!", "hello", ML_KEM_768)

    def test_invalid_ciphertext_encoding_is_not_collapsed(self, mlkem_keypair: KeyPair) -> None:
        """Test that bad base64 is reported distinctly from decryption failure."""
        private_b64 = base64.b64encode(mlkem_keypair.private_key).decode()
        with pytest.raises(InvalidEncodingError):
            decrypt_text(private_b64, "@@@@", ML_KEM_768)

    def test_non_utf8_plaintext(self, mlkem_keypair: KeyPair) -> None:
        """Test that binary plaintext that is not UTF-8 fails as DecryptionError."""
        packaged = encrypt(mlkem_keypair.public_key, b"\xff\xfe\xfd", ML_KEM_768)
        private_b64 = base64.b64encode(mlkem_keypair.private_key).decode()
        with pytest.raises(DecryptionError):
            decrypt_text(private_b64, base64.b64encode(packaged).decode(), ML_KEM_768)


@pytest.mark.slow
class TestMcElieceHybrid:
    """End-to-end tests with the default Classic McEliece 8192128 KEM."""

    def test_round_trip(self, mceliece_keypair: KeyPair) -> None:
        """Test round trip and the 208-byte KEM ciphertext prefix."""
        packaged = encrypt(mceliece_keypair.public_key, b"quantum-safe", MCELIECE_8192128)

        assert packaged[:4] == b"\x00\x00\x00\xd0"
        assert decrypt(mceliece_keypair.private_key, packaged, MCELIECE_8192128) == b"quantum-safe"

    def test_default_kem_is_mceliece(self, mceliece_keypair: KeyPair) -> None:
        """Test that omitting the KEM uses Classic McEliece 8192128."""
        packaged = encrypt(mceliece_keypair.public_key, b"default")
        assert decrypt(mceliece_keypair.private_key, packaged) == b"default"

    def test_tampered_sealed_data(self, mceliece_keypair: KeyPair) -> None:
        """Test that tampering is detected with the McEliece KEM."""
        packaged = encrypt(mceliece_keypair.public_key, b"tamper", MCELIECE_8192128)
        tampered = flip_bit(packaged, len(packaged) * 8 - 3)
        result = decrypt_detailed(mceliece_keypair.private_key, tampered, MCELIECE_8192128)
        assert result.failure == FailureKind.AUTHENTICATION_FAILED
