"""Shared fixtures for pqseal tests."""

from __future__ import annotations

import pytest

from pqseal.crypto.kem import MCELIECE_8192128, ML_KEM_768
from pqseal.types import KeyPair


@pytest.fixture(scope="session")
def mlkem_keypair() -> KeyPair:
    """ML-KEM-768 keypair shared across the session (fast to generate)."""
    return ML_KEM_768.generate_keypair()


@pytest.fixture(scope="session")
def other_mlkem_keypair() -> KeyPair:
    """A second, unrelated ML-KEM-768 keypair."""
    return ML_KEM_768.generate_keypair()


@pytest.fixture(scope="session")
def mceliece_keypair() -> KeyPair:
    """Classic McEliece 8192128 keypair. Generation takes seconds."""
    return MCELIECE_8192128.generate_keypair()
