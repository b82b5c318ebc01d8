"""Shared fixtures for encrypted logs tests."""

import pytest
from nacl.public import PrivateKey

from .test_vectors import RECIPIENT_SECRET_KEY_HEX, OTHER_SECRET_KEY_HEX


@pytest.fixture
def recipient_private_key() -> PrivateKey:
    """Recipient's private key (held only by the decrypting side)."""
    return PrivateKey(bytes.fromhex(RECIPIENT_SECRET_KEY_HEX))


@pytest.fixture
def recipient_public_key(recipient_private_key) -> bytes:
    """Recipient's raw 32-byte public key."""
    return bytes(recipient_private_key.public_key)


@pytest.fixture
def other_private_key() -> PrivateKey:
    """An unrelated private key."""
    return PrivateKey(bytes.fromhex(OTHER_SECRET_KEY_HEX))
