"""Tests for sealing the log encryption key."""

import pytest
from nacl.exceptions import CryptoError

from encrypted_logs.keys import generate_secret_key
from encrypted_logs.sealing import seal_secret_key
from encrypted_logs.types import ENCRYPTED_KEY_SIZE, EncryptionError, SealingError
from .decryptor import open_secret_key
from .test_vectors import REJECTED_PUBLIC_KEYS_HEX


class TestSealSecretKey:
    """Test anonymous sealed-box encryption of the secret key."""

    def test_sealed_length(self, recipient_public_key) -> None:
        """Sealed key is key size plus seal overhead."""
        sealed = seal_secret_key(recipient_public_key, generate_secret_key())
        assert len(sealed) == ENCRYPTED_KEY_SIZE == 80

    def test_recipient_opens_key(self, recipient_public_key, recipient_private_key) -> None:
        """Recipient recovers the exact key bytes."""
        secret_key = generate_secret_key()
        sealed = seal_secret_key(recipient_public_key, secret_key)

        assert open_secret_key(sealed, recipient_private_key) == secret_key

    def test_other_key_cannot_open(self, recipient_public_key, other_private_key) -> None:
        """A different private key cannot open the sealed key."""
        sealed = seal_secret_key(recipient_public_key, generate_secret_key())

        with pytest.raises(CryptoError):
            open_secret_key(sealed, other_private_key)

    def test_sealing_is_randomized(self, recipient_public_key) -> None:
        """Same key sealed twice gives different ciphertexts."""
        secret_key = generate_secret_key()
        assert seal_secret_key(recipient_public_key, secret_key) != seal_secret_key(
            recipient_public_key, secret_key
        )

    @pytest.mark.parametrize("bit", [0, 7, 300, 639])
    def test_tampered_seal_rejected(self, recipient_public_key, recipient_private_key, bit: int) -> None:
        """Flipping any bit of the sealed key breaks opening."""
        sealed = bytearray(seal_secret_key(recipient_public_key, generate_secret_key()))
        sealed[bit // 8] ^= 1 << (bit % 8)

        with pytest.raises(CryptoError):
            open_secret_key(bytes(sealed), recipient_private_key)

    def test_invalid_public_key(self) -> None:
        """Wrong-length public key raises SealingError."""
        with pytest.raises(SealingError, match="32 bytes"):
            seal_secret_key(b"short", generate_secret_key())

    def test_sealing_error_is_encryption_error(self) -> None:
        with pytest.raises(EncryptionError):
            seal_secret_key(b"\x01" * 33, generate_secret_key())

    def test_invalid_secret_key(self, recipient_public_key) -> None:
        with pytest.raises(SealingError, match="Secret key"):
            seal_secret_key(recipient_public_key, b"\x01" * 10)

    @pytest.mark.parametrize("key_name", REJECTED_PUBLIC_KEYS_HEX)
    def test_public_key_rejected_by_primitive(self, key_name: str) -> None:
        """A correctly sized key that libsodium refuses raises SealingError."""
        public_key = bytes.fromhex(REJECTED_PUBLIC_KEYS_HEX[key_name])

        with pytest.raises(SealingError, match="Sealing failed"):
            seal_secret_key(public_key, generate_secret_key())
