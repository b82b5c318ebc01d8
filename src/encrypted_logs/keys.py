"""Key generation and recipient key handling for encrypted logs."""

from typing import Union

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from nacl import bindings
from nacl.exceptions import CryptoError

from .types import KEY_SIZE, PUBLIC_KEY_SIZE, KeyGenerationError, SealingError


RecipientPublicKey = Union[bytes, X25519PublicKey]


def generate_secret_key() -> bytes:
    """
    Generate a fresh symmetric key for one secretstream session.

    Returns:
        KEY_SIZE random bytes from libsodium's CSPRNG

    Raises:
        KeyGenerationError: If the random source fails or returns an unusable key
    """
    try:
        secret_key = bindings.crypto_secretstream_xchacha20poly1305_keygen()
    except (CryptoError, OSError) as e:
        raise KeyGenerationError(f"Secure random source unavailable: {e}") from e

    if len(secret_key) != KEY_SIZE:
        raise KeyGenerationError(
            f"Generated key must be {KEY_SIZE} bytes, got {len(secret_key)}"
        )

    if not any(secret_key):
        raise KeyGenerationError("Generated key is all zeros")

    return secret_key


def public_key_to_bytes(public_key: X25519PublicKey) -> bytes:
    """Convert X25519 public key to raw bytes."""
    return public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)


def normalize_public_key(public_key: RecipientPublicKey) -> bytes:
    """
    Validate a recipient public key and return its raw 32 bytes.

    Args:
        public_key: Raw key bytes or an X25519PublicKey

    Returns:
        Raw public key bytes

    Raises:
        SealingError: If the key has the wrong type or length
    """
    if isinstance(public_key, X25519PublicKey):
        return public_key_to_bytes(public_key)

    if not isinstance(public_key, (bytes, bytearray)):
        raise SealingError(
            f"Public key must be bytes or X25519PublicKey, got {type(public_key).__name__}"
        )

    if len(public_key) != PUBLIC_KEY_SIZE:
        raise SealingError(
            f"Public key must be {PUBLIC_KEY_SIZE} bytes, got {len(public_key)}"
        )

    return bytes(public_key)
