"""
Anonymous sealed-box protection of the log encryption key.

The sealed box generates an ephemeral X25519 key pair per call, encrypts the
data to the recipient public key and discards the ephemeral secret. The
ciphertext carries no sender identity; only the holder of the recipient
private key can open it.
"""

from nacl.exceptions import CryptoError
from nacl.public import PublicKey, SealedBox

from .keys import RecipientPublicKey, normalize_public_key
from .types import KEY_SIZE, SEAL_OVERHEAD, SealingError


def seal_secret_key(public_key: RecipientPublicKey, secret_key: bytes) -> bytes:
    """
    Encrypt a symmetric key to a recipient public key.

    Args:
        public_key: Recipient X25519 public key (raw 32 bytes or object)
        secret_key: The secretstream key to protect (KEY_SIZE bytes)

    Returns:
        Sealed key, KEY_SIZE + SEAL_OVERHEAD bytes

    Raises:
        SealingError: If the public key is invalid or sealing fails
    """
    public_bytes = normalize_public_key(public_key)

    if len(secret_key) != KEY_SIZE:
        raise SealingError(
            f"Secret key must be {KEY_SIZE} bytes, got {len(secret_key)}"
        )

    try:
        sealed = SealedBox(PublicKey(public_bytes)).encrypt(bytes(secret_key))
    except CryptoError as e:
        raise SealingError(f"Sealing failed: {e}") from e

    expected = len(secret_key) + SEAL_OVERHEAD
    if len(sealed) != expected:
        raise SealingError(
            f"Sealed key must be {expected} bytes, got {len(sealed)}"
        )

    return bytes(sealed)
