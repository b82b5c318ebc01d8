"""Type definitions and protocol constants for encrypted logs."""

from nacl import bindings


# Schema constants
KEYED_WITH = "v1"
DEFAULT_PLATFORM = "python"
ANDROID_PLATFORM = "android"

# Secretstream (XChaCha20-Poly1305) sizes
KEY_SIZE = bindings.crypto_secretstream_xchacha20poly1305_KEYBYTES
HEADER_SIZE = bindings.crypto_secretstream_xchacha20poly1305_HEADERBYTES
TAG_SIZE = bindings.crypto_secretstream_xchacha20poly1305_ABYTES
MAX_MESSAGE_SIZE = bindings.crypto_secretstream_xchacha20poly1305_MESSAGEBYTES_MAX
TAG_MESSAGE = bindings.crypto_secretstream_xchacha20poly1305_TAG_MESSAGE
TAG_FINAL = bindings.crypto_secretstream_xchacha20poly1305_TAG_FINAL

# Sealed box sizes
PUBLIC_KEY_SIZE = bindings.crypto_box_PUBLICKEYBYTES
SEAL_OVERHEAD = bindings.crypto_box_SEALBYTES
ENCRYPTED_KEY_SIZE = KEY_SIZE + SEAL_OVERHEAD  # 32-byte key + 48 bytes

# JSON field names
FIELD_KEYED_WITH = "keyedWith"
FIELD_LOGS_ID = "logsId"
FIELD_ENCRYPTED_KEY = "encryptedKey"
FIELD_HEADER = "header"
FIELD_MESSAGES = "messages"


# Exception types
class EncryptedLogsError(Exception):
    """Base exception for encrypted logs errors."""
    pass


class EncryptionError(EncryptedLogsError):
    """Encryption failed."""
    pass


class KeyGenerationError(EncryptionError):
    """Secure random source could not produce a key."""
    pass


class SealingError(EncryptionError):
    """Recipient public key rejected or sealing failed."""
    pass


class SerializationError(EncryptedLogsError):
    """Encrypted logs record could not be encoded or decoded."""
    pass


class StreamStateError(RuntimeError):
    """Stream cipher session used out of order."""

    def __init__(self, operation: str, state: object) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot call {operation}() in state {state}")
