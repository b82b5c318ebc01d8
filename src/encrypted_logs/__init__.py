"""
Encrypted logs - hybrid encryption of log batches

Log lines are encrypted with a libsodium secretstream (XChaCha20-Poly1305)
whose key is sealed to the recipient's X25519 public key.
"""

from .keys import generate_secret_key, normalize_public_key
from .sealing import seal_secret_key
from .stream import StreamCipherSession, StreamState, ChunkTag, EncryptedChunk
from .identifier import generate_logs_uuid
from .envelope import (
    EncryptedLogs,
    encode_encrypted_logs,
    decode_encrypted_logs,
    get_logs_uuid,
)
from .crypto import (
    EncryptedLogsConfig,
    encrypt_logs,
    generate_json_encrypted_logs,
    current_time_millis,
)
from .types import (
    KEYED_WITH,
    KEY_SIZE,
    HEADER_SIZE,
    TAG_SIZE,
    PUBLIC_KEY_SIZE,
    SEAL_OVERHEAD,
    ENCRYPTED_KEY_SIZE,
    EncryptedLogsError,
    EncryptionError,
    KeyGenerationError,
    SealingError,
    SerializationError,
    StreamStateError,
)

__version__ = "0.1.0"

__all__ = [
    # Keys
    "generate_secret_key",
    "normalize_public_key",
    # Sealing
    "seal_secret_key",
    # Stream
    "StreamCipherSession",
    "StreamState",
    "ChunkTag",
    "EncryptedChunk",
    # Identifier
    "generate_logs_uuid",
    # Envelope
    "EncryptedLogs",
    "encode_encrypted_logs",
    "decode_encrypted_logs",
    "get_logs_uuid",
    # Crypto
    "EncryptedLogsConfig",
    "encrypt_logs",
    "generate_json_encrypted_logs",
    "current_time_millis",
    # Constants
    "KEYED_WITH",
    "KEY_SIZE",
    "HEADER_SIZE",
    "TAG_SIZE",
    "PUBLIC_KEY_SIZE",
    "SEAL_OVERHEAD",
    "ENCRYPTED_KEY_SIZE",
    # Errors
    "EncryptedLogsError",
    "EncryptionError",
    "KeyGenerationError",
    "SealingError",
    "SerializationError",
    "StreamStateError",
]
