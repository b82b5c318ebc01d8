"""Hybrid encryption of log batches."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .envelope import EncryptedLogs, encode_encrypted_logs
from .identifier import generate_logs_uuid
from .keys import RecipientPublicKey, generate_secret_key
from .sealing import seal_secret_key
from .stream import StreamCipherSession
from .types import ANDROID_PLATFORM, DEFAULT_PLATFORM, KEYED_WITH, EncryptionError

logger = logging.getLogger(__name__)


def current_time_millis() -> int:
    """Wall-clock time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


@dataclass
class EncryptedLogsConfig:
    """Configuration for building encrypted logs."""

    keyed_with: str = KEYED_WITH
    """Schema version tag written to "keyedWith"."""

    platform: str = DEFAULT_PLATFORM
    """Platform tag mixed into the logs id."""

    clock: Callable[[], int] = current_time_millis
    """Source of the timestamp (milliseconds) mixed into the logs id."""

    def __post_init__(self) -> None:
        if not self.keyed_with:
            raise ValueError("keyed_with must not be empty")
        if not self.platform:
            raise ValueError("platform must not be empty")

    @classmethod
    def android(cls) -> "EncryptedLogsConfig":
        """Creates configuration matching the Android client's logs ids."""
        return cls(platform=ANDROID_PLATFORM)


def encrypt_logs(
    public_key: RecipientPublicKey,
    log_messages: Iterable[str],
    config: Optional[EncryptedLogsConfig] = None,
) -> EncryptedLogs:
    """
    Encrypt a batch of log lines for the holder of a private key.

    A fresh secretstream key is generated and sealed to the recipient public
    key; every line is then pushed through one XChaCha20-Poly1305 stream,
    followed by an empty chunk carrying the final tag.

    Args:
        public_key: Recipient X25519 public key (raw 32 bytes or object)
        log_messages: Log lines in the order they should be decrypted
        config: Schema, platform and clock settings

    Returns:
        EncryptedLogs with one chunk per line plus the final chunk

    Raises:
        KeyGenerationError: If no key could be generated
        SealingError: If the public key is invalid
        EncryptionError: If a log line is not a valid string
    """
    config = config or EncryptedLogsConfig()
    timestamp = config.clock()

    secret_key = generate_secret_key()
    encrypted_key = seal_secret_key(public_key, secret_key)

    session = StreamCipherSession()
    header = session.init(secret_key)
    del secret_key

    messages = []
    for index, message in enumerate(log_messages):
        if not isinstance(message, str):
            raise EncryptionError(
                f"Log message {index} must be str, got {type(message).__name__}"
            )
        try:
            plaintext = message.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncryptionError(f"Log message {index} is not valid UTF-8: {e}") from e
        messages.append(session.push_message(plaintext).ciphertext)

    messages.append(session.push_final().ciphertext)

    logs_id = str(generate_logs_uuid(config.keyed_with, config.platform, timestamp))

    logger.debug("Encrypted %d log messages as %s", len(messages) - 1, logs_id)

    return EncryptedLogs(
        keyed_with=config.keyed_with,
        logs_id=logs_id,
        encrypted_key=encrypted_key,
        header=header,
        messages=messages,
    )


def generate_json_encrypted_logs(
    public_key: RecipientPublicKey,
    log_messages: Iterable[str],
    config: Optional[EncryptedLogsConfig] = None,
) -> str:
    """
    Encrypt a batch of log lines and encode the result as JSON.

    Raises:
        EncryptionError: If encryption fails
        SerializationError: If the record cannot be encoded
    """
    return encode_encrypted_logs(encrypt_logs(public_key, log_messages, config))
