"""
Authenticated streaming encryption for log messages.

Wraps libsodium's secretstream XChaCha20-Poly1305 push side. Every pushed
chunk advances the cipher state, so each chunk is bound to all chunks before
it: a decryptor detects reordering, dropping or splicing of chunks. The
stream is closed by a zero-length chunk carrying the final tag; a stream that
does not end with it is truncated or tampered.

Session lifecycle:
    UNINITIALIZED --init()--> INITIALIZED --push_message()--> STREAMING
    INITIALIZED | STREAMING --push_final()--> FINALIZED
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from nacl import bindings
from nacl.exceptions import CryptoError

from .types import (
    HEADER_SIZE,
    KEY_SIZE,
    MAX_MESSAGE_SIZE,
    TAG_FINAL,
    TAG_MESSAGE,
    TAG_SIZE,
    EncryptionError,
    StreamStateError,
)


class StreamState(Enum):
    """Lifecycle state of a StreamCipherSession."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    STREAMING = "streaming"
    FINALIZED = "finalized"


class ChunkTag(Enum):
    """Role of an encrypted chunk within the stream."""
    MESSAGE = TAG_MESSAGE
    FINAL = TAG_FINAL


@dataclass(frozen=True)
class EncryptedChunk:
    """One authenticated ciphertext chunk."""
    ciphertext: bytes  # plaintext + TAG_SIZE bytes
    tag: ChunkTag

    @property
    def is_final(self) -> bool:
        return self.tag is ChunkTag.FINAL


class StreamCipherSession:
    """
    Push side of one secretstream.

    A session owns its cipher state exclusively and is valid for exactly one
    key and one envelope. Create a new session for every envelope.

    Example usage:
        ```python
        session = StreamCipherSession()
        header = session.init(secret_key)
        chunks = [session.push_message(line.encode("utf-8")) for line in lines]
        chunks.append(session.push_final())
        ```
    """

    def __init__(self) -> None:
        self._state = StreamState.UNINITIALIZED
        self._cipher_state: Optional[bindings.crypto_secretstream_xchacha20poly1305_state] = None

    @property
    def state(self) -> StreamState:
        """Current lifecycle state."""
        return self._state

    def init(self, key: bytes) -> bytes:
        """
        Initialize the session with a symmetric key.

        Args:
            key: Secretstream key (KEY_SIZE bytes)

        Returns:
            The HEADER_SIZE-byte stream header a decryptor needs with the key

        Raises:
            StreamStateError: If the session was already initialized
            EncryptionError: If the key length is wrong
        """
        self._require("init", StreamState.UNINITIALIZED)

        if len(key) != KEY_SIZE:
            raise EncryptionError(f"Key must be {KEY_SIZE} bytes, got {len(key)}")

        cipher_state = bindings.crypto_secretstream_xchacha20poly1305_state()
        try:
            header = bindings.crypto_secretstream_xchacha20poly1305_init_push(
                cipher_state, bytes(key)
            )
        except CryptoError as e:
            raise EncryptionError(f"Stream initialization failed: {e}") from e

        if len(header) != HEADER_SIZE:
            raise EncryptionError(
                f"Header must be {HEADER_SIZE} bytes, got {len(header)}"
            )

        self._cipher_state = cipher_state
        self._state = StreamState.INITIALIZED
        return header

    def push_message(self, plaintext: bytes) -> EncryptedChunk:
        """
        Encrypt one message chunk.

        Raises:
            StreamStateError: If called before init() or after push_final()
            EncryptionError: If the message is not bytes or is too large
        """
        self._require("push_message", StreamState.INITIALIZED, StreamState.STREAMING)
        chunk = self._push(plaintext, ChunkTag.MESSAGE)
        self._state = StreamState.STREAMING
        return chunk

    def push_final(self) -> EncryptedChunk:
        """
        Encrypt the empty terminal chunk that closes the stream.

        Raises:
            StreamStateError: If called before init() or more than once
        """
        self._require("push_final", StreamState.INITIALIZED, StreamState.STREAMING)
        chunk = self._push(b"", ChunkTag.FINAL)
        self._state = StreamState.FINALIZED
        # The state cannot be pushed to again; release it.
        self._cipher_state = None
        return chunk

    def _require(self, operation: str, *allowed: StreamState) -> None:
        if self._state not in allowed:
            raise StreamStateError(operation, self._state)

    def _push(self, plaintext: bytes, tag: ChunkTag) -> EncryptedChunk:
        if not isinstance(plaintext, (bytes, bytearray)):
            raise EncryptionError(
                f"Message must be bytes, got {type(plaintext).__name__}"
            )

        if len(plaintext) > MAX_MESSAGE_SIZE:
            raise EncryptionError(
                f"Message too large: {len(plaintext)} bytes (max {MAX_MESSAGE_SIZE})"
            )

        try:
            ciphertext = bindings.crypto_secretstream_xchacha20poly1305_push(
                self._cipher_state, bytes(plaintext), None, tag.value
            )
        except CryptoError as e:
            raise EncryptionError(f"Stream encryption failed: {e}") from e

        expected = len(plaintext) + TAG_SIZE
        if len(ciphertext) != expected:
            raise EncryptionError(
                f"Ciphertext must be {expected} bytes, got {len(ciphertext)}"
            )

        return EncryptedChunk(ciphertext=ciphertext, tag=tag)
