"""Encrypted logs record and its JSON encoding."""

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from .types import (
    ENCRYPTED_KEY_SIZE,
    FIELD_ENCRYPTED_KEY,
    FIELD_HEADER,
    FIELD_KEYED_WITH,
    FIELD_LOGS_ID,
    FIELD_MESSAGES,
    HEADER_SIZE,
    TAG_SIZE,
    SerializationError,
)

logger = logging.getLogger(__name__)


@dataclass
class EncryptedLogs:
    """
    A batch of log lines encrypted for one recipient.

    JSON format:
        {
          "keyedWith": "v1",
          "logsId": "<uuid>",                    // id of this batch of logs
          "encryptedKey": "<base64>",            // sealed secretstream key (80 bytes)
          "header": "<base64>",                  // secretstream header (24 bytes)
          "messages": ["<base64>", ...]          // chunks, last one is the final tag
        }
    """
    keyed_with: str
    logs_id: str
    encrypted_key: bytes  # 32-byte key + 48-byte seal overhead
    header: bytes  # 24 bytes
    messages: List[bytes] = field(default_factory=list)  # each plaintext + 17 bytes

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping with base64-encoded binary fields."""
        return {
            FIELD_KEYED_WITH: self.keyed_with,
            FIELD_LOGS_ID: self.logs_id,
            FIELD_ENCRYPTED_KEY: _encode_base64(self.encrypted_key),
            FIELD_HEADER: _encode_base64(self.header),
            FIELD_MESSAGES: [_encode_base64(message) for message in self.messages],
        }


def encode_encrypted_logs(encrypted_logs: EncryptedLogs) -> str:
    """
    Encode encrypted logs to a JSON string.

    Raises:
        SerializationError: If the record cannot be encoded
    """
    try:
        return json.dumps(encrypted_logs.to_dict())
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode encrypted logs: {e}") from e


def decode_encrypted_logs(data: Union[str, bytes, Mapping[str, Any]]) -> EncryptedLogs:
    """
    Decode a JSON record into EncryptedLogs.

    Only the structure is checked; nothing is decrypted.

    Args:
        data: JSON text or an already parsed mapping

    Returns:
        Decoded EncryptedLogs

    Raises:
        SerializationError: If data is malformed
    """
    payload = _load_mapping(data)

    keyed_with = _require_str(payload, FIELD_KEYED_WITH)
    logs_id = _require_str(payload, FIELD_LOGS_ID)

    encrypted_key = _decode_base64(_require_str(payload, FIELD_ENCRYPTED_KEY), FIELD_ENCRYPTED_KEY)
    if len(encrypted_key) != ENCRYPTED_KEY_SIZE:
        raise SerializationError(
            f"{FIELD_ENCRYPTED_KEY} must be {ENCRYPTED_KEY_SIZE} bytes, got {len(encrypted_key)}"
        )

    header = _decode_base64(_require_str(payload, FIELD_HEADER), FIELD_HEADER)
    if len(header) != HEADER_SIZE:
        raise SerializationError(
            f"{FIELD_HEADER} must be {HEADER_SIZE} bytes, got {len(header)}"
        )

    raw_messages = payload.get(FIELD_MESSAGES)
    if not isinstance(raw_messages, list) or not raw_messages:
        raise SerializationError(f"{FIELD_MESSAGES} must be a non-empty list")

    messages = []
    for index, raw in enumerate(raw_messages):
        if not isinstance(raw, str):
            raise SerializationError(f"{FIELD_MESSAGES}[{index}] must be a string")
        chunk = _decode_base64(raw, f"{FIELD_MESSAGES}[{index}]")
        if len(chunk) < TAG_SIZE:
            raise SerializationError(
                f"{FIELD_MESSAGES}[{index}] too short: {len(chunk)} bytes (minimum {TAG_SIZE})"
            )
        messages.append(chunk)

    logger.debug("Decoded encrypted logs %s with %d chunks", logs_id, len(messages))

    return EncryptedLogs(
        keyed_with=keyed_with,
        logs_id=logs_id,
        encrypted_key=encrypted_key,
        header=header,
        messages=messages,
    )


def get_logs_uuid(encrypted_logs: Union[EncryptedLogs, str, bytes, Mapping[str, Any]]) -> str:
    """
    Read the logs id from an encrypted logs record without any key material.

    Args:
        encrypted_logs: An EncryptedLogs, its JSON text or a parsed mapping

    Returns:
        The "logsId" value, or an empty string if it is missing
    """
    if isinstance(encrypted_logs, EncryptedLogs):
        return encrypted_logs.logs_id

    payload = _load_mapping(encrypted_logs)
    logs_id = payload.get(FIELD_LOGS_ID)
    if logs_id is None:
        return ""
    return str(logs_id)


def _load_mapping(data: Union[str, bytes, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        return data

    try:
        payload = json.loads(data)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Invalid encrypted logs JSON: {e}") from e

    if not isinstance(payload, dict):
        raise SerializationError("Encrypted logs JSON must be an object")

    return payload


def _require_str(payload: Mapping[str, Any], name: str) -> str:
    value = payload.get(name)
    if not isinstance(value, str):
        raise SerializationError(f"Missing or invalid field: {name}")
    return value


def _encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _decode_base64(value: str, name: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SerializationError(f"Invalid base64 in {name}: {e}") from e
