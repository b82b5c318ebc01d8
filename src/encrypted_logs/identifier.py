"""Deterministic identifiers for encrypted log batches."""

import hashlib
import uuid


def generate_logs_uuid(version: str, platform: str, current_time_millis: int) -> uuid.UUID:
    """
    Derive the logs id from schema version, platform and timestamp.

    Name-based UUID version 3 over the concatenated inputs with no namespace
    prefix (the same value Java's UUID.nameUUIDFromBytes produces). Identical
    inputs always give the identical id; it is not a security boundary.

    Args:
        version: Schema version tag, e.g. "v1"
        platform: Platform tag, e.g. "android"
        current_time_millis: Milliseconds since the Unix epoch

    Returns:
        The derived UUID
    """
    source = f"{version}{platform}{int(current_time_millis)}"
    digest = hashlib.md5(source.encode("utf-8")).digest()
    return uuid.UUID(bytes=digest, version=3)
