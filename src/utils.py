"""Utilities for hashing and timestamps."""

import hashlib
from datetime import datetime, timezone


def hash_text(text: str) -> str:
    """Compute SHA256 hash of text. Deterministic."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def hash_bytes(data: bytes) -> str:
    """SHA256 of raw upload bytes (audit only, never used as identity)."""
    return hashlib.sha256(data).hexdigest()


def iso_now() -> str:
    """Current UTC timestamp as ISO string with millisecond precision."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
