# office_hours/core/ids.py
from __future__ import annotations

import hashlib
import itertools
import re
import time

from office_hours.core.errors import InvalidInputError

ID_BYTES = 16
_HEX_ID_RE = re.compile(r"^[0-9a-fA-F]{32}$")

# Process-local sequence; combined with the clock it keeps ids
# collision-improbable within one deployment.
_sequence = itertools.count(1)


def new_id() -> str:
    """
    Generate a new 128-bit identifier as a 32-char lowercase hex string.

    Not cryptographically secure: the digest of (nanosecond timestamp,
    process-local counter) is only meant to be unique, not unguessable.
    """
    hasher = hashlib.sha256()
    hasher.update(time.time_ns().to_bytes(8, "big"))
    hasher.update(next(_sequence).to_bytes(8, "big"))
    return hasher.digest()[:ID_BYTES].hex()


def instance_id(series_id: str, occurrence_start_utc: int) -> str:
    """
    Deterministic identifier of one occurrence of a series.

    SHA-256 over the raw series id bytes followed by the original occurrence
    instant as 8-byte big-endian, truncated to 16 bytes.
    """
    hasher = hashlib.sha256()
    hasher.update(bytes.fromhex(series_id))
    hasher.update(occurrence_start_utc.to_bytes(8, "big"))
    return hasher.digest()[:ID_BYTES].hex()


def parse_id(value: str | None, field: str) -> str:
    """
    Validate a hex identifier and return its canonical (lowercase) form.

    Raises
    ------
    InvalidInputError
        If the value is missing or not exactly 32 hexadecimal characters.
    """
    if not value or not _HEX_ID_RE.match(value):
        raise InvalidInputError(f"Invalid {field}")
    return value.lower()
