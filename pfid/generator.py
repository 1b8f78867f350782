"""
PFID Generator - pack fields into binary and mint new ids.

    pfid = generate(42)                  # now, partition 42
    pfid = generate(42, 1700000000000)   # fixed timestamp
    child = generate_related(pfid)       # same partition as pfid
    root = generate_root()               # random partition

Time and randomness come from _now_millis() and _random_bytes(); nothing
else here touches the outside world.
"""

from __future__ import annotations

import os
import time
from typing import Any

from pfid.codec import encode, extract_partition
from pfid.errors import InvalidBinaryError, InvalidPartitionError, InvalidTimestampError
from pfid.spec import (
    EXAMPLE_PARTITION,
    EXAMPLE_TIMESTAMP,
    MAX_PARTITION,
    MAX_TIMESTAMP,
    PARTITION_MASK,
    PARTITION_SIZE,
    RANDOMNESS_SIZE,
    TIMESTAMP_SIZE,
    ZERO,
)


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _random_bytes(count: int) -> bytes:
    return os.urandom(count)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_partition(partition: Any) -> int:
    """Return ``partition`` unchanged, or raise InvalidPartitionError."""
    if not _is_int(partition) or not 0 <= partition <= MAX_PARTITION:
        raise InvalidPartitionError(partition)
    return partition


def check_timestamp(timestamp: Any) -> int:
    """Return ``timestamp`` unchanged, or raise InvalidTimestampError."""
    if not _is_int(timestamp) or not 0 <= timestamp <= MAX_TIMESTAMP:
        raise InvalidTimestampError(timestamp)
    return timestamp


# =============================================================================
# Packing
# =============================================================================

def pack_binary(partition: int, timestamp: int, randomness: bytes) -> bytes:
    """
    Pack the three fields into a 20-byte binary PFID.

    Layout: timestamp (6 bytes) + partition (4 bytes) + randomness (10 bytes),
    all big-endian. Out-of-range values are rejected, never wrapped.
    """
    check_partition(partition)
    check_timestamp(timestamp)
    if not isinstance(randomness, (bytes, bytearray, memoryview)) or len(bytes(randomness)) != RANDOMNESS_SIZE:
        raise InvalidBinaryError(randomness, f"randomness must be {RANDOMNESS_SIZE} bytes: {randomness!r}")

    return (
        timestamp.to_bytes(TIMESTAMP_SIZE, "big")
        + partition.to_bytes(PARTITION_SIZE, "big")
        + bytes(randomness)
    )


def generate_binary(partition: int, timestamp: int | None = None) -> bytes:
    """Binary PFID with fresh randomness. Uses the current time if ``timestamp`` is None."""
    check_partition(partition)
    if timestamp is None:
        timestamp = _now_millis()
    return pack_binary(partition, timestamp, _random_bytes(RANDOMNESS_SIZE))


# =============================================================================
# Text generators
# =============================================================================

def generate(partition: int, timestamp: int | None = None) -> str:
    """Text PFID for ``partition``, stamped now unless ``timestamp`` is given."""
    return encode(generate_binary(partition, timestamp))


def generate_example() -> str:
    """An id for documentation -- fixed partition, timestamp well in the past."""
    return generate(EXAMPLE_PARTITION, EXAMPLE_TIMESTAMP)


def generate_related(existing: str) -> str:
    """New id in the same partition as ``existing``."""
    return generate(extract_partition(existing))


def generate_root() -> str:
    """New id in a random partition."""
    return generate(random_partition())


def random_partition() -> int:
    """Uniform over [0, 2**30 - 1]: 4 random bytes with the top 2 bits cleared."""
    return int.from_bytes(_random_bytes(PARTITION_SIZE), "big") & PARTITION_MASK


def zero() -> str:
    """The reserved all-zero placeholder id."""
    return ZERO
