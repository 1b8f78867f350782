"""
PFID Codec - binary <-> text transcoding and validation.

    text = encode(binary)          # 20 bytes -> 32 chars
    binary = decode(text)          # 32 chars -> 20 bytes
    partition = extract_partition(text)
    is_valid_text_id(text) / is_valid_binary_id(binary)

Symbols are read and written through a bit cursor following TEXT_LAYOUT:
a 3-bit lead symbol, nine 5-bit timestamp symbols, 2 skipped padding bits,
six partition symbols and sixteen randomness symbols.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from pfid.bits import BitReader, BitWriter
from pfid.errors import (
    InvalidBinaryError,
    InvalidPartitionError,
    InvalidTextError,
    InvalidTimestampError,
)
from pfid.spec import (
    ALPHABET,
    BINARY_SIZE,
    LEADING_SYMBOLS,
    PADDING_BITS,
    PARTITION_MASK,
    PARTITION_OFFSET,
    PARTITION_TEXT_OFFSET,
    PARTITION_TEXT_SIZE,
    RANDOMNESS_OFFSET,
    SYMBOL_BITS,
    TEXT_LAYOUT,
    TEXT_SIZE,
)

ENCODE_TABLE: tuple[str, ...] = tuple(ALPHABET)
DECODE_TABLE: dict[str, int] = {
    **{char: value for value, char in enumerate(ALPHABET)},
    **{char.upper(): value for value, char in enumerate(ALPHABET)},
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class PFIDFields:
    """The three logical fields of a PFID."""

    timestamp: int
    partition: int
    randomness: bytes


# =============================================================================
# Validation
# =============================================================================

def is_valid_text_id(candidate: Any) -> bool:
    """True for a 32-char Crockford Base32 string starting with 0-7. Never raises."""
    if not isinstance(candidate, str) or len(candidate) != TEXT_SIZE:
        return False
    if candidate[0] not in LEADING_SYMBOLS:
        return False
    return all(char in DECODE_TABLE for char in candidate)


def is_valid_binary_id(candidate: Any) -> bool:
    """True for any 20-byte buffer. Never raises."""
    if not isinstance(candidate, (bytes, bytearray, memoryview)):
        return False
    view = memoryview(candidate)
    # A view over wider items (array("I"), cast("H")) is not a byte string.
    return view.format == "B" and view.ndim == 1 and view.nbytes == BINARY_SIZE


# =============================================================================
# Transcoding
# =============================================================================

def encode(binary: bytes) -> str:
    """Encode a 20-byte binary PFID as 32 lowercase Crockford Base32 chars."""
    if not is_valid_binary_id(binary):
        raise InvalidBinaryError(binary)

    reader = BitReader(bytes(binary))
    symbols = []
    for width in TEXT_LAYOUT:
        if width is None:
            reader.skip(PADDING_BITS)
        else:
            symbols.append(ENCODE_TABLE[reader.read(width)])
    text = "".join(symbols)

    if not is_valid_text_id(text):
        raise InvalidBinaryError(binary)
    return text


def decode(text: str) -> bytes:
    """Decode a text PFID (either case) back to its 20-byte binary form."""
    if not is_valid_text_id(text):
        raise InvalidTextError(text)

    writer = BitWriter(BINARY_SIZE)
    chars = iter(text)
    for width in TEXT_LAYOUT:
        if width is None:
            writer.write(0, PADDING_BITS)
        else:
            writer.write(DECODE_TABLE[next(chars)], width)
    return writer.getvalue()


# =============================================================================
# Partition
# =============================================================================

def decode_partition(symbols: str) -> int:
    """Decode the 6-symbol partition slice of a text PFID to its 30-bit value."""
    if not isinstance(symbols, str) or len(symbols) != PARTITION_TEXT_SIZE:
        raise InvalidPartitionError(symbols)
    value = 0
    for char in symbols:
        if char not in DECODE_TABLE:
            raise InvalidPartitionError(symbols)
        value = (value << SYMBOL_BITS) | DECODE_TABLE[char]
    return value


def extract_partition(text: str) -> int:
    """
    Read the partition out of a text PFID without decoding the rest.
    Raises InvalidTextError if ``text`` is not a valid PFID.
    """
    if not is_valid_text_id(text):
        raise InvalidTextError(text)
    end = PARTITION_TEXT_OFFSET + PARTITION_TEXT_SIZE
    return decode_partition(text[PARTITION_TEXT_OFFSET:end])


# =============================================================================
# Fields
# =============================================================================

def unpack(binary: bytes) -> PFIDFields:
    """Split a binary PFID into timestamp, partition and randomness."""
    if not is_valid_binary_id(binary):
        raise InvalidBinaryError(binary)
    data = bytes(binary)
    return PFIDFields(
        timestamp=int.from_bytes(data[:PARTITION_OFFSET], "big"),
        partition=int.from_bytes(data[PARTITION_OFFSET:RANDOMNESS_OFFSET], "big") & PARTITION_MASK,
        randomness=data[RANDOMNESS_OFFSET:],
    )


def parse(text: str) -> PFIDFields:
    """Split a text PFID into its fields."""
    return unpack(decode(text))


def timestamp_of(text: str) -> datetime:
    """
    UTC creation time of a text PFID.

    Timestamps past year 9999 fit in 48 bits but not in a datetime;
    those raise InvalidTimestampError.
    """
    timestamp = parse(text).timestamp
    try:
        return _EPOCH + timedelta(milliseconds=timestamp)
    except OverflowError as e:
        raise InvalidTimestampError(timestamp) from e
