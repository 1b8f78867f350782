"""
PFID - partitioned, sortable 160-bit identifiers.

    from pfid import generate, extract_partition

    pfid = generate(42)
    assert extract_partition(pfid) == 42
"""

from pfid.codec import (
    PFIDFields,
    decode,
    decode_partition,
    encode,
    extract_partition,
    is_valid_binary_id,
    is_valid_text_id,
    parse,
    timestamp_of,
    unpack,
)
from pfid.errors import (
    InvalidBinaryError,
    InvalidPartitionError,
    InvalidTextError,
    InvalidTimestampError,
    PFIDError,
)
from pfid.generator import (
    generate,
    generate_binary,
    generate_example,
    generate_related,
    generate_root,
    pack_binary,
    random_partition,
    zero,
)
from pfid.spec import ZERO

__version__ = "0.1.0"

__all__ = [
    "PFIDFields",
    "decode",
    "decode_partition",
    "encode",
    "extract_partition",
    "is_valid_binary_id",
    "is_valid_text_id",
    "parse",
    "timestamp_of",
    "unpack",
    "InvalidBinaryError",
    "InvalidPartitionError",
    "InvalidTextError",
    "InvalidTimestampError",
    "PFIDError",
    "generate",
    "generate_binary",
    "generate_example",
    "generate_related",
    "generate_root",
    "pack_binary",
    "random_partition",
    "zero",
    "ZERO",
]
