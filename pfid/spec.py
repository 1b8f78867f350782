"""
PFID Format Specification v1.0
===============================

Binary layout (20 bytes, big-endian):
    [0:6]    timestamp      <- 48-bit Unix milliseconds
    [6:10]   partition      <- 32-bit field, top 2 bits always 0
    [10:20]  randomness     <- 80 bits from a secure source

Text layout (32 chars, Crockford Base32, lowercase):
    01an4z07byd9df0k79ka1307sr9x4mv3
    |--------||----||--------------|
     time      part  randomness
     3+9x5     6x5   16x5

Design Decisions:
    - Fields stay byte-aligned in binary; the partition wastes 2 bits for it
    - First symbol carries only 3 bits, so text ids always start with 0-7
    - The 2 partition padding bits are skipped in text and restored as 0
    - Lowercase on output, either case accepted on input
    - Sorting the text sorts by timestamp first (same as sorting the binary)
"""

# Field widths in bits
TIMESTAMP_BITS = 48
PARTITION_FIELD_BITS = 32
PARTITION_BITS = 30
RANDOMNESS_BITS = 80

# Byte layout
TIMESTAMP_SIZE = TIMESTAMP_BITS // 8
PARTITION_SIZE = PARTITION_FIELD_BITS // 8
RANDOMNESS_SIZE = RANDOMNESS_BITS // 8
BINARY_SIZE = TIMESTAMP_SIZE + PARTITION_SIZE + RANDOMNESS_SIZE  # 20

PARTITION_OFFSET = TIMESTAMP_SIZE
RANDOMNESS_OFFSET = TIMESTAMP_SIZE + PARTITION_SIZE

# Domains
MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1  # 281_474_976_710_655
MAX_PARTITION = (1 << PARTITION_BITS) - 1  # 1_073_741_823
PARTITION_MASK = MAX_PARTITION

# Crockford Base32 (no i, l, o, u)
ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"
SYMBOL_BITS = 5

# Text layout
TEXT_SIZE = 32
LEADING_SYMBOLS = "01234567"
PARTITION_TEXT_OFFSET = 10
PARTITION_TEXT_SIZE = 6
PADDING_BITS = PARTITION_FIELD_BITS - PARTITION_BITS

# Bit widths read/written per text symbol, in order. None marks the
# partition padding: read and dropped on encode, written as 0 on decode.
TEXT_LAYOUT = (
    (3,) + (SYMBOL_BITS,) * 9        # timestamp
    + (None,)                        # padding
    + (SYMBOL_BITS,) * 6             # partition
    + (SYMBOL_BITS,) * 16            # randomness
)

# Reserved placeholder, never produced by generation
ZERO = "0" * TEXT_SIZE

# Values used by generate_example() - well into the past
EXAMPLE_PARTITION = 123_456_789
EXAMPLE_TIMESTAMP = 1_234_567_890_000

# Cross-implementation fixture file
FIXTURE_HEADER = ("timestamp", "partition", "randomness_hex", "pfid")
FIXTURE_FILENAME = "pfid_fixtures.csv"
FIXTURE_RANDOM_COUNT = 200
FIXTURE_SEED = 123
