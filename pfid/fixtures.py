"""
PFID Fixtures - the CSV shared by every implementation of the format.

Each row pins one (timestamp, partition, randomness) triple to the text id
it must encode to:

    timestamp,partition,randomness_hex,pfid
    0,0,00000000000000000000,00000000000000000000000000000000

Every port reads the same file and checks encode, decode, partition
extraction and validation against it. Columns are read by position.
"""

from __future__ import annotations

import csv
import logging
import random
from dataclasses import dataclass
from pathlib import Path

from pfid.codec import decode, encode, extract_partition, is_valid_text_id
from pfid.errors import PFIDError
from pfid.generator import pack_binary
from pfid.spec import (
    EXAMPLE_PARTITION,
    EXAMPLE_TIMESTAMP,
    FIXTURE_HEADER,
    FIXTURE_RANDOM_COUNT,
    FIXTURE_SEED,
    MAX_PARTITION,
    MAX_TIMESTAMP,
    RANDOMNESS_SIZE,
)

logger = logging.getLogger(__name__)

ZERO_RANDOMNESS = bytes(RANDOMNESS_SIZE)
MAX_RANDOMNESS = b"\xff" * RANDOMNESS_SIZE


class FixtureMismatch(Exception):
    """A fixture row disagrees with this implementation."""

    def __init__(self, row: FixtureRow, step: str, got: object) -> None:
        self.row = row
        self.step = step
        self.got = got
        super().__init__(f"{step} mismatch for {row.pfid}: got {got!r}")


@dataclass(frozen=True)
class FixtureRow:
    timestamp: int
    partition: int
    randomness: bytes
    pfid: str

    @property
    def binary(self) -> bytes:
        return pack_binary(self.partition, self.timestamp, self.randomness)

    @classmethod
    def build(cls, timestamp: int, partition: int, randomness: bytes) -> FixtureRow:
        """Row whose expected id is computed by this implementation."""
        pfid = encode(pack_binary(partition, timestamp, randomness))
        return cls(timestamp, partition, bytes(randomness), pfid)

    def to_csv(self) -> list[str]:
        return [str(self.timestamp), str(self.partition), self.randomness.hex(), self.pfid]

    @classmethod
    def from_csv(cls, fields: list[str]) -> FixtureRow:
        if len(fields) != len(FIXTURE_HEADER):
            raise ValueError(f"Expected {len(FIXTURE_HEADER)} columns, got {len(fields)}: {fields!r}")
        timestamp, partition, randomness_hex, pfid = (f.strip() for f in fields)
        return cls(int(timestamp), int(partition), bytes.fromhex(randomness_hex), pfid)


# =============================================================================
# Case generation
# =============================================================================

def edge_cases() -> list[tuple[int, int, bytes]]:
    """Field extremes, off-by-one boundaries and a spread of magnitudes."""
    zero, full = ZERO_RANDOMNESS, MAX_RANDOMNESS
    cases = [
        (0, 0, zero),
        (0, 0, full),
        (0, MAX_PARTITION, zero),
        (0, MAX_PARTITION, full),
        (MAX_TIMESTAMP, 0, zero),
        (MAX_TIMESTAMP, 0, full),
        (MAX_TIMESTAMP, MAX_PARTITION, zero),
        (MAX_TIMESTAMP, MAX_PARTITION, full),
        (1, 1, zero),
        (1, 1, full),
        (1, MAX_PARTITION - 1, zero),
        (MAX_TIMESTAMP - 1, 1, zero),
    ]
    for partition in (1, 100, 1_000, 10_000, 100_000, 1_000_000, 10_000_000,
                      100_000_000, 500_000_000, MAX_PARTITION):
        cases.append((0, partition, zero))
    for timestamp in (1, 1_000, 1_000_000, 1_000_000_000, 1_000_000_000_000,
                      EXAMPLE_TIMESTAMP, MAX_TIMESTAMP - 1):
        cases.append((timestamp, 0, zero))
    cases.append((EXAMPLE_TIMESTAMP, EXAMPLE_PARTITION, zero))
    cases.append((EXAMPLE_TIMESTAMP, EXAMPLE_PARTITION, full))
    return cases


def random_cases(count: int = FIXTURE_RANDOM_COUNT, seed: int = FIXTURE_SEED) -> list[tuple[int, int, bytes]]:
    """Seeded cases; the same seed always yields the same rows."""
    rng = random.Random(seed)
    return [
        (rng.randint(0, MAX_TIMESTAMP), rng.randint(0, MAX_PARTITION), rng.randbytes(RANDOMNESS_SIZE))
        for _ in range(count)
    ]


def build_fixtures(count: int = FIXTURE_RANDOM_COUNT, seed: int = FIXTURE_SEED) -> list[FixtureRow]:
    return [FixtureRow.build(*case) for case in edge_cases() + random_cases(count, seed)]


# =============================================================================
# File I/O
# =============================================================================

def write_fixtures(path: str | Path, rows: list[FixtureRow]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(FIXTURE_HEADER)
        writer.writerows(row.to_csv() for row in rows)
    logger.info("Wrote %d fixtures to %s", len(rows), path)
    return path


def read_fixtures(path: str | Path) -> list[FixtureRow]:
    """Parse a fixture CSV. The header row and blank lines are skipped.

    Raises ValueError naming the line of the first malformed row.
    """
    rows = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)
        for fields in reader:
            if not any(field.strip() for field in fields):
                continue
            try:
                rows.append(FixtureRow.from_csv(fields))
            except ValueError as e:
                raise ValueError(f"{path}:{reader.line_num}: {e}") from e
    logger.debug("Read %d fixtures from %s", len(rows), path)
    return rows


# =============================================================================
# Verification
# =============================================================================

def _run_step(row: FixtureRow, step: str, func, *args):
    try:
        return func(*args)
    except PFIDError as e:
        raise FixtureMismatch(row, step, e) from e


def verify_row(row: FixtureRow) -> None:
    """Check one row end to end. Raises FixtureMismatch on the first failing step.

    A step that rejects its input is reported as a mismatch of that step,
    carrying the PFIDError as ``got``.
    """
    binary = _run_step(row, "pack_binary", pack_binary, row.partition, row.timestamp, row.randomness)

    encoded = _run_step(row, "encode", encode, binary)
    if encoded != row.pfid:
        raise FixtureMismatch(row, "encode", encoded)

    decoded = _run_step(row, "decode", decode, row.pfid)
    if decoded != binary:
        raise FixtureMismatch(row, "decode", decoded.hex())

    partition = _run_step(row, "extract_partition", extract_partition, row.pfid)
    if partition != row.partition:
        raise FixtureMismatch(row, "extract_partition", partition)

    if not is_valid_text_id(row.pfid):
        raise FixtureMismatch(row, "is_valid_text_id", False)


def verify_fixtures(rows: list[FixtureRow]) -> list[FixtureMismatch]:
    """Verify every row, collecting mismatches instead of stopping at the first."""
    failures = []
    for row in rows:
        try:
            verify_row(row)
        except FixtureMismatch as e:
            logger.warning("%s", e)
            failures.append(e)
    return failures
