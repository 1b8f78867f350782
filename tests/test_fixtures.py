"""
Fixture Tests - the shared CSV every implementation is checked against.
"""

import pytest

from pfid.codec import decode, encode, extract_partition, is_valid_text_id
from pfid.errors import InvalidBinaryError, InvalidPartitionError, InvalidTimestampError
from pfid.fixtures import (
    MAX_RANDOMNESS,
    ZERO_RANDOMNESS,
    FixtureMismatch,
    FixtureRow,
    build_fixtures,
    edge_cases,
    random_cases,
    read_fixtures,
    verify_fixtures,
    verify_row,
    write_fixtures,
)
from pfid.spec import MAX_PARTITION, MAX_TIMESTAMP


# =============================================================================
# Shared fixture file
# =============================================================================

class TestSharedFixtures:

    def test_file_has_rows(self, fixtures_path):
        assert len(read_fixtures(fixtures_path)) > 20

    def test_every_row(self, fixtures_path):
        for row in read_fixtures(fixtures_path):
            binary = row.binary
            assert encode(binary) == row.pfid, row
            assert decode(row.pfid) == binary, row
            assert extract_partition(row.pfid) == row.partition, row
            assert is_valid_text_id(row.pfid), row

    def test_verify_fixtures_clean(self, fixtures_path):
        assert verify_fixtures(read_fixtures(fixtures_path)) == []

    def test_matches_generated_edge_cases(self, fixtures_path):
        assert read_fixtures(fixtures_path) == build_fixtures(count=0)

    def test_known_rows_present(self, fixtures_path):
        pfids = {row.pfid for row in read_fixtures(fixtures_path)}
        assert "0" * 32 in pfids
        assert "7" + "z" * 31 in pfids
        assert "013xrzp12g3nqk8n0000000000000000" in pfids


# =============================================================================
# FixtureRow
# =============================================================================

class TestFixtureRow:

    def test_build(self):
        row = FixtureRow.build(0, 0, ZERO_RANDOMNESS)
        assert row.pfid == "0" * 32

    def test_csv_round_trip(self):
        row = FixtureRow.build(1_234_567_890_000, 123_456_789, bytes.fromhex("0123456789abcdef0123"))
        fields = row.to_csv()
        assert fields == ["1234567890000", "123456789", "0123456789abcdef0123", "013xrzp12g3nqk8n04hmasw9nf6yy093"]
        assert FixtureRow.from_csv(fields) == row

    def test_from_csv_wrong_columns(self):
        with pytest.raises(ValueError, match="Expected 4 columns"):
            FixtureRow.from_csv(["1", "2", "00"])

    def test_from_csv_strips_whitespace(self):
        row = FixtureRow.from_csv([" 0", "0 ", "00000000000000000000", " 00000000000000000000000000000000\r"])
        assert row.pfid == "0" * 32


# =============================================================================
# Case generation
# =============================================================================

class TestCases:

    def test_edge_cases_cover_extremes(self):
        cases = edge_cases()
        assert (0, 0, ZERO_RANDOMNESS) in cases
        assert (MAX_TIMESTAMP, MAX_PARTITION, MAX_RANDOMNESS) in cases
        assert (1_234_567_890_000, 123_456_789, ZERO_RANDOMNESS) in cases
        assert len(cases) == 31

    def test_random_cases_reproducible(self):
        assert random_cases(10, seed=5) == random_cases(10, seed=5)
        assert random_cases(10, seed=5) != random_cases(10, seed=6)

    def test_random_cases_in_domain(self):
        for timestamp, partition, randomness in random_cases(100):
            assert 0 <= timestamp <= MAX_TIMESTAMP
            assert 0 <= partition <= MAX_PARTITION
            assert len(randomness) == 10

    def test_build_fixtures(self):
        rows = build_fixtures(count=5)
        assert len(rows) == len(edge_cases()) + 5
        assert all(is_valid_text_id(row.pfid) for row in rows)


# =============================================================================
# File I/O
# =============================================================================

class TestFileIO:

    def test_write_then_read(self, tmp_path):
        rows = build_fixtures(count=20, seed=1)
        path = write_fixtures(tmp_path / "nested" / "pfid_fixtures.csv", rows)
        assert path.exists()
        assert read_fixtures(path) == rows

    def test_header(self, tmp_path):
        path = write_fixtures(tmp_path / "f.csv", build_fixtures(count=0))
        assert path.read_text().splitlines()[0] == "timestamp,partition,randomness_hex,pfid"

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "f.csv"
        path.write_text(
            "timestamp,partition,randomness_hex,pfid\n"
            "\n"
            "0,0,00000000000000000000,00000000000000000000000000000000\n"
            "\n"
        )
        assert len(read_fixtures(path)) == 1

    @pytest.mark.parametrize("line", [
        "0,0,zz,00000000000000000000000000000000",
        "zero,0,00000000000000000000,00000000000000000000000000000000",
        "0,0,00000000000000000000",
    ])
    def test_malformed_row_names_line(self, tmp_path, line):
        path = tmp_path / "f.csv"
        path.write_text(
            "timestamp,partition,randomness_hex,pfid\n"
            "0,0,00000000000000000000,00000000000000000000000000000000\n"
            f"{line}\n"
        )
        with pytest.raises(ValueError, match=r"f\.csv:3: "):
            read_fixtures(path)

    def test_generated_file_verifies(self, tmp_path):
        path = write_fixtures(tmp_path / "f.csv", build_fixtures(count=50))
        assert verify_fixtures(read_fixtures(path)) == []


# =============================================================================
# Verification
# =============================================================================

class TestVerify:

    def test_wrong_pfid(self):
        row = FixtureRow(0, 0, ZERO_RANDOMNESS, "0" * 31 + "1")
        with pytest.raises(FixtureMismatch) as exc:
            verify_row(row)
        assert exc.value.step == "encode"
        assert exc.value.got == "0" * 32

    def test_uppercase_expected_fails_encode(self):
        row = FixtureRow.build(1_234_567_890_000, 123_456_789, MAX_RANDOMNESS)
        upper = FixtureRow(row.timestamp, row.partition, row.randomness, row.pfid.upper())
        with pytest.raises(FixtureMismatch, match="encode mismatch"):
            verify_row(upper)

    def test_out_of_range_partition(self):
        row = FixtureRow(0, MAX_PARTITION + 1, ZERO_RANDOMNESS, "0" * 32)
        with pytest.raises(FixtureMismatch) as exc:
            verify_row(row)
        assert exc.value.step == "pack_binary"
        assert isinstance(exc.value.got, InvalidPartitionError)

    def test_short_randomness(self):
        row = FixtureRow(0, 0, bytes(9), "0" * 32)
        with pytest.raises(FixtureMismatch) as exc:
            verify_row(row)
        assert exc.value.step == "pack_binary"
        assert isinstance(exc.value.got, InvalidBinaryError)

    def test_rejected_rows_are_collected(self):
        good = FixtureRow.build(0, 0, ZERO_RANDOMNESS)
        rows = [
            FixtureRow(0, MAX_PARTITION + 1, ZERO_RANDOMNESS, "0" * 32),
            good,
            FixtureRow(MAX_TIMESTAMP + 1, 0, ZERO_RANDOMNESS, "0" * 32),
        ]
        failures = verify_fixtures(rows)
        assert [f.row for f in failures] == [rows[0], rows[2]]
        assert isinstance(failures[1].got, InvalidTimestampError)

    def test_collects_failures(self):
        good = FixtureRow.build(1, 1, ZERO_RANDOMNESS)
        bad = FixtureRow(1, 2, ZERO_RANDOMNESS, good.pfid)
        failures = verify_fixtures([good, bad, good])
        assert len(failures) == 1
        assert failures[0].row is bad
