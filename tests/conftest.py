from pathlib import Path

import pytest

import pfid.generator
from pfid.spec import FIXTURE_FILENAME


@pytest.fixture
def fixtures_path() -> Path:
    return Path(__file__).parent / "fixtures" / FIXTURE_FILENAME


@pytest.fixture
def frozen_clock(monkeypatch):
    """Pin the generator clock to the example timestamp."""
    monkeypatch.setattr(pfid.generator, "_now_millis", lambda: 1_234_567_890_000)
    return 1_234_567_890_000


@pytest.fixture
def fixed_random(monkeypatch):
    """Make every random draw return 0xab bytes."""
    monkeypatch.setattr(pfid.generator, "_random_bytes", lambda n: b"\xab" * n)
    return b"\xab"
