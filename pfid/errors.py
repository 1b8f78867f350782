"""
PFID Errors - one exception per kind of bad input.

All of them are ValueErrors: they signal malformed input, never a
transient failure, so callers should not retry.
"""

from __future__ import annotations

from typing import Any


class PFIDError(ValueError):
    """Base class. Carries the error ``code`` and the offending input."""

    code = "invalid"
    prefix = "invalid input"

    def __init__(self, problem: Any, message: str | None = None) -> None:
        self.problem = problem
        super().__init__(message or f"{self.prefix}: {problem!r}")


class InvalidBinaryError(PFIDError):
    code = "invalid_binary"
    prefix = "invalid binary PFID"


class InvalidTextError(PFIDError):
    code = "invalid_pfid"
    prefix = "invalid PFID"


class InvalidPartitionError(PFIDError):
    code = "invalid_partition"
    prefix = "invalid partition"


class InvalidTimestampError(PFIDError):
    code = "invalid_timestamp"
    prefix = "invalid timestamp"
