"""
Bit cursor over a byte buffer.

Fields in a PFID are 3 or 5 bits wide in text but 8-bit aligned in binary,
so symbols regularly straddle byte boundaries. Both cursors walk the buffer
MSB first:

    byte_index = offset // 8
    bit_index  = 7 - offset % 8
"""

from __future__ import annotations


class BitReader:
    """Reads unsigned big-endian bit runs from ``data``."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) * 8 - self.offset

    def read(self, count: int) -> int:
        if count < 0:
            raise ValueError(f"Bit count cannot be negative: {count}")
        if count > self.remaining:
            raise ValueError(
                f"Cannot read {count} bits at offset {self.offset}, "
                f"only {self.remaining} left"
            )
        value = 0
        for _ in range(count):
            byte = self._data[self.offset // 8]
            bit = (byte >> (7 - self.offset % 8)) & 1
            value = (value << 1) | bit
            self.offset += 1
        return value

    def skip(self, count: int) -> None:
        self.read(count)


class BitWriter:
    """Writes unsigned big-endian bit runs into a zeroed buffer of ``size`` bytes."""

    def __init__(self, size: int) -> None:
        self._buffer = bytearray(size)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._buffer) * 8 - self.offset

    def write(self, value: int, count: int) -> None:
        if count < 0:
            raise ValueError(f"Bit count cannot be negative: {count}")
        if value < 0 or value >> count:
            raise ValueError(f"Value {value} does not fit in {count} bits")
        if count > self.remaining:
            raise ValueError(
                f"Cannot write {count} bits at offset {self.offset}, "
                f"only {self.remaining} left"
            )
        for shift in range(count - 1, -1, -1):
            if (value >> shift) & 1:
                self._buffer[self.offset // 8] |= 1 << (7 - self.offset % 8)
            self.offset += 1

    def getvalue(self) -> bytes:
        return bytes(self._buffer)
