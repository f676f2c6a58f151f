"""
Bounded big-endian reader shared by every region decoder.

Format dumps are written as big-endian words. Every length, offset and pointer
in the stream is obtained through either an exact-match read or an inclusive
range-checked read; those checks are the only defence against a corrupt file.
"""

from __future__ import annotations

import struct

import numpy as np

from .errors import RangeViolation, StructuralMismatch, Truncated

# numpy dtype string -> struct format for single scalar reads.
_STRUCT_CODES = {
    ">i2": ">h",
    ">u2": ">H",
    ">i4": ">i",
    ">u4": ">I",
    ">i8": ">q",
    ">u8": ">Q",
}


class Cursor:
    """Read position over an immutable byte buffer."""

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0) -> None:
        if offset < 0 or offset > len(data):
            raise ValueError("offset is outside the readable range")
        self.data = memoryview(data).cast("B")
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def _require(self, needed: int, field: str) -> None:
        if needed > self.remaining:
            raise Truncated(offset=self.offset, field=field, needed=needed, available=self.remaining)

    def scalar(self, field: str, dtype: str = ">i4") -> int:
        code = _STRUCT_CODES[dtype]
        size = struct.calcsize(code)
        self._require(size, field)
        (value,) = struct.unpack_from(code, self.data, self.offset)
        self.offset += size
        return value

    def exact(self, expected: int, field: str, dtype: str = ">i4") -> int:
        start = self.offset
        value = self.scalar(field, dtype)
        if value != expected:
            raise StructuralMismatch(offset=start, field=field, expected=expected, observed=value)
        return value

    def ranged(self, lo: int, hi: int, field: str, dtype: str = ">i4") -> int:
        start = self.offset
        value = self.scalar(field, dtype)
        if not lo <= value <= hi:
            raise RangeViolation(offset=start, field=field, lo=lo, hi=hi, observed=value)
        return value

    def array(self, count: int, field: str, dtype: str = ">i4") -> np.ndarray:
        """Read ``count`` elements into an array that owns its memory."""

        if count < 0:
            raise RangeViolation(offset=self.offset, field=field, lo=0, hi=2**31 - 1, observed=count)
        itemsize = np.dtype(dtype).itemsize
        self._require(count * itemsize, field)
        values = np.frombuffer(self.data, dtype=dtype, count=count, offset=self.offset).copy()
        self.offset += count * itemsize
        return values

    def ranged_array(self, count: int, lo: int, hi: int, field: str, dtype: str = ">i4") -> np.ndarray:
        start = self.offset
        values = self.array(count, field, dtype)
        wide = values.astype(np.int64)
        bad = np.flatnonzero((wide < lo) | (wide > hi))
        if bad.size:
            index = int(bad[0])
            raise RangeViolation(
                offset=start + index * values.itemsize,
                field=f"{field}[{index}]",
                lo=lo,
                hi=hi,
                observed=int(wide[index]),
            )
        return values


def split_word(word: int) -> tuple[int, int]:
    """Split a 64-bit memory word into its signed (high, low) 32-bit halves."""

    word &= 0xFFFFFFFFFFFFFFFF
    high = (word >> 32) & 0xFFFFFFFF
    low = word & 0xFFFFFFFF
    if high >= 0x80000000:
        high -= 0x100000000
    if low >= 0x80000000:
        low -= 0x100000000
    return high, low
