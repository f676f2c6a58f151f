"""
String pool region.

Layout (big endian):

    int32  pool_ptr          # number of UTF-16 code units in the pool
    int32  str_ptr           # first unused string number
    int32  str_start[str_ptr - 0xFFFF]
    uint16 str_pool[pool_ptr]

String numbers below 0x10000 are implicit single characters and are never
stored. String ``s`` (s >= 0x10000) spans ``str_start[s - 0x10000]`` up to
``str_start[s - 0xFFFF]``; the final start entry marks the end of the pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from .base import SUP_MAX_STRINGS, SUP_POOL_SIZE, TOO_BIG_CHAR
from .reader import Cursor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StringTable:
    pool_ptr: int
    str_ptr: int
    starts: np.ndarray
    pool: np.ndarray

    @classmethod
    def parse(cls, cursor: Cursor) -> "StringTable":
        pool_ptr = cursor.ranged(0, SUP_POOL_SIZE, "pool_ptr")
        str_ptr = cursor.ranged(TOO_BIG_CHAR - 1, TOO_BIG_CHAR + SUP_MAX_STRINGS, "str_ptr")
        starts = cursor.ranged_array(str_ptr - TOO_BIG_CHAR + 1, 0, pool_ptr, "str_start")
        pool = cursor.array(pool_ptr, "str_pool", ">u2")
        logger.debug("string pool: %d start(s), %d code unit(s)", len(starts), pool_ptr)
        return cls(pool_ptr=pool_ptr, str_ptr=str_ptr, starts=starts, pool=pool)

    def __len__(self) -> int:
        # The trailing start entry counts: len + TOO_BIG_CHAR - 1 == str_ptr.
        return len(self.starts)

    def all_sps(self) -> Iterator[int]:
        """Iterate the numbers of every stored (multi-character) string."""

        return iter(range(TOO_BIG_CHAR, TOO_BIG_CHAR + max(len(self.starts) - 1, 0)))

    def span(self, sp: int) -> Tuple[int, int]:
        index = sp - TOO_BIG_CHAR
        if index < 0 or index + 1 >= len(self.starts):
            raise KeyError(sp)
        return int(self.starts[index]), int(self.starts[index + 1])

    def get(self, sp: int, default: str | None = None) -> str | None:
        if 0 <= sp < TOO_BIG_CHAR or TOO_BIG_CHAR <= sp < TOO_BIG_CHAR + len(self.starts) - 1:
            return self.lookup(sp)
        return default

    def lookup(self, sp: int) -> str:
        if 0 <= sp < TOO_BIG_CHAR:
            return chr(sp)
        start, end = self.span(sp)
        units = self.pool[start:end].astype(">u2").tobytes()
        return units.decode("utf-16-be", errors="replace")


def decode(data: bytes, *, offset: int = 0) -> Tuple[StringTable, int]:
    cursor = Cursor(data, offset)
    table = StringTable.parse(cursor)
    return table, cursor.offset - offset
