"""
Memory arena region.

Only the live parts of the arena are dumped. Low memory is written as the
words in front of each free node up to (and including) the node's two-word
header, walking the circular free list that starts at ``rover``; the walk is
followed by the rest of low memory, then the whole of high memory. Every word
is 64 bits; a node's size lives in the low half of its first word and the
forward link in the high half of its second word.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .base import MIN_HALFWORD
from .engine import EngineSettings
from .errors import RangeViolation
from .reader import Cursor, split_word

logger = logging.getLogger(__name__)

WORD = ">i8"


@dataclass(frozen=True)
class Memory:
    lo_mem_max: int
    rover: int
    hi_mem_min: int
    avail: int
    mem_end: int
    var_used: int
    dyn_used: int
    spans: Tuple[Tuple[int, np.ndarray], ...]

    @classmethod
    def parse(cls, cursor: Cursor, settings: EngineSettings) -> "Memory":
        lo_mem_max = cursor.ranged(
            settings.lo_mem_stat_max + 1000, settings.hi_mem_stat_min - 1, "lo_mem_max"
        )
        rover = cursor.ranged(settings.lo_mem_stat_max + 1, lo_mem_max, "rover")

        spans: List[Tuple[int, np.ndarray]] = []
        p = settings.mem_bot
        q = rover
        nodes = 0
        while True:
            if q < p or q + 1 > lo_mem_max:
                raise RangeViolation(offset=cursor.offset, field="rlink", lo=p, hi=lo_mem_max - 1, observed=q)
            chunk_offset = cursor.offset
            words = cursor.array(q + 2 - p, "mem", WORD)
            spans.append((p, words))
            _, node_size = split_word(int(words[q - p]))
            rlink, _ = split_word(int(words[q + 1 - p]))
            header_offset = chunk_offset + (q - p) * 8
            p = q + node_size
            if p > lo_mem_max:
                raise RangeViolation(
                    offset=header_offset, field="node_size", lo=0, hi=lo_mem_max - q, observed=node_size
                )
            if q >= rlink and rlink != rover:
                raise RangeViolation(
                    offset=header_offset + 8, field="rlink", lo=q + 1, hi=lo_mem_max, observed=rlink
                )
            nodes += 1
            q = rlink
            if q == rover:
                break

        spans.append((p, cursor.array(lo_mem_max + 1 - p, "mem", WORD)))
        hi_mem_min = cursor.ranged(lo_mem_max + 1, settings.hi_mem_stat_min, "hi_mem_min")
        avail = cursor.ranged(MIN_HALFWORD, settings.mem_top, "avail")
        mem_end = settings.mem_top
        spans.append((hi_mem_min, cursor.array(mem_end + 1 - hi_mem_min, "mem", WORD)))
        var_used = cursor.scalar("var_used")
        dyn_used = cursor.scalar("dyn_used")
        logger.debug(
            "memory: lo_mem_max=%d hi_mem_min=%d, %d free node(s)", lo_mem_max, hi_mem_min, nodes
        )
        return cls(
            lo_mem_max=lo_mem_max,
            rover=rover,
            hi_mem_min=hi_mem_min,
            avail=avail,
            mem_end=mem_end,
            var_used=var_used,
            dyn_used=dyn_used,
            spans=tuple(spans),
        )

    def word(self, p: int) -> int | None:
        """Return the raw word at ``p``, or None if it lies inside a free node."""

        for start, words in self.spans:
            if start <= p < start + len(words):
                return int(words[p - start])
        return None


def decode(data: bytes, settings: EngineSettings, *, offset: int = 0) -> Tuple[Memory, int]:
    cursor = Cursor(data, offset)
    mem = Memory.parse(cursor, settings)
    return mem, cursor.offset - offset
