"""
Equivalences table region.

The table is run-length encoded starting at ``active_base``. Each run is a
pair of counts: ``x`` literal words follow the first count, and the second
count ``y`` says how many further slots repeat the last literal word. Runs
continue until every slot up to ``eqtb_size`` is covered. When ``hash_high``
is positive, that many extra words (the entries for the hash extension) come
straight after.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .engine import EngineSettings
from .reader import Cursor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EqtbEntry:
    ty: int
    level: int
    value: int


@dataclass(frozen=True)
class EquivalenciesTable:
    # Index 0 is unused; slot k lives at words[k].
    words: np.ndarray

    @classmethod
    def parse(cls, cursor: Cursor, settings: EngineSettings, hash_high: int) -> "EquivalenciesTable":
        size = settings.eqtb_size
        chunks: List[np.ndarray] = [np.zeros(settings.active_base, dtype=np.int64)]
        k = settings.active_base
        runs = 0
        while k <= size:
            x = cursor.ranged(1, size + 1 - k, "eqtb literal run")
            literal = cursor.array(x, "eqtb", ">i8").astype(np.int64)
            chunks.append(literal)
            k += x
            y = cursor.ranged(0, size + 1 - k, "eqtb repeat run")
            if y:
                chunks.append(np.full(y, literal[-1], dtype=np.int64))
            k += y
            runs += 1
        if hash_high > 0:
            chunks.append(cursor.array(hash_high, "eqtb hash extension", ">i8").astype(np.int64))
        words = np.concatenate(chunks)
        logger.debug("eqtb: %d run(s), %d slot(s)", runs, len(words) - 1)
        return cls(words=words)

    def __len__(self) -> int:
        return len(self.words)

    def decode(self, index: int) -> EqtbEntry:
        word = int(self.words[index]) & 0xFFFFFFFFFFFFFFFF
        value = word >> 32
        if value >= 0x80000000:
            value -= 0x100000000
        return EqtbEntry(ty=(word >> 16) & 0xFFFF, level=word & 0xFFFF, value=value)


def decode(
    data: bytes, settings: EngineSettings, hash_high: int, *, offset: int = 0
) -> Tuple[EquivalenciesTable, int]:
    cursor = Cursor(data, offset)
    eqtb = EquivalenciesTable.parse(cursor, settings, hash_high)
    return eqtb, cursor.offset - offset
