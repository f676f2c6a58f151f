"""
Control-sequence hash region.

The hash maps multi-letter control sequence names to eqtb slots. Each hash
word holds the name's string number (``text``, high half) and the slot that
continues the bucket's collision chain (``next``, low half). Entries from
``hash_base`` up to ``hash_used`` are written sparsely as (position, word)
records, the remainder of the fixed hash densely, and the hash extension
(``hash_high`` words addressed from ``eqtb_size + 1``) last.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from .engine import EngineSettings
from .reader import Cursor, split_word
from .stringtable import StringTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControlSeqHash:
    settings: EngineSettings
    hash_used: int
    cs_count: int
    fixed: np.ndarray
    extension: np.ndarray

    @classmethod
    def parse(cls, cursor: Cursor, settings: EngineSettings, hash_high: int) -> "ControlSeqHash":
        base = settings.hash_base
        fixed = np.zeros(settings.undefined_control_sequence - base, dtype=np.int64)
        hash_used = cursor.ranged(base, settings.frozen_control_sequence, "hash_used")

        p = base - 1
        records = 0
        while p != hash_used:
            p = cursor.ranged(p + 1, hash_used, "hash position")
            fixed[p - base] = cursor.scalar("hash word", ">i8")
            records += 1

        tail = cursor.array(settings.undefined_control_sequence - 1 - hash_used, "hash", ">i8")
        fixed[hash_used + 1 - base :] = tail
        if hash_high > 0:
            extension = cursor.array(hash_high, "hash extension", ">i8").astype(np.int64)
        else:
            extension = np.zeros(0, dtype=np.int64)
        cs_count = cursor.scalar("cs_count")
        logger.debug("cshash: hash_used=%d, %d sparse record(s), cs_count=%d", hash_used, records, cs_count)
        return cls(
            settings=settings,
            hash_used=hash_used,
            cs_count=cs_count,
            fixed=fixed,
            extension=extension,
        )

    def addressable(self, p: int) -> bool:
        s = self.settings
        return (s.hash_base <= p < s.undefined_control_sequence) or (
            s.eqtb_size < p <= s.eqtb_size + len(self.extension)
        )

    def _word(self, p: int) -> int:
        s = self.settings
        if s.hash_base <= p < s.undefined_control_sequence:
            return int(self.fixed[p - s.hash_base])
        if s.eqtb_size < p <= s.eqtb_size + len(self.extension):
            return int(self.extension[p - s.eqtb_size - 1])
        raise KeyError(p)

    def text(self, p: int) -> int:
        return split_word(self._word(p))[0]

    def next(self, p: int) -> int:
        return split_word(self._word(p))[1]

    def entries(self) -> Iterator[Tuple[int, int]]:
        """Yield (position, string number) for every occupied hash slot."""

        s = self.settings
        for index in np.flatnonzero(self.fixed):
            text = self.text(s.hash_base + int(index))
            if text:
                yield s.hash_base + int(index), text
        for index in np.flatnonzero(self.extension):
            text = self.text(s.eqtb_size + 1 + int(index))
            if text:
                yield s.eqtb_size + 1 + int(index), text

    def bucket(self, name: str) -> int:
        """Home slot of a multi-letter name, as computed by the engine's id_lookup."""

        codes = [ord(c) for c in name]
        h = codes[0]
        for c in codes[1:]:
            h = (h + h + c) % self.settings.hash_prime
        return self.settings.hash_base + h

    def lookup(self, name: str, strings: StringTable) -> int | None:
        """Return the eqtb slot of control sequence ``name``, or None if undefined."""

        s = self.settings
        if not name:
            return s.null_cs
        if len(name) == 1:
            return s.single_base + ord(name)
        p = self.bucket(name)
        seen = set()
        # Chains are not validated at decode time, so stop on a repeat.
        while p not in seen:
            seen.add(p)
            text, link = split_word(self._word(p))
            if text > 0 and strings.get(text) == name:
                return p
            if link == 0 or not self.addressable(link):
                return None
            p = link
        return None


def decode(
    data: bytes, settings: EngineSettings, hash_high: int, *, offset: int = 0
) -> Tuple[ControlSeqHash, int]:
    cursor = Cursor(data, offset)
    cshash = ControlSeqHash.parse(cursor, settings, hash_high)
    return cshash, cursor.offset - offset
