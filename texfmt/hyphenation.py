"""
Hyphenation exceptions and the packed pattern trie.

Exceptions live in a fixed-size open hash table whose collision chains are
threaded through the table itself: each dumped record names its slot and,
packed into the same word, the slot holding the next entry of its chain.

The trie is dumped as three parallel transition arrays followed by the
hyphenation operation table. Operations are grouped per language; the dump
lists (language, count) claims in decreasing language order, and each claim
takes its operations from the top of whatever is still unassigned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .base import MAX_HALFWORD, MIN_HALFWORD, TOO_BIG_CHAR
from .errors import RangeViolation
from .reader import Cursor

logger = logging.getLogger(__name__)

HYPH_SIZE = 8191
TRIE_OP_SIZE = 35111
BIGGEST_LANG = 255

# Records above this value carry a chain link in their upper half.
PACKED_SLOT_LIMIT = 0xFFFF


@dataclass(frozen=True)
class HyphenationExceptions:
    count: int
    next_free: int
    link: np.ndarray
    word: np.ndarray
    list: np.ndarray

    def slot(self, index: int) -> Tuple[int, int, int]:
        """Return (link, word, list) for one table slot."""

        return int(self.link[index]), int(self.word[index]), int(self.list[index])


@dataclass(frozen=True)
class TrieTables:
    trie_max: int
    hyph_start: int
    trl: np.ndarray
    tro: np.ndarray
    trc: np.ndarray
    max_hyph_char: int
    trie_op_ptr: int
    hyf_distance: np.ndarray
    hyf_num: np.ndarray
    hyf_next: np.ndarray
    op_start: np.ndarray
    trie_used: np.ndarray

    def claimed_languages(self) -> list[int]:
        return [int(lang) for lang in np.flatnonzero(self.trie_used)]

    def language_ops(self, lang: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return the (distance, num, next) operation slices owned by ``lang``."""

        start = int(self.op_start[lang])
        stop = start + int(self.trie_used[lang])
        return self.hyf_distance[start:stop], self.hyf_num[start:stop], self.hyf_next[start:stop]


def unpack_hyph_slot(value: int) -> Tuple[int, int]:
    """Split a packed exception record into (slot, next)."""

    if value > PACKED_SLOT_LIMIT:
        next_slot, slot = divmod(value, 0x10000)
        return slot, next_slot
    return value, 0


def decode_hyph_exceptions(cursor: Cursor, string_count: int) -> HyphenationExceptions:
    """Rebuild the exception table; ``string_count`` is ``len()`` of the string pool."""

    count = cursor.ranged(0, HYPH_SIZE, "hyph_count")
    next_free = cursor.scalar("hyph_next")
    link = np.zeros(HYPH_SIZE, dtype=np.uint16)
    word = np.zeros(HYPH_SIZE, dtype=np.int32)
    lists = np.zeros(HYPH_SIZE, dtype=np.int32)
    max_word = string_count + TOO_BIG_CHAR - 1

    for _ in range(count):
        record_offset = cursor.offset
        packed = cursor.scalar("hyph record")
        slot, next_slot = unpack_hyph_slot(packed)
        if not 0 <= slot < HYPH_SIZE:
            raise RangeViolation(offset=record_offset, field="hyph slot", lo=0, hi=HYPH_SIZE - 1, observed=slot)
        if not 0 <= next_slot < HYPH_SIZE:
            raise RangeViolation(
                offset=record_offset, field="hyph link", lo=0, hi=HYPH_SIZE - 1, observed=next_slot
            )
        link[slot] = next_slot
        word[slot] = cursor.ranged(0, max_word, "hyph_word")
        lists[slot] = cursor.ranged(MIN_HALFWORD, MAX_HALFWORD, "hyph_list")

    logger.debug("hyphenation: %d exception(s)", count)
    return HyphenationExceptions(count=count, next_free=next_free, link=link, word=word, list=lists)


def decode_trie(cursor: Cursor) -> TrieTables:
    trie_max = cursor.scalar("trie_max")
    hyph_start = cursor.ranged(0, trie_max, "hyph_start")
    n_trie = trie_max + 1
    trl = cursor.array(n_trie, "trie_trl")
    tro = cursor.array(n_trie, "trie_tro")
    trc = cursor.array(n_trie, "trie_trc", ">u2")
    max_hyph_char = cursor.scalar("max_hyph_char")

    trie_op_ptr = cursor.ranged(0, TRIE_OP_SIZE, "trie_op_ptr")
    hyf_distance = cursor.array(trie_op_ptr, "hyf_distance", ">i2")
    hyf_num = cursor.array(trie_op_ptr, "hyf_num", ">i2")
    hyf_next = cursor.array(trie_op_ptr, "hyf_next", ">u2")

    trie_used = np.zeros(BIGGEST_LANG + 1, dtype=np.int32)
    op_start = np.zeros(BIGGEST_LANG + 1, dtype=np.int32)
    remaining = trie_op_ptr
    next_free_lang = BIGGEST_LANG + 1
    while remaining > 0:
        lang = cursor.ranged(0, next_free_lang - 1, "trie language")
        used = cursor.ranged(1, remaining, "trie_used")
        trie_used[lang] = used
        remaining -= used
        op_start[lang] = remaining
        next_free_lang = lang

    logger.debug("trie: trie_max=%d, %d op(s)", trie_max, trie_op_ptr)
    return TrieTables(
        trie_max=trie_max,
        hyph_start=hyph_start,
        trl=trl,
        tro=tro,
        trc=trc,
        max_hyph_char=max_hyph_char,
        trie_op_ptr=trie_op_ptr,
        hyf_distance=hyf_distance,
        hyf_num=hyf_num,
        hyf_next=hyf_next,
        op_start=op_start,
        trie_used=trie_used,
    )


def decode(data: bytes, string_count: int, *, offset: int = 0) -> Tuple[HyphenationExceptions, TrieTables, int]:
    cursor = Cursor(data, offset)
    exceptions = decode_hyph_exceptions(cursor, string_count)
    trie = decode_trie(cursor)
    return exceptions, trie, cursor.offset - offset
