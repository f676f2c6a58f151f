"""
Decode a complete format dump.

The dump is a single big-endian stream with no index: each region's length is
only known from values decoded earlier in the same stream, so the regions are
read strictly in order and the first failed check rejects the whole file.
Font, hyphenation and trie regions are decoded and validated, but only the
string pool, memory, eqtb and control-sequence hash are kept on the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .base import MAX_USV
from .catcodes import CatCode
from .cshash import ControlSeqHash
from .engine import EngineSettings, resolve_settings
from .eqtb import EqtbEntry, EquivalenciesTable
from .fonts import decode_font_tables
from .hyphenation import decode_hyph_exceptions, decode_trie
from .logging import RegionTrace
from .mem import Memory
from .reader import Cursor
from .stringtable import StringTable

logger = logging.getLogger(__name__)

HEADER_MAGIC = 0x54544E43  # "TTNC"
FOOTER_MAGIC = 0x0000029A


@dataclass(frozen=True)
class Format:
    engine: EngineSettings
    strings: StringTable
    mem: Memory
    eqtb: EquivalenciesTable
    cshash: ControlSeqHash

    @classmethod
    def parse(cls, data: bytes, *, trace: RegionTrace | None = None) -> "Format":
        """Decode ``data``; raises a FormatError subclass on the first bad field.

        Bytes after the footer are ignored.
        """

        cursor = Cursor(data)
        mark = cursor.offset

        def region(name: str, note: str = "") -> None:
            nonlocal mark
            if trace is not None:
                trace.record(name, mark, cursor.offset, note)
            mark = cursor.offset

        try:
            cursor.exact(HEADER_MAGIC, "header magic")
            serial_offset = cursor.offset
            serial = cursor.scalar("serial")
            engine = resolve_settings(serial, offset=serial_offset)
            hash_high = cursor.scalar("hash_high")
            cursor.exact(engine.mem_top, "mem_top")
            cursor.exact(engine.eqtb_size, "eqtb_size")
            cursor.exact(engine.hash_prime, "hash_prime")
            cursor.scalar("hyph_prime")
            logger.debug("header: serial=%d hash_high=%d", serial, hash_high)
            region("header", f"serial={serial} hash_high={hash_high}")

            strings = StringTable.parse(cursor)
            region("strings", f"{len(strings)} start(s)")
            mem = Memory.parse(cursor, engine)
            region("mem", f"lo_mem_max={mem.lo_mem_max} hi_mem_min={mem.hi_mem_min}")
            eqtb = EquivalenciesTable.parse(cursor, engine, hash_high)
            region("eqtb", f"{len(eqtb)} slot(s)")

            # Nominally bounded by hash_top, which equals eqtb_top while hash_extra is nonzero.
            cursor.ranged(engine.hash_base, engine.hash_top, "par_loc")
            cursor.ranged(engine.hash_base, engine.hash_top, "write_loc")
            cursor.array(engine.prim_size + 1, "prim", ">i8")
            region("primitives", f"{engine.prim_size + 1} word(s)")

            cshash = ControlSeqHash.parse(cursor, engine, hash_high)
            region("cshash", f"hash_used={cshash.hash_used} cs_count={cshash.cs_count}")

            fonts = decode_font_tables(cursor, engine, mem.lo_mem_max)
            region("fonts", f"{fonts.n_fonts} font(s) fmem_ptr={fonts.fmem_ptr}")
            exceptions = decode_hyph_exceptions(cursor, len(strings))
            region("hyphenation", f"{exceptions.count} exception(s)")
            trie = decode_trie(cursor)
            region(
                "trie",
                f"trie_max={trie.trie_max} ops={trie.trie_op_ptr} languages={len(trie.claimed_languages())}",
            )

            cursor.exact(FOOTER_MAGIC, "footer magic")
            region("footer", f"{cursor.remaining} trailing byte(s) ignored" if cursor.remaining else "")
        finally:
            # written even when decoding stops early
            if trace is not None:
                trace.flush()
        return cls(engine=engine, strings=strings, mem=mem, eqtb=eqtb, cshash=cshash)

    # The accessors below index eqtb with the engine's base offsets, which the
    # table itself does not know about.

    def eqtb_active(self, c: int) -> EqtbEntry:
        _check_usv(c)
        return self.eqtb.decode(self.engine.active_base + c)

    def eqtb_catcode(self, c: int) -> CatCode:
        _check_usv(c)
        return CatCode(self.eqtb.decode(self.engine.cat_code_base + c).value)

    def lookup_cs(self, name: str) -> EqtbEntry | None:
        p = self.cshash.lookup(name, self.strings)
        if p is None:
            return None
        return self.eqtb.decode(p)


def _check_usv(c: int) -> None:
    if not 0 <= c < MAX_USV:
        raise IndexError(f"code point {c:#x} outside [0, {MAX_USV:#x})")


def decode_format(data: bytes, *, trace: RegionTrace | None = None) -> Format:
    return Format.parse(data, trace=trace)
