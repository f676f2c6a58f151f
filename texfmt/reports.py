"""Plain-text reports over a decoded format."""

from __future__ import annotations

import unicodedata
from typing import List, TextIO, Tuple

import numpy as np

from .base import MAX_USV
from .catcodes import CatCode
from .format import Format

_SIMPLE_ESCAPES = {"\t": "\\t", "\r": "\\r", "\n": "\\n", "\\": "\\\\"}


def _escape_default(ch: str) -> str:
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch]
    if 0x20 <= ord(ch) <= 0x7E:
        return ch
    return f"\\u{{{ord(ch):x}}}"


def fmt_usv(c: int) -> str:
    """Render a code point for humans, flagging surrogates as invalid."""

    if not 0 <= c <= 0x10FFFF or 0xD800 <= c <= 0xDFFF:
        return f"*invalid* (0x{c:06x})"
    ch = chr(c)
    if ch == " ":
        return f"' ' (0x{c:06x})"
    if ch == "'":
        return f"\\' (0x{c:06x})"
    if ch == '"':
        return f'\\" (0x{c:06x})'
    if unicodedata.category(ch) == "Cc" or ch.isspace():
        return f"{_escape_default(ch)} (0x{c:06x})"
    return f"{ch} (0x{c:06x})"


def dump_string_table(fmt: Format, stream: TextIO) -> None:
    for sp in fmt.strings.all_sps():
        stream.write(f'{sp} = "{fmt.strings.lookup(sp)}"\n')


def dump_actives(fmt: Format, stream: TextIO) -> None:
    """List every active character whose meaning is defined."""

    base = fmt.engine.active_base
    words = fmt.eqtb.words[base : base + MAX_USV]
    types = (words >> 16) & 0xFFFF
    for c in np.flatnonzero(types != fmt.engine.undefined_cs_command):
        chr_ = int(c)
        entry = fmt.eqtb_active(chr_)
        cat = fmt.eqtb_catcode(chr_)
        stream.write(
            f"{fmt_usv(chr_)} ({cat.abbrev}) => ty={entry.ty} level={entry.level} value={entry.value}\n"
        )


def catcode_runs(fmt: Format) -> List[List[Tuple[int, int]]]:
    """Group all code points into contiguous (start, end) runs per category."""

    base = fmt.engine.cat_code_base
    values = fmt.eqtb.words[base : base + MAX_USV] >> 32
    blocks: List[List[Tuple[int, int]]] = [[] for _ in CatCode]
    edges = np.flatnonzero(np.diff(values)) + 1
    starts = np.concatenate(([0], edges))
    ends = np.concatenate((edges - 1, [MAX_USV - 1]))
    for start, end in zip(starts, ends):
        cat = fmt.eqtb_catcode(int(start))
        blocks[cat].append((int(start), int(end)))
    return blocks


def dump_catcodes(fmt: Format, stream: TextIO) -> None:
    for cat, block in zip(CatCode, catcode_runs(fmt)):
        if cat > 0:
            stream.write("\n")
        stream.write(f"{cat.description}:\n")
        for start, end in block:
            if start == end:
                stream.write(f"    {fmt_usv(start)}\n")
            else:
                stream.write(f"    {fmt_usv(start)} - {fmt_usv(end)}\n")
