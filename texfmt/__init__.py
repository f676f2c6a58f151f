"""
Decoder for XeTeX/Tectonic format dumps, split into modules per region.
"""

from .base import MAX_HALFWORD, MAX_USV, MIN_HALFWORD, TOO_BIG_CHAR
from .catcodes import CatCode
from .cshash import ControlSeqHash
from .engine import LATEST_FORMAT_SERIAL, SUPPORTED_SERIALS, EngineSettings, resolve_settings
from .eqtb import EqtbEntry, EquivalenciesTable
from .errors import FormatError, RangeViolation, StructuralMismatch, Truncated, UnknownVersion
from .fonts import FontTables, decode_font_tables
from .format import FOOTER_MAGIC, HEADER_MAGIC, Format, decode_format
from .hyphenation import (
    BIGGEST_LANG,
    HYPH_SIZE,
    TRIE_OP_SIZE,
    HyphenationExceptions,
    TrieTables,
    decode_hyph_exceptions,
    decode_trie,
    unpack_hyph_slot,
)
from .logging import RegionTrace, configure_cli_logging
from .mem import Memory
from .reader import Cursor
from .reports import dump_actives, dump_catcodes, dump_string_table, fmt_usv
from .stringtable import StringTable

__all__ = [
    "MIN_HALFWORD",
    "MAX_HALFWORD",
    "MAX_USV",
    "TOO_BIG_CHAR",
    "CatCode",
    "ControlSeqHash",
    "LATEST_FORMAT_SERIAL",
    "SUPPORTED_SERIALS",
    "EngineSettings",
    "resolve_settings",
    "EqtbEntry",
    "EquivalenciesTable",
    "FormatError",
    "RangeViolation",
    "StructuralMismatch",
    "Truncated",
    "UnknownVersion",
    "FontTables",
    "decode_font_tables",
    "HEADER_MAGIC",
    "FOOTER_MAGIC",
    "Format",
    "decode_format",
    "BIGGEST_LANG",
    "HYPH_SIZE",
    "TRIE_OP_SIZE",
    "HyphenationExceptions",
    "TrieTables",
    "decode_hyph_exceptions",
    "decode_trie",
    "unpack_hyph_slot",
    "RegionTrace",
    "configure_cli_logging",
    "Memory",
    "Cursor",
    "dump_actives",
    "dump_catcodes",
    "dump_string_table",
    "fmt_usv",
    "StringTable",
]
