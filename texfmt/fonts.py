"""
Font block.

The block opens with the shared font-program word array (``font_info``) and
the index of the last loaded font. Every per-font attribute then follows as
its own array of ``font_ptr + 1`` entries; font 0 is the null font and is
stored like any other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .base import MAX_HALFWORD, MIN_HALFWORD, TOO_BIG_CHAR
from .engine import EngineSettings
from .reader import Cursor

logger = logging.getLogger(__name__)

FMEM_PTR_MIN = 7
FMEM_PTR_MAX = 2**31 - 1

# Table-base offsets, in dump order. Stored unchecked.
BASE_FIELDS = (
    "char_base",
    "width_base",
    "height_base",
    "depth_base",
    "italic_base",
    "lig_kern_base",
    "kern_base",
    "exten_base",
    "param_base",
)


@dataclass(frozen=True)
class FontTables:
    fmem_ptr: int
    font_info: np.ndarray
    font_ptr: int
    font_check: np.ndarray
    font_size: np.ndarray
    font_dsize: np.ndarray
    font_params: np.ndarray
    hyphen_char: np.ndarray
    skew_char: np.ndarray
    font_name: np.ndarray
    font_area: np.ndarray
    font_bc: np.ndarray
    font_ec: np.ndarray
    char_base: np.ndarray
    width_base: np.ndarray
    height_base: np.ndarray
    depth_base: np.ndarray
    italic_base: np.ndarray
    lig_kern_base: np.ndarray
    kern_base: np.ndarray
    exten_base: np.ndarray
    param_base: np.ndarray
    font_glue: np.ndarray
    bchar_label: np.ndarray
    font_bchar: np.ndarray
    font_false_bchar: np.ndarray

    @property
    def n_fonts(self) -> int:
        return self.font_ptr + 1


def decode_font_tables(cursor: Cursor, settings: EngineSettings, lo_mem_max: int) -> FontTables:
    fmem_ptr = cursor.ranged(FMEM_PTR_MIN, FMEM_PTR_MAX, "fmem_ptr")
    font_info = cursor.array(fmem_ptr, "font_info", ">i8")
    font_ptr = cursor.ranged(0, settings.max_fonts, "font_ptr")
    n = font_ptr + 1

    fields = {
        "font_check": cursor.array(n, "font_check", ">i8"),
        "font_size": cursor.array(n, "font_size"),
        "font_dsize": cursor.array(n, "font_dsize"),
        "font_params": cursor.ranged_array(n, MIN_HALFWORD, MAX_HALFWORD, "font_params"),
        "hyphen_char": cursor.array(n, "hyphen_char"),
        "skew_char": cursor.array(n, "skew_char"),
        "font_name": cursor.array(n, "font_name"),
        "font_area": cursor.array(n, "font_area"),
        "font_bc": cursor.array(n, "font_bc", ">i2"),
        "font_ec": cursor.array(n, "font_ec", ">i2"),
    }
    for name in BASE_FIELDS:
        fields[name] = cursor.array(n, name)
    fields["font_glue"] = cursor.ranged_array(n, MIN_HALFWORD, lo_mem_max, "font_glue")
    fields["bchar_label"] = cursor.ranged_array(n, 0, fmem_ptr - 1, "bchar_label")
    fields["font_bchar"] = cursor.ranged_array(n, 0, TOO_BIG_CHAR, "font_bchar")
    fields["font_false_bchar"] = cursor.ranged_array(n, 0, TOO_BIG_CHAR, "font_false_bchar")

    logger.debug("fonts: %d font(s), %d font_info word(s)", n, fmem_ptr)
    return FontTables(fmem_ptr=fmem_ptr, font_info=font_info, font_ptr=font_ptr, **fields)


def decode(
    data: bytes, settings: EngineSettings, lo_mem_max: int, *, offset: int = 0
) -> Tuple[FontTables, int]:
    cursor = Cursor(data, offset)
    tables = decode_font_tables(cursor, settings, lo_mem_max)
    return tables, cursor.offset - offset
