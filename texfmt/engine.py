"""
Per-version structural constants.

The equivalences table is a concatenation of fixed-size regions (active
characters, single-character control sequences, the hash, glue, token lists,
boxes, code tables, integer and dimension parameters). Engine builds differ in
how many parameters each region holds, which moves every later base offset,
so the constants are derived from a handful of per-serial counts and frozen in
a lookup table when the module is imported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .base import NUMBER_MATH_FONTS, NUMBER_REGS, NUMBER_USVS
from .errors import UnknownVersion

LATEST_FORMAT_SERIAL = 33

MEM_BOT = 0
MEM_TOP = 4999999
HASH_SIZE = 15000
HASH_PRIME = 8501
HASH_EXTRA = 600000
MAX_FONTS = 9000
UNDEFINED_CS_COMMAND = 103

# Offset of the frozen null font inside the frozen control-sequence block.
FROZEN_NULL_FONT_OFFSET = 12


@dataclass(frozen=True)
class EngineSettings:
    format_serial: int
    mem_bot: int
    mem_top: int
    lo_mem_stat_max: int
    hi_mem_stat_min: int
    hash_prime: int
    hash_size: int
    hash_extra: int
    max_fonts: int
    prim_size: int
    active_base: int
    single_base: int
    null_cs: int
    hash_base: int
    frozen_control_sequence: int
    undefined_control_sequence: int
    cat_code_base: int
    int_base: int
    dimen_base: int
    eqtb_size: int
    eqtb_top: int
    hash_top: int
    undefined_cs_command: int


@dataclass(frozen=True)
class _RegionCounts:
    glue_pars: int
    local_pars: int
    int_pars: int
    dimen_pars: int
    prim_size: int


_REGION_COUNTS: Dict[int, _RegionCounts] = {
    29: _RegionCounts(glue_pars=19, local_pars=13, int_pars=83, dimen_pars=23, prim_size=500),
    30: _RegionCounts(glue_pars=19, local_pars=13, int_pars=84, dimen_pars=23, prim_size=500),
    31: _RegionCounts(glue_pars=19, local_pars=13, int_pars=85, dimen_pars=23, prim_size=500),
    32: _RegionCounts(glue_pars=19, local_pars=13, int_pars=85, dimen_pars=23, prim_size=510),
    33: _RegionCounts(glue_pars=19, local_pars=14, int_pars=86, dimen_pars=23, prim_size=510),
}


def _layout(serial: int, counts: _RegionCounts) -> EngineSettings:
    active_base = 1
    single_base = active_base + NUMBER_USVS
    null_cs = single_base + NUMBER_USVS
    hash_base = null_cs + 1
    frozen_control_sequence = hash_base + HASH_SIZE
    frozen_null_font = frozen_control_sequence + FROZEN_NULL_FONT_OFFSET
    undefined_control_sequence = frozen_null_font + MAX_FONTS + 1
    glue_base = undefined_control_sequence + 1
    skip_base = glue_base + counts.glue_pars
    mu_skip_base = skip_base + NUMBER_REGS
    local_base = mu_skip_base + NUMBER_REGS
    toks_base = local_base + counts.local_pars
    box_base = toks_base + NUMBER_REGS
    cur_font_loc = box_base + NUMBER_REGS
    math_font_base = cur_font_loc + 1
    cat_code_base = math_font_base + NUMBER_MATH_FONTS
    lc_code_base = cat_code_base + NUMBER_USVS
    uc_code_base = lc_code_base + NUMBER_USVS
    sf_code_base = uc_code_base + NUMBER_USVS
    math_code_base = sf_code_base + NUMBER_USVS
    int_base = math_code_base + NUMBER_USVS
    count_base = int_base + counts.int_pars
    del_code_base = count_base + NUMBER_REGS
    dimen_base = del_code_base + NUMBER_USVS
    scaled_base = dimen_base + counts.dimen_pars
    eqtb_size = scaled_base + NUMBER_REGS - 1
    eqtb_top = eqtb_size + HASH_EXTRA
    return EngineSettings(
        format_serial=serial,
        mem_bot=MEM_BOT,
        mem_top=MEM_TOP,
        lo_mem_stat_max=MEM_BOT + 19,
        hi_mem_stat_min=MEM_TOP - 14,
        hash_prime=HASH_PRIME,
        hash_size=HASH_SIZE,
        hash_extra=HASH_EXTRA,
        max_fonts=MAX_FONTS,
        prim_size=counts.prim_size,
        active_base=active_base,
        single_base=single_base,
        null_cs=null_cs,
        hash_base=hash_base,
        frozen_control_sequence=frozen_control_sequence,
        undefined_control_sequence=undefined_control_sequence,
        cat_code_base=cat_code_base,
        int_base=int_base,
        dimen_base=dimen_base,
        eqtb_size=eqtb_size,
        eqtb_top=eqtb_top,
        # hash_extra is nonzero, so the hash reaches the top of eqtb
        hash_top=eqtb_top if HASH_EXTRA else undefined_control_sequence,
        undefined_cs_command=UNDEFINED_CS_COMMAND,
    )


_SETTINGS_BY_SERIAL: Dict[int, EngineSettings] = {
    serial: _layout(serial, counts) for serial, counts in _REGION_COUNTS.items()
}

SUPPORTED_SERIALS = tuple(sorted(_SETTINGS_BY_SERIAL))


def resolve_settings(serial: int, *, offset: int = 4) -> EngineSettings:
    """Look up the structural constants for ``serial``."""

    settings = _SETTINGS_BY_SERIAL.get(serial)
    if settings is None:
        raise UnknownVersion(offset=offset, serial=serial)
    return settings
