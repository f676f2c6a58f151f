"""Engine-wide constants that do not depend on the format serial."""

from __future__ import annotations

MIN_HALFWORD = -0x0FFFFFFF
MAX_HALFWORD = 0x3FFFFFFF

# Unicode scalar values: 0x0 - 0x10FFFF, surrogates included in the count.
NUMBER_USVS = 0x110000
MAX_USV = NUMBER_USVS

# String numbers below this value denote single characters.
TOO_BIG_CHAR = 0x10000

SUP_POOL_SIZE = 40000000
SUP_MAX_STRINGS = 2097151

NUMBER_REGS = 256
NUMBER_MATH_FAMILIES = 256
NUMBER_MATH_FONTS = 3 * NUMBER_MATH_FAMILIES
