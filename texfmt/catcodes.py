from __future__ import annotations

from enum import IntEnum


class CatCode(IntEnum):
    """Lexical category assigned to each character."""

    ESCAPE = 0
    BEGIN_GROUP = 1
    END_GROUP = 2
    MATH_SHIFT = 3
    ALIGNMENT_TAB = 4
    END_OF_LINE = 5
    MACRO_PARAMETER = 6
    SUPERSCRIPT = 7
    SUBSCRIPT = 8
    IGNORED = 9
    SPACE = 10
    LETTER = 11
    OTHER = 12
    ACTIVE = 13
    COMMENT = 14
    INVALID = 15

    @property
    def abbrev(self) -> str:
        return _ABBREVS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_ABBREVS = {
    CatCode.ESCAPE: "esc",
    CatCode.BEGIN_GROUP: "bgr",
    CatCode.END_GROUP: "egr",
    CatCode.MATH_SHIFT: "mth",
    CatCode.ALIGNMENT_TAB: "tab",
    CatCode.END_OF_LINE: "eol",
    CatCode.MACRO_PARAMETER: "par",
    CatCode.SUPERSCRIPT: "sup",
    CatCode.SUBSCRIPT: "sub",
    CatCode.IGNORED: "ign",
    CatCode.SPACE: "spc",
    CatCode.LETTER: "let",
    CatCode.OTHER: "oth",
    CatCode.ACTIVE: "act",
    CatCode.COMMENT: "cmt",
    CatCode.INVALID: "inv",
}

_DESCRIPTIONS = {
    CatCode.ESCAPE: "Escape character",
    CatCode.BEGIN_GROUP: "Begin group",
    CatCode.END_GROUP: "End group",
    CatCode.MATH_SHIFT: "Math shift",
    CatCode.ALIGNMENT_TAB: "Alignment tab",
    CatCode.END_OF_LINE: "End of line",
    CatCode.MACRO_PARAMETER: "Macro parameter",
    CatCode.SUPERSCRIPT: "Superscript",
    CatCode.SUBSCRIPT: "Subscript",
    CatCode.IGNORED: "Ignored character",
    CatCode.SPACE: "Space",
    CatCode.LETTER: "Letter",
    CatCode.OTHER: "Other character",
    CatCode.ACTIVE: "Active character",
    CatCode.COMMENT: "Comment character",
    CatCode.INVALID: "Invalid character",
}
