"""Exception hierarchy for format decoding failures."""

from __future__ import annotations


class FormatError(Exception):
    """Base class for every way a format dump can be rejected."""

    def __init__(self, message: str, *, offset: int, field: str) -> None:
        super().__init__(f"{field} @ 0x{offset:X}: {message}")
        self.offset = offset
        self.field = field


class StructuralMismatch(FormatError):
    """An exact-match field does not hold the value the engine expects."""

    def __init__(self, *, offset: int, field: str, expected: int, observed: int) -> None:
        super().__init__(
            f"expected 0x{expected & 0xFFFFFFFF:08X}, found 0x{observed & 0xFFFFFFFF:08X}",
            offset=offset,
            field=field,
        )
        self.expected = expected
        self.observed = observed


class RangeViolation(FormatError):
    """A field lies outside its inclusive bound."""

    def __init__(self, *, offset: int, field: str, lo: int, hi: int, observed: int) -> None:
        super().__init__(f"value {observed} outside [{lo}, {hi}]", offset=offset, field=field)
        self.lo = lo
        self.hi = hi
        self.observed = observed


class UnknownVersion(FormatError):
    """No structural constants are known for the format serial number."""

    def __init__(self, *, offset: int, serial: int, field: str = "serial") -> None:
        super().__init__(f"unsupported format serial {serial}", offset=offset, field=field)
        self.serial = serial


class Truncated(FormatError):
    """The input ended before a field or array was complete."""

    def __init__(self, *, offset: int, field: str, needed: int, available: int) -> None:
        super().__init__(
            f"needs {needed} byte(s) but only {available} remain ({needed - available} missing)",
            offset=offset,
            field=field,
        )
        self.needed = needed
        self.available = available


__all__ = ["FormatError", "StructuralMismatch", "RangeViolation", "UnknownVersion", "Truncated"]
