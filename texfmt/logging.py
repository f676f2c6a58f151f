from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple


def configure_cli_logging(verbose: bool = False) -> logging.Logger:
    """Route ``texfmt`` log records to stderr for the command-line tools."""

    logger = logging.getLogger("texfmt")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(logger.handlers):
        if getattr(handler, "_texfmt_cli", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler._texfmt_cli = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


@dataclass
class RegionTrace:
    """Byte span of every region seen during one decode."""

    destination: Path | None = None
    regions: List[Tuple[str, int, int, str]] = field(default_factory=list)

    def record(self, name: str, start: int, end: int, note: str | None = None) -> None:
        self.regions.append((name, start, end, note or ""))

    def lines(self) -> List[str]:
        out: List[str] = []
        for name, start, end, note in self.regions:
            line = f"{name:<16} 0x{start:08X}-0x{end:08X} ({end - start} bytes)"
            if note:
                line += f" | {note}"
            out.append(line)
        return out

    def flush(self) -> None:
        if self.destination is None or not self.regions:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        self.destination.write_text("\n".join(self.lines()) + "\n", encoding="utf-8")
