#!/usr/bin/env python3
"""
Map the regions of a format file.

Decodes the whole file and prints the byte span of every region (header,
string pool, memory, eqtb, primitives, hash, fonts, hyphenation, trie,
footer) together with a short summary of what each one held. Useful for
narrowing down where a rejected file goes wrong: the error names the field
and offset, and the map shows which regions decoded cleanly before it.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from texfmt import Format, FormatError, RegionTrace, configure_cli_logging


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the region map of a format file.")
    parser.add_argument("input", type=Path, help="Path to the .fmt file")
    parser.add_argument("--log", type=Path, help="Optional destination for the region map")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decoder progress to stderr")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_cli_logging(args.verbose)
    blob = args.input.read_bytes()
    trace = RegionTrace(destination=args.log)
    try:
        fmt = Format.parse(blob, trace=trace)
    except FormatError as exc:
        for line in trace.lines():
            print(line)
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    print(f"[+] {args.input}: {len(blob)} bytes, format serial {fmt.engine.format_serial}")
    for line in trace.lines():
        print(line)
    if args.log:
        print(f"[+] Region map written to {args.log}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
