#!/usr/bin/env python3
"""
Print human-readable views of a XeTeX/Tectonic format file (.fmt).

    python fmt_dump.py latex.fmt strings      # every pooled string
    python fmt_dump.py latex.fmt actives      # defined active characters
    python fmt_dump.py latex.fmt catcodes     # category code ranges
    python fmt_dump.py latex.fmt lookup relax # eqtb entry of \\relax

Exit codes: 0 on success, 1 if the file is rejected or a name is undefined.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from texfmt import Format, FormatError, configure_cli_logging, dump_actives, dump_catcodes, dump_string_table


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump decoded state from a format file.")
    parser.add_argument("input", type=Path, help="Path to the .fmt file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log region boundaries to stderr")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("strings", help="List the string pool")
    sub.add_parser("actives", help="List active characters with a defined meaning")
    sub.add_parser("catcodes", help="List code point ranges per category code")
    lookup = sub.add_parser("lookup", help="Show the eqtb entry of a control sequence")
    lookup.add_argument("name", help="Control sequence name without the leading backslash")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_cli_logging(args.verbose)
    try:
        fmt = Format.parse(args.input.read_bytes())
    except FormatError as exc:
        print(f"[error] {args.input}: {exc}", file=sys.stderr)
        return 1

    if args.command == "strings":
        dump_string_table(fmt, sys.stdout)
    elif args.command == "actives":
        dump_actives(fmt, sys.stdout)
    elif args.command == "catcodes":
        dump_catcodes(fmt, sys.stdout)
    else:
        entry = fmt.lookup_cs(args.name)
        if entry is None:
            print(f"[error] \\{args.name} is not defined", file=sys.stderr)
            return 1
        print(f"\\{args.name} => ty={entry.ty} level={entry.level} value={entry.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
