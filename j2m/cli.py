#!/usr/bin/env python
"""
Convert a Jira wiki markup document to Markdown.

Usage:
    j2m [INPUT] [options]

Options:
    -o, --output FILE    Write to FILE instead of stdout
    --html               Emit the rendered HTML preview instead of Markdown
    -v, --verbose        Debug logging on stderr

INPUT defaults to stdin; "-" also means stdin.

Example:
    j2m ticket.jira -o ticket.md
    pbpaste | j2m --html > preview.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from j2m.core.config import get_settings
from j2m.services.converter import ConversionError, convert

log = logging.getLogger(__name__)


# ── Argument parsing ──────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="j2m",
        description="Convert Jira wiki markup to Markdown.",
    )
    parser.add_argument("input", nargs="?", default="-",
                        help="Jira markup file (default: stdin)")
    parser.add_argument("-o", "--output", metavar="FILE",
                        help="output file (default: stdout)")
    parser.add_argument("--html", action="store_true",
                        help="emit the HTML preview instead of Markdown")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


# ── I/O ───────────────────────────────────────────────────────────────────────

def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(target: Optional[str], text: str) -> None:
    if target is None or target == "-":
        sys.stdout.write(text)
        return
    Path(target).write_text(text, encoding="utf-8")


# ── Entry point ───────────────────────────────────────────────────────────────

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        source = _read_input(args.input)
    except OSError as exc:
        print(f"j2m: cannot read {args.input}: {exc}", file=sys.stderr)
        return 2

    try:
        result = convert(source)
    except ConversionError as exc:
        log.debug("Conversion failed", exc_info=exc)
        print(f"j2m: {exc}", file=sys.stderr)
        return 1

    if args.html:
        from j2m.services.preview import render_preview
        result = render_preview(result)

    try:
        _write_output(args.output, result)
    except OSError as exc:
        print(f"j2m: cannot write {args.output}: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
