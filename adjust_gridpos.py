"""Restack the gridPos objects of a Grafana dashboard template.

Works on any text holding dashboard panels (plain JSON, Ansible/Jinja
templates, ...). The file is never parsed as a whole:

  1. scan_grid_pos        – find every {"x":..,"y":..,"w":..,"h":..} literal
                            (any key order, quoted or bare keys, newlines allowed)
  2. parse_grid_pos       – decode each one, retrying with ' swapped for "
  3. recalculate_offsets  – y of each panel = sum of the h values before it
  4. splice               – write the new literals back into the exact spans,
                            leaving the rest of the file as it was

The result goes to <name>_modified<ext> next to the input unless -o or
--stdout says otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from gridpos_models import ParseError
from gridpos_pipeline import adjust_file, print_report

logger = logging.getLogger("adjust_gridpos")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recalculate gridPos y values so dashboard panels stack without overlapping.",
    )
    parser.add_argument("path", help="Path to the dashboard template")
    destination = parser.add_mutually_exclusive_group()
    destination.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Where to write the result (default: <name>_modified<ext> next to the input)",
    )
    destination.add_argument(
        "--stdout",
        action="store_true",
        help="Print the rewritten template instead of writing a file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="List every adjusted object with its context",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    path = Path(args.path).resolve()
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1

    output = Path(args.output).resolve() if args.output else None
    try:
        result, out_path = adjust_file(path, output, write=not args.stdout)
    except (ParseError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not result.found:
        logger.warning("No gridPos objects found in %s", path)
        return 0

    if args.stdout:
        sys.stdout.write(result.text)
        print_report(result, result.source, verbose=args.verbose, file=sys.stderr)
        return 0

    print_report(result, result.source, verbose=args.verbose)
    print(f"Modified file written to: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
