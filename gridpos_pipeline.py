from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from gridpos_extract import build_grid_pos_regex, parse_matches, scan_grid_pos
from gridpos_layout import recalculate_offsets, splice
from gridpos_models import AdjustResult, GridPos, GridPosMatch

logger = logging.getLogger(__name__)


def adjust_text(text: str) -> AdjustResult:
    """Rewrite every gridPos in *text* so the panels stack without overlap.

    Text outside the matched objects is returned untouched. When nothing
    matches the result carries the input text and ``found`` is False.
    """
    raw_matches = list(scan_grid_pos(text, build_grid_pos_regex()))
    if not raw_matches:
        logger.debug("no gridPos candidates in %d characters", len(text))
        return AdjustResult(text=text, source=text)

    matches = parse_matches(raw_matches)
    adjusted = recalculate_offsets([m.grid_pos for m in matches])
    logger.debug("recalculated %d gridPos objects", len(adjusted))
    return AdjustResult(
        text=splice(text, matches, adjusted),
        source=text,
        matches=matches,
        adjusted=adjusted,
    )


def modified_path(path: Path) -> Path:
    """``dashboard.json`` -> ``dashboard_modified.json``, in the same directory."""
    return path.with_name(f"{path.stem}_modified{path.suffix}")


def read_template(path: Path) -> str:
    """Read *path* as UTF-8 with line endings left exactly as they are."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_template(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def adjust_file(
    path: Path,
    output: Path | None = None,
    write: bool = True,
) -> tuple[AdjustResult, Path | None]:
    """Adjust the template at *path* and write the result.

    Nothing is written when the file holds no gridPos objects or *write* is
    False; the returned path is then None.
    """
    text = read_template(path)
    logger.debug("read %d characters from %s", len(text), path)

    result = adjust_text(text)
    if not result.found or not write:
        return result, None

    out_path = output if output is not None else modified_path(path)
    write_template(out_path, result.text)
    logger.debug("wrote %d characters to %s", len(result.text), out_path)
    return result, out_path


def snippet(text: str, position: int, radius: int = 40) -> str:
    """Return a short text excerpt around *position* for display."""
    start = max(0, position - radius)
    end = min(len(text), position + radius)
    return f"...{text[start:end].replace(chr(13), '').replace(chr(10), ' ')}..."


def _print_entry(index: int, match: GridPosMatch, new_pos: GridPos, source: str, file: TextIO) -> None:
    print(f"  #{index}  y: {match.grid_pos.y} -> {new_pos.y}  (h={new_pos.h})", file=file)
    print(f"      Raw text:    {match.raw_text!r}  (offset {match.start})", file=file)
    print(f"      Context:     {snippet(source, match.start)}", file=file)


def print_report(
    result: AdjustResult,
    source: str,
    verbose: bool = False,
    file: TextIO | None = None,
) -> None:
    """Print a summary of the run; with *verbose*, one entry per object in document order."""
    if file is None:
        file = sys.stdout
    total = len(result.adjusted)
    moved = sum(1 for m, pos in zip(result.matches, result.adjusted) if m.grid_pos.y != pos.y)
    print(f"Adjusted {total} gridPos object{'s' if total != 1 else ''} ({moved} moved)", file=file)
    if verbose:
        for i, (match, pos) in enumerate(zip(result.matches, result.adjusted), 1):
            _print_entry(i, match, pos, source, file)
