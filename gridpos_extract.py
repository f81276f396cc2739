from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable, Iterator
from typing import Any

from gridpos_models import GridPos, GridPosMatch, Number, ParseError, RawMatch

_NUMBER = r"-?\d+(?:\.\d+)?"
_QUOTE = r"[\"']?"
# Values stop at a comma, a brace or the end of the line.
_ANY_PROP = r"(?:" + _QUOTE + r"[a-zA-Z0-9_-]+" + _QUOTE + r"\s*:\s*[^,{}\n]+)"
_X_LOOKAHEAD = r"(?=[^}]*" + _QUOTE + "x" + _QUOTE + r"\s*:\s*" + _NUMBER + ")"
_FOUR_PROPS = r"(?:" + _ANY_PROP + r"\s*,\s*){3}" + _ANY_PROP

_NUMERIC_STRING_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def build_grid_pos_regex() -> re.Pattern[str]:
    """Compile the gridPos pattern.

    Matches a brace-delimited object with exactly four ``key: value`` pairs, one
    of which is ``x`` with a numeric value, in any position. Keys may be bare,
    single- or double-quoted, and whitespace (newlines included) is allowed
    around pairs and braces.

    The scan is lexical and non-recursive: an object holding a brace-valued
    property never matches as a whole (a gridPos nested inside it still does),
    and the other three keys are not checked.
    """
    return re.compile(r"\{\s*" + _X_LOOKAHEAD + _FOUR_PROPS + r"\s*\}")


def scan_grid_pos(text: str, pattern: re.Pattern[str] | None = None) -> Iterator[RawMatch]:
    """Yield candidate gridPos literals in *text*, left to right."""
    if pattern is None:
        pattern = build_grid_pos_regex()
    for m in pattern.finditer(text):
        yield RawMatch(raw_text=m.group(), start=m.start(), end=m.end())


def coerce_number(value: Any) -> Number | None:
    """Convert *value* to a number the way a JavaScript ``Number()`` would.

    Returns ``None`` where the result would be ``NaN``.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0
        if not _NUMERIC_STRING_RE.fullmatch(stripped):
            return None
        if any(ch in stripped for ch in ".eE"):
            return float(stripped)
        return int(stripped)
    return None


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON.
    raise ValueError(f"invalid literal {name}")


def parse_grid_pos(raw_text: str, start: int = 0, end: int | None = None) -> GridPos:
    """Decode one matched snippet into a GridPos.

    Tries strict JSON first, then again with single quotes swapped for double
    quotes. Raises ParseError when neither attempt yields an object.
    """
    if end is None:
        end = start + len(raw_text)
    try:
        data = json.loads(raw_text, parse_constant=_reject_constant)
    except ValueError:
        try:
            data = json.loads(raw_text.replace("'", '"'), parse_constant=_reject_constant)
        except ValueError as exc:
            raise ParseError(raw_text, start, end, getattr(exc, "msg", str(exc))) from exc

    if not isinstance(data, dict):
        raise ParseError(raw_text, start, end, f"expected an object, got {type(data).__name__}")

    return GridPos(
        x=coerce_number(data.get("x")),
        y=coerce_number(data.get("y")),
        w=coerce_number(data.get("w")),
        h=coerce_number(data.get("h")),
    )


def parse_matches(raw_matches: Iterable[RawMatch]) -> list[GridPosMatch]:
    """Decode every scanned snippet; the first failure aborts the whole batch."""
    return [
        GridPosMatch(
            grid_pos=parse_grid_pos(rm.raw_text, rm.start, rm.end),
            raw_text=rm.raw_text,
            start=rm.start,
            end=rm.end,
        )
        for rm in raw_matches
    ]
