from __future__ import annotations

import json
from collections.abc import Sequence

from gridpos_extract import coerce_number
from gridpos_models import GridPos, GridPosMatch, Number

# Emission order of the rewritten literal.
_FIELD_ORDER = ("x", "y", "h", "w")


def recalculate_offsets(positions: Sequence[GridPos]) -> list[GridPos]:
    """Stack panels vertically: each y becomes the sum of the h values before it."""
    cumulative_height: Number = 0
    adjusted: list[GridPos] = []
    for pos in positions:
        h = coerce_number(pos.h)
        adjusted.append(
            GridPos(
                x=coerce_number(pos.x),
                y=cumulative_height,
                w=coerce_number(pos.w),
                h=h,
            )
        )
        cumulative_height += h or 0
    return adjusted


def _format_number(value: Number) -> Number:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def render_grid_pos(pos: GridPos) -> str:
    """Compact single-line literal, e.g. ``{"x":0,"y":0,"h":8,"w":24}``.

    Fields that are not numbers are left out.
    """
    fields = {
        name: _format_number(getattr(pos, name))
        for name in _FIELD_ORDER
        if getattr(pos, name) is not None
    }
    return json.dumps(fields, separators=(",", ":"))


def splice(text: str, matches: Sequence[GridPosMatch], adjusted: Sequence[GridPos]) -> str:
    """Rebuild *text* with each matched span replaced by its adjusted literal."""
    if len(matches) != len(adjusted):
        raise ValueError(f"got {len(adjusted)} adjusted objects for {len(matches)} matches")

    parts: list[str] = []
    last_index = 0
    for match, pos in zip(matches, adjusted):
        parts.append(text[last_index:match.start])
        parts.append(render_grid_pos(pos))
        last_index = match.end
    parts.append(text[last_index:])
    return "".join(parts)
