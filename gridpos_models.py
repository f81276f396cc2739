from __future__ import annotations

from dataclasses import dataclass, field

Number = int | float


class ParseError(ValueError):
    """A matched gridPos snippet could not be decoded, even after quote normalisation."""

    def __init__(self, raw_text: str, start: int, end: int, reason: str) -> None:
        self.raw_text = raw_text
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"could not parse gridPos at [{start}, {end}): {raw_text!r} ({reason})")


@dataclass(frozen=True)
class GridPos:
    """A panel rectangle: horizontal/vertical position, width and height."""

    x: Number | None
    y: Number | None
    w: Number | None
    h: Number | None


@dataclass(frozen=True)
class RawMatch:
    """A candidate gridPos literal found by the scanner, not yet decoded."""

    raw_text: str
    start: int
    end: int


@dataclass(frozen=True)
class GridPosMatch:
    """A decoded gridPos together with the source span it came from."""

    grid_pos: GridPos
    raw_text: str
    start: int
    end: int


@dataclass
class AdjustResult:
    """Outcome of one pass over a document."""

    text: str
    source: str = ""
    matches: list[GridPosMatch] = field(default_factory=list)
    adjusted: list[GridPos] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.matches)
