"""Coordinates and per-cell states of the ground cross-section."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """A (row, column) position; rows grow downward."""

    row: int
    column: int

    def up(self) -> Coordinate:
        return Coordinate(self.row - 1, self.column)

    def down(self) -> Coordinate:
        return Coordinate(self.row + 1, self.column)

    def left(self) -> Coordinate:
        return Coordinate(self.row, self.column - 1)

    def right(self) -> Coordinate:
        return Coordinate(self.row, self.column + 1)


class CellState(Enum):
    """Cell contents, valued by the glyph used in diagnostic renders."""

    SAND = "."
    CLAY = "#"
    FLOW = "|"
    STILL = "~"
    SOURCE = "+"
    OUT_OF_BOUNDS = "x"

    @property
    def glyph(self) -> str:
        return self.value

    @property
    def is_water(self) -> bool:
        return self in (CellState.FLOW, CellState.STILL)


# Position of each state along the only legal progression of a water cell.
WATER_RANK = {
    CellState.SAND: 0,
    CellState.FLOW: 1,
    CellState.STILL: 2,
}
