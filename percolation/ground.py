"""Sparse ground map: clay layout plus the water written by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .cells import WATER_RANK, CellState, Coordinate
from .config import DEFAULT_SOURCE_COLUMN, DEFAULT_SOURCE_ROW

DEFAULT_SOURCE = Coordinate(DEFAULT_SOURCE_ROW, DEFAULT_SOURCE_COLUMN)

_WRITE_ONCE = (CellState.CLAY, CellState.SOURCE)
_NEVER_STORED = (CellState.SAND, CellState.OUT_OF_BOUNDS)


class InvariantViolation(RuntimeError):
    """Raised when the simulation reaches a state its rules forbid.

    This signals a defect in the algorithm or terrain that breaks its
    assumptions. Callers are not expected to recover from it.
    """

    def __init__(
        self,
        message: str,
        *,
        coordinate: Coordinate | None = None,
        state: CellState | None = None,
    ) -> None:
        details = []
        if coordinate is not None:
            details.append(f"at {coordinate}")
        if state is not None:
            details.append(f"state={state}")
        super().__init__(f"{message} ({', '.join(details)})" if details else message)
        self.coordinate = coordinate
        self.state = state


@dataclass(frozen=True)
class Bounds:
    """Inclusive bounding rectangle of the clay cells."""

    min: Coordinate
    max: Coordinate

    @property
    def width(self) -> int:
        return self.max.column - self.min.column + 1

    @property
    def height(self) -> int:
        return self.max.row - self.min.row + 1

    @classmethod
    def enclosing(cls, cells: Iterable[Coordinate]) -> Bounds:
        rows: list[int] = []
        columns: list[int] = []
        for cell in cells:
            rows.append(cell.row)
            columns.append(cell.column)
        if not rows:
            raise ValueError("ground map requires at least one clay cell")
        return cls(Coordinate(min(rows), min(columns)), Coordinate(max(rows), max(columns)))


class GroundMap:
    """Mapping from coordinate to cell state; absent keys are sand.

    Rows below the deepest clay classify as out of bounds. The top is
    unbounded, so water above the shallowest clay is still tracked.
    """

    def __init__(self, cells: dict[Coordinate, CellState], bounds: Bounds, source: Coordinate) -> None:
        self._cells = cells
        self.bounds = bounds
        self.source = source

    @classmethod
    def from_clay(cls, clay: Iterable[Coordinate], source: Coordinate = DEFAULT_SOURCE) -> GroundMap:
        cells = {coordinate: CellState.CLAY for coordinate in clay}
        bounds = Bounds.enclosing(cells)
        if source in cells:
            raise ValueError(f"source {source} lies inside clay")
        cells[source] = CellState.SOURCE
        return cls(cells, bounds, source)

    def classify(self, coordinate: Coordinate) -> CellState:
        if coordinate.row > self.bounds.max.row:
            return CellState.OUT_OF_BOUNDS
        return self._cells.get(coordinate, CellState.SAND)

    def peek(self, coordinate: Coordinate) -> tuple[CellState, CellState]:
        """State of ``coordinate`` together with the state of the cell beneath it."""

        return self.classify(coordinate), self.classify(coordinate.down())

    def set(self, coordinate: Coordinate, state: CellState) -> None:
        if state in _NEVER_STORED:
            raise InvariantViolation(f"cannot store {state.name}", coordinate=coordinate, state=state)

        current = self._cells.get(coordinate)
        if current in _WRITE_ONCE:
            raise InvariantViolation(f"overwriting {current.name}", coordinate=coordinate, state=state)
        if current is not None:
            if state not in WATER_RANK:
                raise InvariantViolation(f"cannot place {state.name} over water", coordinate=coordinate, state=state)
            if WATER_RANK[state] < WATER_RANK[current]:
                raise InvariantViolation(
                    f"water cannot revert from {current.name}", coordinate=coordinate, state=state
                )
        self._cells[coordinate] = state

    def items(self) -> Iterator[tuple[Coordinate, CellState]]:
        return iter(self._cells.items())

    def count(self, state: CellState, *, min_row: int | None = None) -> int:
        return sum(
            1
            for coordinate, value in self._cells.items()
            if value is state and (min_row is None or coordinate.row >= min_row)
        )

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._cells

    def __len__(self) -> int:
        return len(self._cells)
