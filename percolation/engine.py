"""Flood-fill driver that percolates water through a ground map."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging

from .cells import CellState, Coordinate
from .ground import GroundMap, InvariantViolation

logger = logging.getLogger(__name__)

SAND = CellState.SAND
CLAY = CellState.CLAY
FLOW = CellState.FLOW
STILL = CellState.STILL
OUT_OF_BOUNDS = CellState.OUT_OF_BOUNDS

WORK_ORDERS = ("stack", "queue")

# (here, below) pairs from peek(), grouped by what a falling trace does next.
_FALLING = frozenset({(FLOW, SAND), (SAND, SAND)})
_SETTLED = frozenset({(FLOW, FLOW), (STILL, STILL)})
_BASIN = frozenset({(SAND, STILL), (FLOW, STILL), (SAND, CLAY)})
# A sideways scan stops at the first cell without solid support.
_OPENINGS = frozenset({(FLOW, FLOW), (SAND, SAND)})


@dataclass(frozen=True)
class EngineStats:
    """Counters collected while draining the pour-point backlog."""

    traces: int
    basins: int
    pour_points: int
    max_backlog: int

    def to_dict(self) -> dict[str, int]:
        return {
            "traces": self.traces,
            "basins": self.basins,
            "pour_points": self.pour_points,
            "max_backlog": self.max_backlog,
        }


class PercolationEngine:
    """Drops water from pour points until every reachable cell has settled.

    Pending pour points live in a deque drained LIFO (``"stack"``), the order the
    reported counts are defined by. FIFO (``"queue"``) is a diagnostic mode: a row
    can be scanned before the water beneath it has spread, and later traces
    stop on that flow without rescanning, so its map may hold fewer cells.
    """

    def __init__(self, ground: GroundMap, *, order: str = "stack") -> None:
        if order not in WORK_ORDERS:
            raise ValueError(f"order must be one of {WORK_ORDERS}, got {order!r}")
        self.ground = ground
        self.order = order
        self._backlog: deque[Coordinate] = deque()
        self._traces = 0
        self._basins = 0
        self._pour_points = 0
        self._max_backlog = 0

    @property
    def backlog(self) -> list[Coordinate]:
        return list(self._backlog)

    def pour(self, point: Coordinate) -> None:
        self._backlog.append(point)
        self._pour_points += 1
        self._max_backlog = max(self._max_backlog, len(self._backlog))

    def run(self, start: Coordinate | None = None) -> EngineStats:
        if start is None:
            start = self.ground.source.down()
        self.pour(start)

        while self._backlog:
            point = self._backlog.pop() if self.order == "stack" else self._backlog.popleft()
            self.trace(point)

        stats = self.stats()
        logger.info(
            "Percolation finished: %d traces, %d basins, %d pour points (max backlog %d)",
            stats.traces,
            stats.basins,
            stats.pour_points,
            stats.max_backlog,
        )
        return stats

    def stats(self) -> EngineStats:
        return EngineStats(self._traces, self._basins, self._pour_points, self._max_backlog)

    def trace(self, start: Coordinate) -> list[Coordinate]:
        """Follow one falling column from ``start``; return the pour points it registered."""

        self._traces += 1
        pos = start
        while True:
            sight = self.ground.peek(pos)
            here, below = sight
            if sight == (SAND, OUT_OF_BOUNDS):
                self.ground.set(pos, FLOW)
                return []
            if sight in _FALLING:
                self.ground.set(pos, FLOW)
                pos = pos.down()
                continue
            if sight == (SAND, FLOW):
                self.ground.set(pos, FLOW)
                return []
            if sight in _SETTLED:
                return []
            if sight in _BASIN:
                return self.resolve_basin(pos)
            raise InvariantViolation(
                f"unexpected cells under falling water: {here.name} over {below.name}",
                coordinate=pos,
                state=here,
            )

    def scan(self, pos: Coordinate, step: int) -> tuple[bool, int]:
        """Walk sideways from ``pos`` by ``step`` columns at a time.

        Returns ``(walled, edge_column)``: the column of the clay wall when one
        is found, otherwise the column of the first cell with nothing solid
        beneath it.
        """

        cur = pos
        while True:
            nxt = Coordinate(cur.row, cur.column + step)
            here, below = self.ground.peek(nxt)
            if here is CLAY:
                return True, nxt.column
            if here is OUT_OF_BOUNDS:
                raise InvariantViolation("sideways scan left the ground", coordinate=nxt, state=here)
            if (here, below) in _OPENINGS:
                return False, nxt.column
            cur = nxt

    def resolve_basin(self, pos: Coordinate) -> list[Coordinate]:
        """Fill the row at ``pos`` as still or flowing water and register follow-up pour points."""

        self._basins += 1
        row = pos.row
        left_walled, leftmost = self.scan(pos, -1)
        right_walled, rightmost = self.scan(pos, 1)
        logger.debug(
            "Basin at %s spans %d..%d (left %s, right %s)",
            pos,
            leftmost,
            rightmost,
            "wall" if left_walled else "open",
            "wall" if right_walled else "open",
        )

        pour_points: list[Coordinate] = []
        if left_walled and right_walled:
            self._fill(row, leftmost + 1, rightmost - 1, STILL)
            if pos.row > 0:
                pour_points.append(pos.up())
        else:
            first = leftmost + 1 if left_walled else leftmost
            last = rightmost - 1 if right_walled else rightmost
            self._fill(row, first, last, FLOW)
            if not right_walled:
                pour_points.append(Coordinate(row, rightmost))
            if not left_walled:
                pour_points.append(Coordinate(row, leftmost))

        for point in pour_points:
            self.pour(point)
        return pour_points

    def _fill(self, row: int, first: int, last: int, state: CellState) -> None:
        for column in range(first, last + 1):
            self.ground.set(Coordinate(row, column), state)


def simulate(ground: GroundMap, *, order: str = "stack") -> EngineStats:
    """Run the engine to completion on ``ground`` from below its source."""

    return PercolationEngine(ground, order=order).run()
