"""Water totals over a settled ground map."""

from __future__ import annotations

from dataclasses import dataclass

from .cells import CellState
from .ground import GroundMap


@dataclass(frozen=True)
class WaterMetrics:
    """Water counted from the shallowest clay row downward."""

    reached: int
    settled: int

    @property
    def total(self) -> int:
        """Cells water ever passed through or rests in."""

        return self.reached + self.settled

    def to_dict(self) -> dict[str, int]:
        return {"reached": self.reached, "settled": self.settled, "total": self.total}


def count_water(ground: GroundMap) -> WaterMetrics:
    """Count flowing and still cells, ignoring anything above the first clay row."""

    top = ground.bounds.min.row
    reached = 0
    settled = 0
    for coordinate, state in ground.items():
        if coordinate.row < top or not state.is_water:
            continue
        if state is CellState.STILL:
            settled += 1
        else:
            reached += 1
    return WaterMetrics(reached=reached, settled=settled)
