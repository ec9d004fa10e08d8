from percolation.cells import CellState, Coordinate
from percolation.clay import clay_coordinates, parse_clay_text
from percolation.engine import simulate
from percolation.ground import GroundMap
from percolation.metrics import WaterMetrics, count_water

SAMPLE = """\
x=495, y=2..7
y=7, x=495..501
x=501, y=3..7
x=498, y=2..4
x=506, y=1..2
x=498, y=10..13
x=504, y=10..13
y=13, x=498..504
"""


def test_water_above_first_clay_row_is_ignored() -> None:
    ground = GroundMap.from_clay([Coordinate(3, 10), Coordinate(8, 10)])
    ground.set(Coordinate(1, 10), CellState.FLOW)
    ground.set(Coordinate(2, 10), CellState.STILL)
    ground.set(Coordinate(3, 11), CellState.FLOW)
    ground.set(Coordinate(4, 11), CellState.STILL)
    ground.set(Coordinate(8, 11), CellState.STILL)

    metrics = count_water(ground)

    assert metrics == WaterMetrics(reached=1, settled=2)
    assert metrics.total == 3
    assert metrics.to_dict() == {"reached": 1, "settled": 2, "total": 3}


def test_total_matches_all_water_at_or_below_top_clay() -> None:
    ground = GroundMap.from_clay(clay_coordinates(parse_clay_text(SAMPLE)))
    simulate(ground)
    top = ground.bounds.min.row

    water = [
        coordinate
        for coordinate, state in ground.items()
        if coordinate.row >= top and state not in (CellState.SAND, CellState.CLAY, CellState.SOURCE)
    ]

    assert count_water(ground).total == len(water)
    assert count_water(ground).settled == ground.count(CellState.STILL, min_row=top)
