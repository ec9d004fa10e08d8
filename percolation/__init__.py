"""Water percolation through clay cross-sections."""

from .cells import CellState, Coordinate
from .clay import ClayParseError, ClayRun, parse_clay_line, parse_clay_text
from .config import SimulationConfig
from .engine import EngineStats, PercolationEngine, simulate
from .ground import Bounds, GroundMap, InvariantViolation
from .metrics import WaterMetrics, count_water

__all__ = [
    "Bounds",
    "CellState",
    "ClayParseError",
    "ClayRun",
    "Coordinate",
    "EngineStats",
    "GroundMap",
    "InvariantViolation",
    "PercolationEngine",
    "SimulationConfig",
    "WaterMetrics",
    "count_water",
    "parse_clay_line",
    "parse_clay_text",
    "simulate",
]
