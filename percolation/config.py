"""Configuration models for a percolation run."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .cells import Coordinate

DEFAULT_SOURCE_ROW = 0
DEFAULT_SOURCE_COLUMN = 500
DEFAULT_PNG_SCALE = 4


def _default_palette() -> dict[str, tuple[int, int, int]]:
    return {
        ".": (222, 196, 140),
        "#": (120, 72, 40),
        "|": (120, 180, 235),
        "~": (30, 80, 200),
        "+": (240, 40, 40),
        "x": (0, 0, 0),
    }


@dataclass(frozen=True)
class SourceConfig:
    """Where water enters the ground."""

    row: int = DEFAULT_SOURCE_ROW
    column: int = DEFAULT_SOURCE_COLUMN

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.row, self.column)


@dataclass(frozen=True)
class EngineConfig:
    """Pour-point backlog discipline: ``stack`` (LIFO) or the diagnostic ``queue`` (FIFO)."""

    order: str = "stack"


@dataclass(frozen=True)
class RenderConfig:
    """Diagnostic rendering configuration."""

    margin: int = 1
    png_scale: int = DEFAULT_PNG_SCALE
    palette: dict[str, tuple[int, int, int]] = field(default_factory=_default_palette)


@dataclass(frozen=True)
class SimulationConfig:
    """Primary run configuration."""

    source: SourceConfig = field(default_factory=SourceConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
