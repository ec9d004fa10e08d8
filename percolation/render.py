"""Dense raster and text previews of a ground map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import numpy as np

from .cells import CellState
from .ground import GroundMap

STATE_ORDER = tuple(CellState)
STATE_CODES = {state: code for code, state in enumerate(STATE_ORDER)}


@dataclass(frozen=True)
class StateRaster:
    """Cell state codes for a window of the ground, anchored at ``origin``."""

    codes: np.ndarray
    origin_row: int
    origin_column: int

    def state_at(self, row: int, column: int) -> CellState:
        return STATE_ORDER[int(self.codes[row - self.origin_row, column - self.origin_column])]


def state_raster(ground: GroundMap, *, margin: int = 1) -> StateRaster:
    """Rasterize the clay bounding box plus ``margin`` cells on every side.

    The window also stretches upward to include the source row.
    """

    if margin < 0:
        raise ValueError("margin must be non-negative")

    bounds = ground.bounds
    top = min(bounds.min.row - margin, ground.source.row)
    bottom = bounds.max.row + margin
    left = min(bounds.min.column - margin, ground.source.column)
    right = max(bounds.max.column + margin, ground.source.column)

    codes = np.full((bottom - top + 1, right - left + 1), STATE_CODES[CellState.SAND], dtype=np.int8)
    for coordinate, state in ground.items():
        if top <= coordinate.row <= bottom and left <= coordinate.column <= right:
            codes[coordinate.row - top, coordinate.column - left] = STATE_CODES[state]

    floor = bounds.max.row + 1 - top
    if floor < codes.shape[0]:
        codes[floor:, :] = STATE_CODES[CellState.OUT_OF_BOUNDS]
    return StateRaster(codes, top, left)


def render_text(ground: GroundMap, *, margin: int = 1) -> str:
    """Glyph grid, one text line per row."""

    raster = state_raster(ground, margin=margin)
    glyphs = np.array([state.glyph for state in STATE_ORDER])
    return "\n".join("".join(row) for row in glyphs[raster.codes])


def state_rgb(raster: StateRaster, palette: Mapping[str, tuple[int, int, int]]) -> np.ndarray:
    """Map state codes to an (H, W, 3) uint8 image using a glyph-keyed palette."""

    lut = np.zeros((len(STATE_ORDER), 3), dtype=np.uint8)
    for code, state in enumerate(STATE_ORDER):
        lut[code] = palette.get(state.glyph, (255, 0, 255))
    return lut[raster.codes.astype(np.intp)]
