from __future__ import annotations

import textwrap

import numpy as np
from PIL import Image
import pytest

from percolation.cells import CellState, Coordinate
from percolation.clay import clay_coordinates, parse_clay_text
from percolation.config import RenderConfig
from percolation.engine import simulate
from percolation.ground import GroundMap
from percolation.io import write_png_rgb
from percolation.render import state_raster, state_rgb, render_text

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


def _settled_sample() -> GroundMap:
    ground = GroundMap.from_clay(clay_coordinates(parse_clay_text(SAMPLE)))
    simulate(ground)
    return ground


def test_render_text_of_settled_sample() -> None:
    expected = textwrap.dedent(
        """\
        ......+.......
        ......|.....#.
        .#..#||||...#.
        .#..#~~#|.....
        .#..#~~#|.....
        .#~~~~~#|.....
        .#~~~~~#|.....
        .#######|.....
        ........|.....
        ...|||||||||..
        ...|#~~~~~#|..
        ...|#~~~~~#|..
        ...|#~~~~~#|..
        ...|#######|..
        xxxxxxxxxxxxxx"""
    )

    assert render_text(_settled_sample()) == expected


def test_state_raster_window_and_lookup() -> None:
    ground = _settled_sample()
    raster = state_raster(ground, margin=1)

    assert raster.codes.shape == (15, 14)
    assert (raster.origin_row, raster.origin_column) == (0, 494)
    assert raster.state_at(0, 500) is CellState.SOURCE
    assert raster.state_at(5, 497) is CellState.STILL
    assert raster.state_at(14, 494) is CellState.OUT_OF_BOUNDS


def test_state_raster_without_margin_still_shows_source() -> None:
    ground = GroundMap.from_clay([Coordinate(4, 10), Coordinate(6, 12)])
    raster = state_raster(ground, margin=0)

    assert raster.codes.shape == (7, 491)
    assert raster.state_at(0, 500) is CellState.SOURCE
    assert raster.state_at(4, 10) is CellState.CLAY


def test_state_raster_rejects_negative_margin() -> None:
    with pytest.raises(ValueError):
        state_raster(_settled_sample(), margin=-1)


def test_state_rgb_uses_palette(tmp_path) -> None:
    ground = _settled_sample()
    raster = state_raster(ground)
    palette = RenderConfig().palette
    rgb = state_rgb(raster, palette)

    assert rgb.shape == (15, 14, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[5, 3]) == palette["~"]
    assert tuple(rgb[7, 1]) == palette["#"]

    out_path = tmp_path / "ground.png"
    write_png_rgb(out_path, rgb, scale=3)
    with Image.open(out_path) as image:
        assert image.mode == "RGB"
        assert image.size == (14 * 3, 15 * 3)
        assert image.getpixel((3 * 3 + 1, 5 * 3 + 1)) == palette["~"]
