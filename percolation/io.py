"""File input and diagnostic output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from .clay import ClayRun, parse_clay_text


def read_clay_file(path: str | Path) -> list[ClayRun]:
    """Parse every clay range in a UTF-8 text file."""

    text = Path(path).read_text(encoding="utf-8")
    return parse_clay_text(text)


def write_png_rgb(path: str | Path, raster_rgb: np.ndarray, *, scale: int = 1) -> None:
    if scale < 1:
        raise ValueError("scale must be >= 1")
    image = Image.fromarray(raster_rgb.astype(np.uint8))
    if scale > 1:
        image = image.resize((image.width * scale, image.height * scale), resample=Image.Resampling.NEAREST)
    image.save(Path(path))


def write_text(path: str | Path, text: str) -> None:
    Path(path).write_text(text + "\n", encoding="utf-8")


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")
