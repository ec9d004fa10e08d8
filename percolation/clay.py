"""Parsing of clay range lines such as ``x=495, y=2..7``."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable

from .cells import Coordinate

_LINE_RE = re.compile(
    r"^(?P<axis>[xy])=(?P<fixed>\d+),\s*(?P<span_axis>[xy])=(?P<start>\d+)\.\.(?P<end>\d+)$"
)

_EXAMPLE_LINES = ["x=495, y=2..7", "y=13, x=498..504"]


class ClayParseError(ValueError):
    """Raised when a clay range line does not match the input grammar."""


@dataclass(frozen=True)
class ClayRun:
    """A straight run of clay.

    ``axis`` names the fixed coordinate: ``"x"`` is a vertical run at column
    ``fixed`` spanning rows ``start..end``; ``"y"`` is a horizontal run at row
    ``fixed`` spanning columns ``start..end``. Both ends are inclusive.
    """

    axis: str
    fixed: int
    start: int
    end: int

    @property
    def is_vertical(self) -> bool:
        return self.axis == "x"

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def coordinates(self) -> list[Coordinate]:
        if self.is_vertical:
            return [Coordinate(row, self.fixed) for row in range(self.start, self.end + 1)]
        return [Coordinate(self.fixed, column) for column in range(self.start, self.end + 1)]


def parse_clay_line(text: str) -> ClayRun:
    """Parse one ``x=<col>, y=<a>..<b>`` or ``y=<row>, x=<a>..<b>`` line."""

    if text is None:
        raise ClayParseError(_error_message("Clay line is required."))

    raw = text.strip()
    match = _LINE_RE.fullmatch(raw)
    if match is None:
        raise ClayParseError(_error_message(f"Unable to parse clay line {raw!r}."))

    axis = match.group("axis")
    if match.group("span_axis") == axis:
        raise ClayParseError(_error_message(f"Clay line {raw!r} uses {axis!r} for both coordinates."))

    start = int(match.group("start"))
    end = int(match.group("end"))
    if start > end:
        raise ClayParseError(_error_message(f"Clay line {raw!r} has a descending range {start}..{end}."))

    return ClayRun(axis, int(match.group("fixed")), start, end)


def parse_clay_text(text: str) -> list[ClayRun]:
    """Parse a whole document, skipping blank and ``#`` comment lines."""

    runs: list[ClayRun] = []
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            runs.append(parse_clay_line(stripped))
        except ClayParseError as exc:
            raise ClayParseError(f"line {number}: {exc}") from exc
    return runs


def clay_coordinates(runs: Iterable[ClayRun]) -> set[Coordinate]:
    """Union of the cells covered by ``runs``; overlaps collapse."""

    cells: set[Coordinate] = set()
    for run in runs:
        cells.update(run.coordinates())
    return cells


def _error_message(reason: str) -> str:
    examples = ", ".join(repr(line) for line in _EXAMPLE_LINES)
    return f"{reason} Expected lines like {examples}"
