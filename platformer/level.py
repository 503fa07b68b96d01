"""Tile grids, collision against tiles and the run-length level format."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

_DIGITS = "0123456789"


class LevelError(Exception):
    """Raised when level data cannot be read or parsed."""


def rects_overlap(ax: float, ay: float, bx: float, by: float) -> bool:
    """Whether two unit squares with top-left corners at a and b overlap."""
    return ax < bx + 1.0 and ax + 1.0 > bx and ay < by + 1.0 and ay + 1.0 > by


class Level:
    """A rectangular grid of single-character tiles."""

    def __init__(self, grid: Iterable[Iterable[str]]) -> None:
        self._grid = [list(row) for row in grid]
        widths = {len(row) for row in self._grid}
        if len(widths) > 1:
            raise LevelError("level rows differ in length")

    @property
    def rows(self) -> int:
        return len(self._grid)

    @property
    def columns(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    def copy(self) -> Level:
        """An independent copy whose cells can be changed freely."""
        return Level(self._grid)

    def cell(self, row: int, column: int) -> str:
        if not self.is_inside(row, column):
            raise IndexError(f"cell ({row}, {column}) is outside the level")
        return self._grid[row][column]

    def set_cell(self, row: int, column: int, value: str) -> None:
        if not self.is_inside(row, column):
            raise IndexError(f"cell ({row}, {column}) is outside the level")
        self._grid[row][column] = value

    def is_inside(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def _nearby_cells(self, x: float, y: float) -> Iterator[tuple[int, int]]:
        for row in range(int(y - 1), int(y + 1)):
            for column in range(int(x - 1), int(x + 1)):
                if self.is_inside(row, column):
                    yield row, column

    def find_collider(self, x: float, y: float, look_for: str) -> tuple[int, int] | None:
        """Row and column of a `look_for` tile overlapping the unit square at (x, y)."""
        for row, column in self._nearby_cells(x, y):
            if self._grid[row][column] == look_for and rects_overlap(x, y, column, row):
                return row, column
        return None

    def is_colliding(self, x: float, y: float, look_for: str) -> bool:
        return self.find_collider(x, y, look_for) is not None

    def positions_of(self, tile: str) -> Iterator[tuple[int, int]]:
        """Row and column of each cell holding `tile`, in reading order."""
        for row, cells in enumerate(self._grid):
            for column, value in enumerate(cells):
                if value == tile:
                    yield row, column

    def to_rows(self) -> list[str]:
        return ["".join(row) for row in self._grid]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        return f"Level({self.to_rows()!r})"


def parse_rle(data: str) -> Level:
    """Parse one run-length encoded level: rows split by '|', ended by ';'."""
    rows: list[str] = []
    current: list[str] = []
    counter = ""

    for char in data:
        if char == "|":
            rows.append("".join(current))
            current = []
            counter = ""
        elif char == ";":
            break
        elif char in _DIGITS:
            counter += char
        else:
            current.append(char * (int(counter) if counter else 1))
            counter = ""

    if current:
        rows.append("".join(current))

    if not rows:
        raise LevelError("level data holds no rows")
    return Level(rows)


def load_levels(path: str | os.PathLike[str]) -> list[Level]:
    """Read every level from a file, one encoded level per line."""
    try:
        with open(path, encoding="utf-8") as handle:
            lines = [line.rstrip("\n") for line in handle]
    except OSError as error:
        raise LevelError(f"Failed to open file: {os.fspath(path)}") from error

    levels = [parse_rle(line) for line in lines if line and not line.startswith(";")]
    if not levels:
        raise LevelError("No valid levels were loaded from the file.")
    return levels