"""
Grid model: an immutable rectangular occupancy map of empty and solid cells.
"""

from __future__ import annotations
import os
import json
import math
import logging
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import WORLD_FILE

logger = logging.getLogger(__name__)

GridRows = Union[Sequence[Sequence[Union[int, bool]]], np.ndarray]


class GridError(ValueError):
    """Raised when a grid is malformed or cannot be loaded."""


class OutOfBoundsError(IndexError):
    """Raised when a cell lookup falls outside the grid."""


class Grid:
    """Occupancy map indexed as (x, y), with y growing downwards by row."""

    def __init__(self, rows: GridRows) -> None:
        cells = _validate_rows(rows)
        # Read-only view so the grid cannot change after construction
        cells.flags.writeable = False
        self._cells = cells

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def diagonal(self) -> float:
        """Length of the grid diagonal in cell units."""
        return math.hypot(self.width, self.height)

    def contains(self, cell_x: int, cell_y: int) -> bool:
        """Return True if (cell_x, cell_y) names a cell inside the grid."""
        return 0 <= cell_x < self.width and 0 <= cell_y < self.height

    def is_solid(self, cell_x: int, cell_y: int) -> bool:
        """
        Return True if the cell is occupied.
        Raises OutOfBoundsError for indices outside the grid; callers are
        expected to check contains() first.
        """
        if not self.contains(cell_x, cell_y):
            raise OutOfBoundsError(
                f"cell ({cell_x}, {cell_y}) outside {self.width}x{self.height} grid"
            )
        return bool(self._cells[cell_y, cell_x])

    def solid_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) for every solid cell, row by row."""
        for y, x in np.argwhere(self._cells):
            yield int(x), int(y)

    def rows(self) -> List[List[int]]:
        """Return the grid as nested lists of 0/1 values."""
        return self._cells.astype(int).tolist()

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"


def _validate_rows(rows: GridRows) -> np.ndarray:
    if isinstance(rows, np.ndarray):
        table = rows.tolist()
    else:
        try:
            table = [list(row) for row in rows]
        except TypeError as e:
            raise GridError(f"grid must be a table of rows: {e}") from e
    if not table:
        raise GridError("grid must have at least one row")
    width = len(table[0])
    if width == 0:
        raise GridError("grid rows must have at least one cell")
    for y, row in enumerate(table):
        if len(row) != width:
            raise GridError(
                f"row {y} has {len(row)} cells, expected {width}"
            )
        for x, value in enumerate(row):
            # bool is a subclass of int; numpy bools are not
            is_int = isinstance(value, (int, np.integer, np.bool_))
            if is_int and value in (0, 1):
                continue
            raise GridError(f"cell ({x}, {y}) has invalid value {value!r}")
    return np.array(table, dtype=bool)


def load_grid(path: Optional[str] = None) -> Grid:
    """
    Load a grid from a JSON world file of the form {"map": [[0, 1, ...], ...]}.
    Defaults to the bundled world file named by WORLD_FILE.
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), WORLD_FILE)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise GridError(f"Failed to load world map from {path}: {e}") from e
    if not isinstance(data, dict) or "map" not in data:
        raise GridError(f"World file {path} has no 'map' entry")
    grid = Grid(data["map"])
    logger.info("Loaded %dx%d grid from %s", grid.width, grid.height, path)
    return grid
