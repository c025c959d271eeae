"""Board representation for the playfield."""

from __future__ import annotations

from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

from .shapes import Shape, shape_cells, validate_shape


# Dimensions of the board.  These are fixed for the lifetime of the process.
WIDTH = 10
HEIGHT = 20

EMPTY = 0
OCCUPIED = 1

Grid = NDArray[np.uint8]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Grid of locked cells.

    Coordinates passed to :meth:`is_occupied` and :meth:`merge` are ``(x, y)``
    with ``y == 0`` the top row.  The lower level :meth:`get_cell` and
    :meth:`set_cell` accessors follow numpy's ``(row, col)`` order.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def _check_dimensions(self) -> None:
        if self.grid.shape != (self.height, self.width):
            raise RuntimeError(
                f"Board grid changed shape to {self.grid.shape}, "
                f"expected {(self.height, self.width)}"
            )

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
            ValueError: If ``value`` is neither ``EMPTY`` nor ``OCCUPIED``.
        """
        if value not in (EMPTY, OCCUPIED):
            raise ValueError(f"Invalid cell value: {value!r}")
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_occupied(self, x: int, y: int) -> bool:
        """Return ``True`` if ``(x, y)`` counts as occupied for collisions.

        Columns outside the board and rows at or below the floor are treated as
        occupied so that off-board positions are rejected automatically.  Rows
        above the board (``y < 0``) are free: pieces may straddle the top edge
        while they fall in.
        """

        if not 0 <= x < self.width or y >= self.height:
            return True
        if y < 0:
            return False
        return bool(self.grid[y, x] != EMPTY)

    def merge(self, shape: Shape, origin: Tuple[int, int]) -> bool:
        """Lock ``shape`` placed at ``origin`` into the grid.

        Returns ``False`` without touching the grid when any set cell lies
        above the top row; that is the top-out signal.  Returns ``True`` once
        the cells have been marked occupied.

        Raises:
            IndexError: If a set cell lies outside the columns or below the
                floor.
        """

        validate_shape(shape)
        ox, oy = origin
        cells = [(ox + cx, oy + cy) for cx, cy in shape_cells(shape)]
        if any(y < 0 for _, y in cells):
            return False

        coordinates = np.asarray(cells, dtype=np.int16)
        cols, rows = coordinates.T
        if np.any(rows >= self.height) or np.any(cols < 0) or np.any(cols >= self.width):
            raise IndexError("Block out of bounds")

        self.grid[rows, cols] = np.uint8(OCCUPIED)
        self._check_dimensions()
        return True

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Full rows are collected in one pass and the grid is rebuilt from the
        remaining rows, with fresh empty rows stacked on top.
        """

        full_rows = np.all(self.grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        self._check_dimensions()
        return cleared

    def snapshot(self) -> List[List[int]]:
        """Return a plain nested-list copy of the grid."""

        return self.grid.tolist()


__all__ = ["Board", "EMPTY", "OCCUPIED", "WIDTH", "HEIGHT", "create_empty_grid"]
