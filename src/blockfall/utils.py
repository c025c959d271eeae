"""Utility helpers for presentation collaborators."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .piece import PieceSnapshot


# Value written where the falling piece covers a cell in :func:`render_grid`.
ACTIVE = 2


def render_grid(
    board: Sequence[Sequence[int]], active: Optional[PieceSnapshot] = None
) -> List[List[int]]:
    """Return a copy of ``board`` with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without locking the piece.  Cells of the piece that lie above the top row
    or outside the board are skipped.
    """

    grid = [list(row) for row in board]
    if active is not None:
        height = len(grid)
        width = len(grid[0]) if grid else 0
        for x, y in active.cells():
            if 0 <= y < height and 0 <= x < width:
                grid[y][x] = ACTIVE
    return grid


__all__ = ["ACTIVE", "render_grid"]
