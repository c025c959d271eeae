"""Collision and rotation rules.

A single predicate, :func:`collides`, decides whether a mask fits on the board
at a given origin.  Horizontal moves, soft and hard drops and rotations all go
through it.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .board import Board
from .piece import Piece
from .shapes import Shape, shape_cells


def collides(board: Board, shape: Shape, origin: Tuple[int, int]) -> bool:
    """Return ``True`` if ``shape`` placed at ``origin`` overlaps anything.

    A set cell collides when it falls outside the board's columns, at or below
    the floor, or on an occupied cell.  Cells above the top row never collide.
    """

    ox, oy = origin
    return any(board.is_occupied(ox + cx, oy + cy) for cx, cy in shape_cells(shape))


def rotate(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    The mask is transposed and each resulting row reversed.  The transform
    knows nothing about piece kinds: non-square masks swap their width and
    height on every call and four calls restore the original mask.
    """

    return tuple(zip(*shape[::-1]))


def can_place(
    board: Board,
    piece: Piece,
    dx: int = 0,
    dy: int = 0,
    shape: Optional[Shape] = None,
) -> bool:
    """Return ``True`` if ``piece`` fits after moving by ``(dx, dy)``.

    ``shape`` replaces the piece's current mask for the check, which is how
    rotations are validated against the current origin.
    """

    x, y = piece.origin
    return not collides(board, shape if shape is not None else piece.shape, (x + dx, y + dy))


__all__ = ["can_place", "collides", "rotate"]
