import dataclasses

import pytest

from blockfall.piece import SPAWN_ORIGIN, Piece
from blockfall.shapes import ShapeKind, base_shape
from blockfall.utils import ACTIVE, render_grid


def test_spawn_uses_base_shape_at_spawn_origin():
    piece = Piece.spawn(ShapeKind.T)
    assert piece.kind is ShapeKind.T
    assert piece.shape == base_shape(ShapeKind.T)
    assert piece.origin == SPAWN_ORIGIN == (4, 0)


def test_move_and_cells_use_x_y_order():
    piece = Piece.spawn(ShapeKind.O)
    piece.move(-2, 3)
    assert piece.origin == (2, 3)
    assert sorted(piece.cells()) == [(2, 3), (2, 4), (3, 3), (3, 4)]


def test_set_shape_validates_mask():
    piece = Piece.spawn(ShapeKind.O)
    with pytest.raises(ValueError):
        piece.set_shape(((0, 0),))


def test_snapshot_is_frozen_and_detached():
    piece = Piece.spawn(ShapeKind.S)
    snap = piece.snapshot()
    piece.move(1, 1)
    assert snap.origin == (4, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.origin = (0, 0)


def test_render_grid_overlays_piece_without_touching_board():
    board = [[0] * 10 for _ in range(20)]
    board[19][0] = 1
    piece = Piece.spawn(ShapeKind.I)
    piece.move(0, -1)
    piece.set_shape(((1,), (1,), (1,), (1,)))

    grid = render_grid(board, piece.snapshot())

    assert [grid[row][4] for row in range(3)] == [ACTIVE] * 3
    assert grid[19][0] == 1
    assert board[0][4] == 0
    assert sum(cell == ACTIVE for row in grid for cell in row) == 3
