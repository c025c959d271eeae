from blockfall.board import EMPTY, OCCUPIED


def fill_row(board, row, skip=()):
    """Mark every cell of ``row`` occupied except the columns in ``skip``."""

    for col in range(board.width):
        board.set_cell(row, col, EMPTY if col in skip else OCCUPIED)
