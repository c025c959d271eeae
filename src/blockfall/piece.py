"""The currently falling piece."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .shapes import Shape, ShapeKind, base_shape, shape_cells, validate_shape

Origin = Tuple[int, int]  # (x, y)

# Every piece enters the board with its top-left cell here.
SPAWN_ORIGIN: Origin = (4, 0)


@dataclass(frozen=True)
class PieceSnapshot:
    """Read-only copy of the active piece handed to observers."""

    kind: ShapeKind
    shape: Shape
    origin: Origin

    def cells(self) -> List[Tuple[int, int]]:
        x, y = self.origin
        return [(x + cx, y + cy) for cx, cy in shape_cells(self.shape)]


@dataclass
class Piece:
    """Active falling piece.

    ``shape`` is the current orientation rather than an index into a rotation
    table, so rotating a piece simply swaps in a new mask.
    """

    kind: ShapeKind
    shape: Shape
    origin: Origin = SPAWN_ORIGIN

    @classmethod
    def spawn(cls, kind: ShapeKind) -> "Piece":
        """Return a piece of ``kind`` in its base orientation at the spawn point."""

        return cls(ShapeKind(kind), base_shape(kind), SPAWN_ORIGIN)

    def move(self, dx: int, dy: int) -> None:
        """Shift the origin by ``dx`` columns and ``dy`` rows."""

        x, y = self.origin
        self.origin = (x + dx, y + dy)

    def set_shape(self, shape: Shape) -> None:
        self.shape = validate_shape(shape)

    def cells(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` cells covered by this piece."""

        x, y = self.origin
        return [(x + cx, y + cy) for cx, cy in shape_cells(self.shape)]

    def snapshot(self) -> PieceSnapshot:
        return PieceSnapshot(self.kind, self.shape, self.origin)


__all__ = ["Origin", "Piece", "PieceSnapshot", "SPAWN_ORIGIN"]
