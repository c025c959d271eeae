"""Shape catalog for the seven falling pieces.

Each piece kind has a single canonical mask.  Other orientations are never
stored; they are derived on demand by :func:`blockfall.collision.rotate`, which
means the catalog is nothing more than a table of base masks plus a uniform
random draw over the kinds.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Dict, List, Optional, Tuple

Shape = Tuple[Tuple[int, ...], ...]


class ShapeKind(str, Enum):
    """Enumeration of the seven piece kinds."""

    I = "I"
    O = "O"
    T = "T"
    L = "L"
    J = "J"
    S = "S"
    Z = "Z"


def validate_shape(shape: Shape) -> Shape:
    """Return ``shape`` unchanged after checking it is a usable mask.

    Raises:
        ValueError: If the mask is empty, ragged, holds values other than
            ``0``/``1`` or has no set cell at all.
    """

    if not shape or not shape[0]:
        raise ValueError("Shape mask must not be empty")
    width = len(shape[0])
    for row in shape:
        if len(row) != width:
            raise ValueError("Shape mask rows must have equal length")
        if any(value not in (0, 1) for value in row):
            raise ValueError("Shape mask values must be 0 or 1")
    if not any(any(row) for row in shape):
        raise ValueError("Shape mask must contain at least one set cell")
    return shape


def _freeze(rows: List[List[int]]) -> Shape:
    return validate_shape(tuple(tuple(row) for row in rows))


# Canonical spawn orientation for each kind.
_BASE_SHAPES: Dict[ShapeKind, Shape] = {
    ShapeKind.I: _freeze([[1, 1, 1, 1]]),
    ShapeKind.O: _freeze([[1, 1], [1, 1]]),
    ShapeKind.T: _freeze([[0, 1, 0], [1, 1, 1]]),
    ShapeKind.L: _freeze([[1, 0], [1, 0], [1, 1]]),
    ShapeKind.J: _freeze([[0, 1], [0, 1], [1, 1]]),
    ShapeKind.S: _freeze([[0, 1, 1], [1, 1, 0]]),
    ShapeKind.Z: _freeze([[1, 1, 0], [0, 1, 1]]),
}

_KINDS: Tuple[ShapeKind, ...] = tuple(ShapeKind)


def base_shape(kind: ShapeKind) -> Shape:
    """Return the canonical mask for ``kind``."""

    return _BASE_SHAPES[ShapeKind(kind)]


def random_kind(rng: Optional[random.Random] = None) -> ShapeKind:
    """Return one of the seven kinds drawn uniformly at random.

    Parameters
    ----------
    rng:
        Optional random source.  The module level :mod:`random` functions are
        used when omitted.  Every call is an independent draw; there is no bag
        or weighting.
    """

    chooser = rng.choice if rng is not None else random.choice
    return chooser(_KINDS)


def shape_cells(shape: Shape) -> List[Tuple[int, int]]:
    """Return the ``(cx, cy)`` offsets of the set cells of ``shape``."""

    return [
        (cx, cy)
        for cy, row in enumerate(shape)
        for cx, value in enumerate(row)
        if value
    ]


__all__ = [
    "Shape",
    "ShapeKind",
    "base_shape",
    "random_kind",
    "shape_cells",
    "validate_shape",
]
