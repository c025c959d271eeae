import random

import pytest

from blockfall.shapes import ShapeKind, base_shape, random_kind, shape_cells, validate_shape


def test_catalog_has_seven_kinds_with_four_cells_each():
    assert len(list(ShapeKind)) == 7
    for kind in ShapeKind:
        assert len(shape_cells(base_shape(kind))) == 4


def test_base_shapes_match_canonical_masks():
    assert base_shape(ShapeKind.I) == ((1, 1, 1, 1),)
    assert base_shape(ShapeKind.O) == ((1, 1), (1, 1))
    assert base_shape(ShapeKind.T) == ((0, 1, 0), (1, 1, 1))
    assert base_shape(ShapeKind.L) == ((1, 0), (1, 0), (1, 1))
    assert base_shape(ShapeKind.J) == ((0, 1), (0, 1), (1, 1))
    assert base_shape(ShapeKind.S) == ((0, 1, 1), (1, 1, 0))
    assert base_shape(ShapeKind.Z) == ((1, 1, 0), (0, 1, 1))


def test_base_shape_accepts_plain_strings():
    assert base_shape("O") is base_shape(ShapeKind.O)


def test_random_kind_is_reproducible_with_seeded_rng():
    first = [random_kind(random.Random(7)) for _ in range(3)]
    second = [random_kind(random.Random(7)) for _ in range(3)]
    assert first == second


def test_random_kind_covers_every_kind():
    rng = random.Random(0)
    drawn = {random_kind(rng) for _ in range(500)}
    assert drawn == set(ShapeKind)


def test_shape_cells_lists_set_offsets_as_x_y():
    assert shape_cells(base_shape(ShapeKind.T)) == [(1, 0), (0, 1), (1, 1), (2, 1)]


@pytest.mark.parametrize(
    "shape",
    [
        (),
        ((),),
        ((1, 1), (1,)),
        ((1, 2),),
        ((0, 0), (0, 0)),
    ],
)
def test_validate_shape_rejects_malformed_masks(shape):
    with pytest.raises(ValueError):
        validate_shape(shape)
