import math

import pytest

from polyrank.models import EPSILON, Point, distance, distance_sq


def test_of_converts_to_float_tuple():
    p = Point.of([1, 2, 3])
    assert p.coordinates == (1.0, 2.0, 3.0)
    assert p.dimensions() == 3
    assert len(p) == 3
    assert p[1] == 2.0
    assert list(p) == [1.0, 2.0, 3.0]


def test_product_concatenates():
    assert Point((1.0,)).product(Point((2.0, 3.0))) == Point((1.0, 2.0, 3.0))


def test_padding():
    p = Point((1.0, 2.0))
    assert p.pad_left(2) == Point((0.0, 0.0, 1.0, 2.0))
    assert p.pad_right(1) == Point((1.0, 2.0, 0.0))
    assert p.pad_left(0) == p
    # Operations return new points.
    assert p == Point((1.0, 2.0))


@pytest.mark.parametrize("method", ["pad_left", "pad_right"])
def test_negative_padding_rejected(method):
    with pytest.raises(ValueError):
        getattr(Point((1.0,)), method)(-1)


def test_add_coordinate():
    assert Point(()).add_coordinate(2) == Point((2.0,))


def test_equals_within_tolerance():
    a = Point((1.0, 2.0))
    assert a.equals(Point((1.0 + EPSILON / 2, 2.0)))
    assert not a.equals(Point((1.0 + 10 * EPSILON, 2.0)))


def test_equals_rejects_dimension_mismatch():
    with pytest.raises(ValueError):
        Point((1.0,)).equals(Point((1.0, 0.0)))


def test_distance():
    a = Point((0.0, 0.0))
    b = Point((3.0, 4.0))
    assert distance_sq(a, b) == 25.0
    assert math.isclose(distance(a, b), 5.0)
    with pytest.raises(ValueError):
        distance(a, Point((1.0,)))
