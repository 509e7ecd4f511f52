import pytest
from pygame.math import Vector2 as Vec2

from notedrop.vec import (clamp_to_bounds, distance, from_dict, is_outside, magnitude,
                          normalized, to_dict, vec)


def test_magnitude():
    assert magnitude(vec(3, 4)) == 5


def test_distance():
    assert distance(vec(0, 0), vec(3, 4)) == 5


def test_normalized_has_unit_length():
    n = normalized(vec(10, 0))
    assert n == Vec2(1, 0)
    assert magnitude(normalized(vec(-3, 7))) == pytest.approx(1.0)


def test_normalized_zero_vector_is_zero_not_error():
    assert normalized(vec(0, 0)) == Vec2(0, 0)


def test_helpers_do_not_mutate_arguments():
    v = vec(3, 4)
    normalized(v)
    clamp_to_bounds(v, vec(1, 1))
    assert v == Vec2(3, 4)
    assert normalized(v) is not v


@pytest.mark.parametrize("point,lower,upper,expected", [
    (vec(10, 10), vec(20, 20), vec(30, 30), True),
    (vec(10, 10), vec(0, 0), vec(30, 30), False),
    (vec(0, 0), vec(0, 0), vec(30, 30), False),
    (vec(30, 30), vec(0, 0), vec(30, 30), False),
    (vec(30.001, 5), vec(0, 0), vec(30, 30), True),
    (vec(5, -0.001), vec(0, 0), vec(30, 30), True),
])
def test_is_outside(point, lower, upper, expected):
    assert is_outside(point, lower, upper) is expected


def test_clamp_to_bounds_clamps_each_axis():
    assert clamp_to_bounds(vec(-5, 50), vec(40, 30)) == Vec2(0, 30)
    assert clamp_to_bounds(vec(12, 7), vec(40, 30)) == Vec2(12, 7)


def test_dict_form():
    assert to_dict(vec(1.5, -2)) == {"x": 1.5, "y": -2.0}
    assert from_dict({"x": 1, "y": 2}) == Vec2(1, 2)
