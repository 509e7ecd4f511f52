import pytest
from pygame.math import Vector2 as Vec2

from notedrop.segment import Segment
from notedrop.vec import magnitude, vec

SEGMENTS = [
    Segment(vec(0, 10), vec(30, 10)),
    Segment(vec(50, 100), vec(51, 10)),
    Segment(vec(0, 0), vec(0, 40)),
    Segment(vec(-3, 2), vec(7, -9)),
]
VELOCITIES = [vec(0, 1), vec(1, 0), vec(0.3, -0.8), vec(-2.5, 4), vec(0, 0)]


def test_normal_is_direction_rotated():
    s = Segment(vec(0, 0), vec(10, 0))
    assert s.normal == Vec2(0, 1)
    s = Segment(vec(0, 0), vec(0, 10))
    assert s.normal == Vec2(-1, 0)


def test_segment_keeps_its_own_vectors():
    a, b = vec(0, 0), vec(10, 0)
    s = Segment(a, b)
    a.x = 99
    b.update(5, 5)
    assert s.start == Vec2(0, 0)
    assert s.end == Vec2(10, 0)


@pytest.mark.parametrize("s", SEGMENTS)
@pytest.mark.parametrize("v", VELOCITIES)
def test_bounce_flips_normal_part_and_keeps_tangent(s, v):
    out = s.bounce(v)
    d = s.direction
    assert out.dot(d) == pytest.approx(v.dot(d))
    assert out.dot(s.normal) == pytest.approx(-v.dot(s.normal))
    assert magnitude(out) == pytest.approx(magnitude(v))


def test_bounce_off_horizontal_line():
    s = Segment(vec(0, 10), vec(30, 10))
    out = s.bounce(vec(0.5, 0.141))
    assert out.x == pytest.approx(0.5)
    assert out.y == pytest.approx(-0.141)


def test_spans():
    s = Segment(vec(0, 10), vec(30, 10))
    assert s.spans(vec(20, 0))
    assert not s.spans(vec(40, 0))
    assert not s.spans(vec(-1, 20))


def test_crosses():
    s = Segment(vec(0, 10), vec(30, 10))
    assert s.crosses(vec(20, 9.9), vec(20, 10.1))
    assert s.crosses(vec(20, 10.1), vec(20, 9.9))
    assert not s.crosses(vec(20, 9), vec(20, 9.9))


def test_hit_on_vertical_segment():
    s = Segment(vec(50, 0), vec(50, 100))
    assert s.hit(vec(49.5, 40), vec(50.5, 40))
    assert not s.hit(vec(49.5, 140), vec(50.5, 140))


def test_hit_on_steep_segment():
    s = Segment(vec(50, 100), vec(51, 10))
    assert s.hit(vec(50, 50.5), vec(51, 50.5))
    assert not s.hit(vec(48, 50.5), vec(49, 50.5))


def test_degenerate_segment_never_hits():
    s = Segment(vec(5, 5), vec(5, 5))
    assert s.is_degenerate
    assert s.normal == Vec2(0, 0)
    assert not s.hit(vec(4, 4), vec(6, 6))


def test_dict_round_trip():
    s = Segment(vec(0, 10), vec(30, 10))
    assert s.to_dict() == {"from": {"x": 0.0, "y": 10.0}, "to": {"x": 30.0, "y": 10.0}}
    assert Segment.from_dict(s.to_dict()) == s
