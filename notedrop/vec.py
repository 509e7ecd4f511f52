# notedrop/vec.py
"""
Small helpers around pygame's Vector2.

Vector2 is mutable, so every helper here hands back a fresh instance and
never touches its arguments. Board code only ever rebinds vectors
(``ball.pos = next_pos``) instead of updating them in place.
"""
import math
from typing import Dict

from pygame.math import Vector2 as Vec2


def vec(x: float, y: float) -> Vec2:
    return Vec2(float(x), float(y))


def copy(v: Vec2) -> Vec2:
    return Vec2(v.x, v.y)


def magnitude(v: Vec2) -> float:
    return math.sqrt(v.x * v.x + v.y * v.y)


def distance(a: Vec2, b: Vec2) -> float:
    return magnitude(b - a)


def normalized(v: Vec2) -> Vec2:
    """Unit vector in the direction of v, or a zero vector if v has no length.

    pygame's own ``normalize()`` raises ValueError for the zero vector.
    """
    mag = magnitude(v)
    if mag == 0:
        return copy(v)
    return Vec2(v.x / mag, v.y / mag)


def clamp_to_bounds(v: Vec2, upper: Vec2) -> Vec2:
    """Clamp each axis to [0, upper.axis]."""
    x = max(0.0, min(v.x, upper.x))
    y = max(0.0, min(v.y, upper.y))
    return Vec2(x, y)


def is_outside(v: Vec2, lower: Vec2, upper: Vec2) -> bool:
    """True if either axis lies strictly outside [lower, upper]."""
    x_out = v.x < lower.x or v.x > upper.x
    y_out = v.y < lower.y or v.y > upper.y
    return x_out or y_out


def to_dict(v: Vec2) -> Dict[str, float]:
    return {"x": float(v.x), "y": float(v.y)}


def from_dict(d: Dict[str, float]) -> Vec2:
    return Vec2(float(d["x"]), float(d["y"]))
