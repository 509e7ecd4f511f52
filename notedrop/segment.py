# notedrop/segment.py
from dataclasses import dataclass, field
from typing import Any, Dict

from pygame.math import Vector2 as Vec2

from notedrop.vec import copy, from_dict, normalized, to_dict


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


@dataclass(frozen=True)
class Segment:
    """
    A finite line a ball can bounce off.

    The unit normal is fixed at construction: the direction rotated by -90
    degrees, ``normalize(-dy, dx)``. Collision tests only use dot product
    signs against it, so vertical and near vertical segments need no special
    case and nothing is ever divided by a slope.
    """
    start: Vec2
    end: Vec2
    normal: Vec2 = field(init=False, compare=False)

    def __post_init__(self):
        # never share vectors with the caller
        object.__setattr__(self, "start", copy(self.start))
        object.__setattr__(self, "end", copy(self.end))
        d = self.end - self.start
        object.__setattr__(self, "normal", normalized(Vec2(-d.y, d.x)))

    @property
    def direction(self) -> Vec2:
        return self.end - self.start

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    # ---------------- Reflection ----------------
    def bounce(self, vel: Vec2) -> Vec2:
        """Specular reflection: keep the tangential part, flip the normal part."""
        u = self.normal * vel.dot(self.normal)
        return vel - u * 2

    # ---------------- Collision tests ----------------
    def spans(self, p: Vec2) -> bool:
        """Is p's projection onto the line between the two endpoints?"""
        d = self.direction
        from_dot = (p - self.start).dot(d)
        to_dot = (p - self.end).dot(d)
        return _sign(from_dot) != _sign(to_dot)

    def crosses(self, p: Vec2, next_p: Vec2) -> bool:
        """Do p and next_p lie on different sides of the infinite line?"""
        this_side = (p - self.start).dot(self.normal)
        next_side = (next_p - self.start).dot(self.normal)
        return _sign(this_side) != _sign(next_side)

    def hit(self, p: Vec2, next_p: Vec2) -> bool:
        return self.spans(p) and self.crosses(p, next_p)

    # ---------------- Serialisation ----------------
    def to_dict(self) -> Dict[str, Any]:
        return {"from": to_dict(self.start), "to": to_dict(self.end)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Segment":
        return cls(from_dict(d["from"]), from_dict(d["to"]))

    def __str__(self):
        return f"({self.start.x}, {self.start.y}) -> ({self.end.x}, {self.end.y})"
