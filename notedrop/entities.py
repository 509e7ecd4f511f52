# notedrop/entities.py
from dataclasses import dataclass, field
from typing import Any, Dict

from pygame.math import Vector2 as Vec2

from notedrop.vec import from_dict, to_dict


@dataclass
class Ball:
    pos: Vec2
    vel: Vec2 = field(default_factory=Vec2)
    acc: Vec2 = field(default_factory=Vec2)


@dataclass
class Dropper:
    pos: Vec2
    timeout_ms: float = 0.0    # counts down; spawns a ball at <= 0

    def to_dict(self) -> Dict[str, Any]:
        return {"pos": to_dict(self.pos), "timeout": float(self.timeout_ms)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Dropper":
        return cls(from_dict(d["pos"]), float(d["timeout"]))
