# notedrop_client/pointer.py
"""
Mouse and touch input folded into one pointer event.

Both variants expose ``position()`` in window pixels, so the board screen
never has to check which kind of device it is dealing with.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import pygame
from pygame.math import Vector2 as Vec2

DOWN, MOVE, UP = "down", "move", "up"

_MOUSE_PHASES = {
    pygame.MOUSEBUTTONDOWN: DOWN,
    pygame.MOUSEMOTION: MOVE,
    pygame.MOUSEBUTTONUP: UP,
}
_FINGER_PHASES = {
    pygame.FINGERDOWN: DOWN,
    pygame.FINGERMOTION: MOVE,
    pygame.FINGERUP: UP,
}


@dataclass(frozen=True)
class MousePointer:
    phase: str
    x: int
    y: int

    def position(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(frozen=True)
class TouchPointer:
    phase: str
    # normalised 0..1 as pygame reports fingers
    nx: float
    ny: float
    window: Tuple[int, int]

    def position(self) -> Vec2:
        return Vec2(self.nx * self.window[0], self.ny * self.window[1])


PointerEvent = Union[MousePointer, TouchPointer]


def pointer_from_event(event, window_size: Tuple[int, int]) -> Optional[PointerEvent]:
    phase = _MOUSE_PHASES.get(event.type)
    if phase is not None:
        # pygame also reports touches as synthetic mouse events
        if getattr(event, "touch", False):
            return None
        if phase != MOVE and getattr(event, "button", 1) != 1:
            return None
        x, y = event.pos
        return MousePointer(phase, int(x), int(y))

    phase = _FINGER_PHASES.get(event.type)
    if phase is not None:
        return TouchPointer(phase, float(event.x), float(event.y), tuple(window_size))

    return None
