# notedrop/collaborators.py
"""Capabilities the simulation needs from its host."""
from typing import Protocol

from pygame.math import Vector2 as Vec2


class Viewport(Protocol):
    def size(self) -> Vec2: ...


class Sampler(Protocol):
    def play(self, speed: float, instrument: str, root: str, scale_type: str) -> None: ...


class SilentSampler:
    """Sampler that plays nothing, for headless runs."""

    def play(self, speed, instrument, root, scale_type):
        pass


class FixedViewport:
    def __init__(self, width: float, height: float):
        self._size = Vec2(width, height)

    def size(self) -> Vec2:
        return Vec2(self._size)
