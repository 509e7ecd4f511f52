# notedrop_client/renderer.py
from typing import Optional, Tuple

import pygame
from pygame.math import Vector2 as Vec2

from notedrop.board import Board
from notedrop.config import CFG
from notedrop.constants import BLACK, WHITE
from notedrop.segment import Segment


class Renderer:
    """Drawing primitives over a pygame surface. Never touches board state."""

    def __init__(self, surface: Optional[pygame.Surface], offset: Tuple[int, int] = (0, 0)):
        if surface is None:
            raise RuntimeError("No drawing surface available")
        self.surface = surface
        # where the canvas sits inside the window
        self.offset = Vec2(offset)
        self.bg = BLACK
        self.fg = WHITE

    def size(self) -> Vec2:
        w, h = self.surface.get_size()
        return Vec2(w, h)

    def clear(self):
        self.surface.fill(self.bg)

    def draw_circle(self, center: Vec2, radius: float, stroke: bool = False):
        c = (int(center.x), int(center.y))
        if stroke:
            pygame.draw.circle(self.surface, self.fg, c, int(radius), 1)
        else:
            pygame.draw.circle(self.surface, self.fg, c, int(radius))

    def draw_line(self, line: Segment):
        start, end = line.start, line.end
        self.draw_circle(start, CFG.endpoint_r)
        self.draw_circle(end, CFG.endpoint_r)
        pygame.draw.line(self.surface, self.fg, (int(start.x), int(start.y)), (int(end.x), int(end.y)), 1)

    def translate_pointer_to_canvas(self, client_x: float, client_y: float) -> Vec2:
        return Vec2(client_x - self.offset.x, client_y - self.offset.y)

    def draw_board(self, board: Board, pending: Optional[Segment] = None):
        self.clear()

        if pending is not None:
            self.draw_line(pending)

        for l in board.lines:
            self.draw_line(l)

        for d in board.droppers:
            self.draw_circle(d.pos, CFG.dropper_r, stroke=True)

        for b in board.balls:
            self.draw_circle(b.pos, CFG.ball_r)
