# notedrop_client/ui.py
from typing import Callable, Sequence

import pygame

from notedrop.constants import GRAY, WHITE


class Button:
    def __init__(self, rect, text, font, bg, fg):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.fg = fg
        self.selected = False

    def draw(self, surface):
        pygame.draw.rect(surface, self.bg, self.rect, border_radius=10)
        border = WHITE if self.selected else (0, 0, 0)
        pygame.draw.rect(surface, border, self.rect, width=2, border_radius=10)
        txt = self.font.render(self.text, True, self.fg)
        surface.blit(txt, txt.get_rect(center=self.rect.center))

    def is_clicked(self, event):
        return event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos)


class Slider:
    """Horizontal slider bound to a getter/setter pair."""

    def __init__(self, rect, label, font, lo, hi, step,
                 get: Callable[[], float], set: Callable[[float], None]):
        self.rect = pygame.Rect(rect)
        self.label = label
        self.font = font
        self.lo, self.hi, self.step = float(lo), float(hi), float(step)
        self.get = get
        self.set = set
        self.dragging = False

    def _value_at(self, x):
        frac = (x - self.rect.left) / max(1, self.rect.width)
        frac = max(0.0, min(1.0, frac))
        raw = self.lo + frac * (self.hi - self.lo)
        snapped = self.lo + round((raw - self.lo) / self.step) * self.step
        return max(self.lo, min(self.hi, snapped))

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            self.dragging = True
            self.set(self._value_at(event.pos[0]))
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.set(self._value_at(event.pos[0]))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False

    def draw(self, surface):
        value = self.get()
        txt = self.font.render(f"{self.label}: {value:g}", True, WHITE)
        surface.blit(txt, (self.rect.x, self.rect.y - 24))

        pygame.draw.rect(surface, GRAY, self.rect, border_radius=6)
        frac = (value - self.lo) / (self.hi - self.lo)
        frac = max(0.0, min(1.0, frac))
        knob_x = self.rect.left + int(frac * self.rect.width)
        pygame.draw.circle(surface, WHITE, (knob_x, self.rect.centery), self.rect.height)


class Cycler:
    """Button that steps through a fixed list of options on click."""

    def __init__(self, rect, label, font, options: Sequence[str],
                 get: Callable[[], str], set: Callable[[str], None], bg, fg):
        self.button = Button(rect, "", font, bg, fg)
        self.label = label
        self.options = list(options)
        self.get = get
        self.set = set

    def handle_event(self, event):
        if self.button.is_clicked(event):
            current = self.get()
            i = self.options.index(current) if current in self.options else -1
            self.set(self.options[(i + 1) % len(self.options)])

    def draw(self, surface):
        self.button.text = f"{self.label}: {self.get()}"
        self.button.draw(surface)
