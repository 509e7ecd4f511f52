# notedrop_client/screens.py
import logging

import pygame

from notedrop.config import DROPPER_TIMEOUT_RANGE, GRAVITY_RANGE
from notedrop.constants import BLUE, DARK, GRAY, GREEN, ORANGE, PANEL, RED, WHITE
from notedrop.scales import INSTRUMENTS, NOTES, SCALES
from notedrop.segment import Segment
from notedrop.timestep import FixedStep
from notedrop_client.pointer import DOWN, MOVE, UP, pointer_from_event
from notedrop_client.share import share_url
from notedrop_client.ui import Button, Cycler, Slider

logger = logging.getLogger(__name__)

LINE, DROPPER = "line", "dropper"


class Screen:
    name = "base"
    def __init__(self, app): self.app = app
    def on_enter(self, **kwargs): pass
    def on_exit(self): pass
    def handle_event(self, event): pass
    def update(self, dt): pass
    def draw(self, surface): pass


# -------------------- Intro --------------------
class IntroScreen(Screen):
    name = "intro"
    def __init__(self, app):
        super().__init__(app)
        w, h = app.screen.get_size()
        self.title_font = pygame.font.SysFont(None, 48)
        self.small_font = pygame.font.SysFont(None, 26)
        self.start_btn = Button((w//2 - 110, h//2 + 70, 220, 55), "Get started", self.small_font, BLUE, WHITE)

    def handle_event(self, event):
        if self.start_btn.is_clicked(event):
            # first user gesture, audio may start now
            self.app.sampler.initialize()
            self.app.change_screen("board")

    def draw(self, surface):
        w, h = surface.get_size()
        surface.fill(DARK)
        title = self.title_font.render("Welcome to Notedrop!", True, WHITE)
        surface.blit(title, title.get_rect(center=(w//2, h//2 - 80)))

        lines = [
            "Click and drag to draw lines",
            "Select tools and play with settings on the left",
        ]
        for i, line in enumerate(lines):
            txt = self.small_font.render(line, True, GRAY)
            surface.blit(txt, txt.get_rect(center=(w//2, h//2 - 20 + i * 30)))

        self.start_btn.draw(surface)


# -------------------- Board --------------------
class BoardScreen(Screen):
    name = "board"
    def __init__(self, app):
        super().__init__(app)
        self.small_font = pygame.font.SysFont(None, 20)
        self.clock = FixedStep()

        self.tool = LINE
        self.pending = None   # segment being drawn
        self.msg = ""
        self.msg_time = 0.0

        x, bw, bh = 6, app.panel_w - 12, 40
        self.line_btn = Button((x, 10, bw, bh), "Line", self.small_font, BLUE, WHITE)
        self.dropper_btn = Button((x, 56, bw, bh), "Drop", self.small_font, BLUE, WHITE)
        self.undo_btn = Button((x, 122, bw, bh), "Undo", self.small_font, ORANGE, DARK)
        self.save_btn = Button((x, 168, bw, bh), "Save", self.small_font, GREEN, WHITE)
        self.clear_btn = Button((x, 214, bw, bh), "Clear", self.small_font, RED, WHITE)
        self.settings_btn = Button((x, 280, bw, bh), "Opts", self.small_font, GRAY, WHITE)

    def on_enter(self, **kwargs):
        self.clock.reset()

    @property
    def sim(self):
        return self.app.sim

    def _flash(self, msg):
        self.msg = msg
        self.msg_time = 3.0

    def save(self):
        url = share_url(self.sim.save_token())
        self.app.last_share_url = url
        logger.info(f"Share link: {url}")
        self._flash("Share link written to the log")

    def handle_event(self, event):
        if self.line_btn.is_clicked(event):
            self.tool = LINE
            return
        if self.dropper_btn.is_clicked(event):
            self.tool = DROPPER
            return
        if self.undo_btn.is_clicked(event):
            self.sim.request_undo()
            return
        if self.save_btn.is_clicked(event):
            self.save()
            return
        if self.clear_btn.is_clicked(event):
            self.sim.clear_board()
            return
        if self.settings_btn.is_clicked(event):
            self.app.change_screen("settings")
            return

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_z and event.mod & pygame.KMOD_CTRL:
                self.sim.request_undo()
            elif event.key == pygame.K_l:
                self.tool = LINE
            elif event.key == pygame.K_d:
                self.tool = DROPPER
            return

        p = pointer_from_event(event, self.app.screen.get_size())
        if p is None:
            return
        pos = self.app.renderer.translate_pointer_to_canvas(*p.position())

        if p.phase == DOWN:
            if pos.x < 0:
                return   # panel
            if self.tool == LINE:
                self.pending = Segment(pos, pos)
            else:
                self.sim.add_dropper(pos)
        elif p.phase == MOVE and self.pending is not None:
            self.pending = Segment(self.pending.start, pos)
        elif p.phase == UP and self.pending is not None:
            self.sim.add_line(self.pending.start, pos)
            self.pending = None
            self.app.sampler.initialize()

    def update(self, dt):
        for _ in range(self.clock.advance(dt * 1000.0)):
            self.sim.update(self.clock.step_ms)

        if self.msg_time > 0:
            self.msg_time -= dt
            if self.msg_time <= 0:
                self.msg = ""

    def draw(self, surface):
        self.app.renderer.draw_board(self.sim.board, self.pending)

        panel = pygame.Rect(0, 0, self.app.panel_w, surface.get_height())
        pygame.draw.rect(surface, PANEL, panel)
        self.line_btn.selected = self.tool == LINE
        self.dropper_btn.selected = self.tool == DROPPER
        for btn in (self.line_btn, self.dropper_btn, self.undo_btn, self.save_btn,
                    self.clear_btn, self.settings_btn):
            btn.draw(surface)

        if self.msg:
            txt = self.small_font.render(self.msg, True, GRAY)
            surface.blit(txt, (self.app.panel_w + 10, 10))


# -------------------- Settings --------------------
class SettingsScreen(Screen):
    name = "settings"
    def __init__(self, app):
        super().__init__(app)
        w, _ = app.screen.get_size()
        self.title_font = pygame.font.SysFont(None, 48)
        self.small_font = pygame.font.SysFont(None, 24)

        params = app.sim.board.params
        audio = app.sim.board.audio
        x, sw = 40, w - 80

        self.gravity = Slider((x, 150, sw, 10), "Gravity", self.small_font, *GRAVITY_RANGE,
                              get=lambda: params.gravity,
                              set=lambda v: setattr(params, "gravity", v))
        self.delay = Slider((x, 220, sw, 10), "Dropper delay", self.small_font, *DROPPER_TIMEOUT_RANGE,
                            get=lambda: params.dropper_timeout,
                            set=lambda v: setattr(params, "dropper_timeout", v))

        self.root = Cycler((x, 270, sw, 44), "Root", self.small_font, NOTES,
                           get=lambda: audio.root, set=lambda v: setattr(audio, "root", v),
                           bg=BLUE, fg=WHITE)
        self.scale = Cycler((x, 324, sw, 44), "Scale", self.small_font, list(SCALES),
                            get=lambda: audio.scale_type, set=lambda v: setattr(audio, "scale_type", v),
                            bg=BLUE, fg=WHITE)
        self.instrument = Cycler((x, 378, sw, 44), "Instrument", self.small_font, INSTRUMENTS,
                                 get=lambda: audio.instrument, set=lambda v: setattr(audio, "instrument", v),
                                 bg=BLUE, fg=WHITE)

        self.reset_btn = Button((x, 452, sw, 44), "Reset", self.small_font, ORANGE, DARK)
        self.done_btn = Button((x, 506, sw, 44), "Done", self.small_font, GREEN, WHITE)

        self.widgets = [self.gravity, self.delay, self.root, self.scale, self.instrument]

    def handle_event(self, event):
        for w in self.widgets:
            w.handle_event(event)

        if self.reset_btn.is_clicked(event):
            self.app.sim.reset_params()
        if self.done_btn.is_clicked(event):
            self.app.change_screen("board")

    def draw(self, surface):
        w, _ = surface.get_size()
        surface.fill(DARK)
        title = self.title_font.render("Options", True, WHITE)
        surface.blit(title, title.get_rect(center=(w//2, 70)))

        for widget in self.widgets:
            widget.draw(surface)
        self.reset_btn.draw(surface)
        self.done_btn.draw(surface)
