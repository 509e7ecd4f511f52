# notedrop_client/main.py
import logging
import os
import sys

import pygame

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from notedrop.board import Simulation
from notedrop.constants import APP_TITLE, WIDTH, HEIGHT, FPS
from notedrop_client.renderer import Renderer
from notedrop_client.sampler import NoteSampler
from notedrop_client.screens import IntroScreen, BoardScreen, SettingsScreen
from notedrop_client.share import token_from_argument

logger = logging.getLogger(__name__)

PANEL_W = 72


class App:
    def __init__(self, initial_token=None):
        pygame.init()
        pygame.display.set_caption(APP_TITLE)
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        self.clock = pygame.time.Clock()

        self.panel_w = PANEL_W
        canvas = self.screen.subsurface(pygame.Rect(PANEL_W, 0, WIDTH - PANEL_W, HEIGHT))
        self.renderer = Renderer(canvas, offset=(PANEL_W, 0))
        self.sampler = NoteSampler()
        self.sim = Simulation(self.renderer, self.sampler)
        self.last_share_url = None

        if initial_token:
            if self.sim.load_token(initial_token):
                logger.info("Loaded shared board.")
            else:
                logger.info("Shared board could not be decoded, starting empty.")

        self.screens = {
            "intro": IntroScreen(self),
            "board": BoardScreen(self),
            "settings": SettingsScreen(self),
        }

        self.current = None
        self.running = True
        self.change_screen("intro")

    def change_screen(self, name, **kwargs):
        if self.current:
            self.current.on_exit()
        self.current = self.screens[name]
        self.current.on_enter(**kwargs)

    def handle_global_event(self, event):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.type == pygame.WINDOWFOCUSLOST:
            self.sampler.mute(True)
        elif event.type == pygame.WINDOWFOCUSGAINED:
            self.sampler.mute(False)

    def run(self):
        try:
            while self.running:
                dt = self.clock.tick(FPS) / 1000.0

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    self.handle_global_event(event)
                    self.current.handle_event(event)

                self.current.update(dt)

                self.current.draw(self.screen)
                pygame.display.flip()

        finally:
            self.sampler.close()
            pygame.quit()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=os.getenv("NOTEDROP_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Usage:
    #   python notedrop_client/main.py "http://localhost:5173/?state=..."
    #   NOTEDROP_STATE=<token> python notedrop_client/main.py
    token = token_from_argument(argv[0] if argv else os.getenv("NOTEDROP_STATE"))
    App(token).run()


if __name__ == "__main__":
    main()
