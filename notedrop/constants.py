# notedrop/constants.py

APP_TITLE = "Notedrop"
WIDTH, HEIGHT = 480, 800
FPS = 60

# fixed physics step, see notedrop/timestep.py
TIME_STEP_MS = 1000 / 240

BLACK = (0, 0, 0)
WHITE = (245, 245, 245)
GRAY = (120, 120, 120)
DARK = (30, 30, 30)
PANEL = (24, 24, 28)
BLUE = (70, 140, 255)
GREEN = (60, 200, 120)
ORANGE = (255, 170, 70)
RED = (240, 80, 80)
