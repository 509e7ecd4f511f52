# notedrop/config.py
from dataclasses import dataclass

from notedrop.constants import TIME_STEP_MS

DEFAULT_GRAVITY = 1.5            # px/s^2
DEFAULT_DROPPER_TIMEOUT = 800.0  # ms

# control panel slider ranges: (min, max, step)
GRAVITY_RANGE = (0.01, 3.0, 0.01)
DROPPER_TIMEOUT_RANGE = (100.0, 2000.0, 10.0)


@dataclass(frozen=True)
class BoardConfig:
    ball_r: int = 4
    dropper_r: int = 4
    endpoint_r: int = 2

    time_step_ms: float = TIME_STEP_MS
    max_frame_ms: float = 250.0    # clamp on catch-up after a stall


CFG = BoardConfig()


@dataclass
class SimulationParams:
    """User tunable, applies to every ball from the next update."""
    gravity: float = DEFAULT_GRAVITY
    dropper_timeout: float = DEFAULT_DROPPER_TIMEOUT

    @property
    def gravity_per_ms2(self) -> float:
        # update() steps in ms
        return self.gravity / 1000.0

    def reset(self):
        self.gravity = DEFAULT_GRAVITY
        self.dropper_timeout = DEFAULT_DROPPER_TIMEOUT


@dataclass
class AudioSelection:
    instrument: str = "marimba"
    root: str = "C"
    scale_type: str = "major"
