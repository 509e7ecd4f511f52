# notedrop/timestep.py
from notedrop.config import CFG


class FixedStep:
    """
    Fixed timestep accumulator.

    Wall clock frame time is added up and handed out in whole steps of
    ``step_ms``; the remainder carries over to the next frame. A segment
    crossing is only detected within one step, so steps must stay small
    whatever the frame rate.
    """

    def __init__(self, step_ms: float = CFG.time_step_ms, max_frame_ms: float = CFG.max_frame_ms):
        if step_ms <= 0:
            raise ValueError("step_ms must be positive")
        self.step_ms = float(step_ms)
        self.max_frame_ms = float(max_frame_ms)
        self.accumulated = 0.0

    def advance(self, elapsed_ms: float) -> int:
        """Add elapsed time and return how many steps are due."""
        if elapsed_ms > 0:
            self.accumulated += min(float(elapsed_ms), self.max_frame_ms)
        steps = int(self.accumulated // self.step_ms)
        self.accumulated -= steps * self.step_ms
        return steps

    def reset(self):
        self.accumulated = 0.0
