# notedrop/board.py
import logging
import queue
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pygame.math import Vector2 as Vec2

from notedrop.collaborators import Sampler, SilentSampler, Viewport
from notedrop.config import AudioSelection, SimulationParams
from notedrop.entities import Ball, Dropper
from notedrop.history import UndoHistory, capture
from notedrop.segment import Segment
from notedrop.statecodec import load_token, save_token
from notedrop.vec import clamp_to_bounds, copy, is_outside, magnitude

logger = logging.getLogger(__name__)

ORIGIN = Vec2(0, 0)


# ---------------- Board state ----------------
@dataclass
class Board:
    """Everything the simulation reads and writes, in one place."""
    lines: List[Segment] = field(default_factory=list)
    droppers: List[Dropper] = field(default_factory=list)
    balls: List[Ball] = field(default_factory=list)

    params: SimulationParams = field(default_factory=SimulationParams)
    audio: AudioSelection = field(default_factory=AudioSelection)

    history: UndoHistory = field(default_factory=UndoHistory)
    # edits that must wait for the end of the current frame
    inbox: "queue.Queue[Dict[str, Any]]" = field(default_factory=queue.Queue)

    def poll(self) -> List[Dict[str, Any]]:
        msgs: List[Dict[str, Any]] = []
        while True:
            try:
                msgs.append(self.inbox.get_nowait())
            except queue.Empty:
                break
        return msgs


# ---------------- Simulation ----------------
class Simulation:
    """
    Advances a Board in fixed time steps.

    Units are px and ms throughout: vel is px/ms, acc is px/ms^2.
    The viewport supplies the canvas bounds and the sampler is told about
    every bounce; both are injected so tests can swap them out.
    """

    def __init__(self, viewport: Viewport, sampler: Optional[Sampler] = None,
                 board: Optional[Board] = None):
        self.viewport = viewport
        self.sampler: Sampler = sampler or SilentSampler()
        if board is None:
            board = Board()
            self._spawn(board)
        self.board = board

    def size(self) -> Vec2:
        return self.viewport.size()

    # ---------------- Layout ----------------
    def _spawn(self, board: Board):
        size = self.size()
        board.lines = []
        board.droppers = [Dropper(Vec2(size.x / 2, size.y / 4), 0.0)]
        board.balls = []

    # ---------------- Physics update ----------------
    def update(self, time_step_ms: float):
        b = self.board
        dt = float(time_step_ms)

        # droppers
        for d in b.droppers:
            d.timeout_ms -= dt
            if d.timeout_ms > 0:
                continue
            d.timeout_ms = b.params.dropper_timeout
            b.balls.append(Ball(copy(d.pos), Vec2(0, 0), Vec2(0, 0)))

        gravity = b.params.gravity_per_ms2
        upper = self.size()

        alive: List[Ball] = []
        for ball in b.balls:
            # semi-implicit euler
            ball.acc = Vec2(0, gravity)
            ball.vel = ball.vel + ball.acc * dt
            next_pos = ball.pos + ball.vel * dt

            # a ball may bounce off several lines in one step
            for l in b.lines:
                if not l.hit(ball.pos, next_pos):
                    continue
                ball.vel = l.bounce(ball.vel)
                next_pos = ball.pos + ball.vel * dt
                self._notify_bounce(magnitude(ball.vel))

            if is_outside(next_pos, ORIGIN, upper):
                continue
            ball.pos = next_pos
            alive.append(ball)

        b.balls = alive

        # only now is it safe to swap geometry
        self._apply_deferred()

    def _notify_bounce(self, speed: float):
        a = self.board.audio
        try:
            self.sampler.play(speed, a.instrument, a.root, a.scale_type)
        except Exception:
            # sound is best effort, physics carries on
            logger.debug("Bounce sound failed", exc_info=True)

    def _apply_deferred(self):
        for msg in self.board.poll():
            t = msg.get("type")
            if t == "UNDO":
                self.board.history.undo(self.board)
            elif t == "LOAD":
                if not load_token(self.board, msg.get("token", ""), self.size()):
                    logger.info("Ignoring shared board that could not be decoded.")
            else:
                logger.warning(f"Unknown board edit: {t!r}")

    # ---------------- Edits ----------------
    def add_line(self, start: Vec2, end: Vec2) -> Optional[Segment]:
        end = clamp_to_bounds(end, self.size())
        line = Segment(start, end)
        if line.is_degenerate:
            return None
        self.snapshot()
        self.board.lines.append(line)
        logger.debug(f"Added line {line}")
        return line

    def add_dropper(self, pos: Vec2) -> Dropper:
        self.snapshot()
        d = Dropper(copy(pos), 0.0)
        self.board.droppers.append(d)
        return d

    def clear_board(self):
        self.snapshot()
        self._spawn(self.board)
        logger.info("Board cleared.")

    def snapshot(self):
        self.board.history.push(capture(self.board))

    def request_undo(self):
        """Undo the last edit at the end of the next update."""
        self.board.inbox.put({"type": "UNDO"})

    def request_load(self, token: str):
        self.board.inbox.put({"type": "LOAD", "token": token})

    def reset_params(self):
        self.board.params.reset()

    # ---------------- Sharing ----------------
    def save_token(self) -> str:
        return save_token(self.board, self.size())

    def load_token(self, token: str) -> bool:
        return load_token(self.board, token, self.size())
