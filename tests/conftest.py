# tests/conftest.py
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from notedrop.board import Simulation
from notedrop.collaborators import FixedViewport

WIDTH, HEIGHT = 400, 700


class RecordingSampler:
    def __init__(self):
        self.calls = []

    def play(self, speed, instrument, root, scale_type):
        self.calls.append((speed, instrument, root, scale_type))


@pytest.fixture
def viewport():
    return FixedViewport(WIDTH, HEIGHT)


@pytest.fixture
def sampler():
    return RecordingSampler()


@pytest.fixture
def sim(viewport, sampler):
    s = Simulation(viewport, sampler)
    s.board.params.gravity = 1
    s.board.droppers = []
    return s


def step(sim, times, dt=1):
    for _ in range(times):
        sim.update(dt)
