# notedrop_client/sampler.py
import logging
from typing import Dict, Tuple

import numpy as np
import pygame

from notedrop.scales import INSTRUMENTS, note_for_speed, note_frequency

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
NOTE_SECONDS = 1.0
VOLUME = 0.3


# ---------------- Synthesis ----------------
def _envelope(n_samples: int, attack: float, decay: float) -> np.ndarray:
    t = np.arange(n_samples, dtype=np.float32) / SAMPLE_RATE
    env = np.minimum(1.0, t / attack) if attack > 0 else np.ones(n_samples, dtype=np.float32)
    return env * np.exp(-t / decay)


def marimba_wave(freq: float, duration: float = NOTE_SECONDS) -> np.ndarray:
    """Struck bar: fundamental plus a fast fading fourth harmonic."""
    n = int(SAMPLE_RATE * duration)
    t = np.arange(n, dtype=np.float32) / SAMPLE_RATE
    body = np.sin(2 * np.pi * freq * t) * _envelope(n, 0.002, 0.35)
    click = 0.4 * np.sin(2 * np.pi * freq * 4 * t) * _envelope(n, 0.001, 0.03)
    return (body + click).astype(np.float32)


def guitar_wave(freq: float, duration: float = NOTE_SECONDS, seed: int = 0) -> np.ndarray:
    """Plucked string via Karplus-Strong."""
    n = int(SAMPLE_RATE * duration)
    period = max(2, int(SAMPLE_RATE / freq))
    rng = np.random.RandomState(seed)
    buf = rng.uniform(-1, 1, period).astype(np.float32)
    blocks = []
    # one averaging pass per period, a block at a time
    for _ in range(n // period + 1):
        blocks.append(buf)
        buf = 0.996 * 0.5 * (buf + np.roll(buf, -1))
    out = np.concatenate(blocks)[:n]
    return out * _envelope(n, 0.001, 0.8)


WAVES = {
    "marimba": marimba_wave,
    "guitar": guitar_wave,
}


def to_stereo_int16(wave: np.ndarray, volume: float = VOLUME) -> np.ndarray:
    peak = float(np.max(np.abs(wave))) or 1.0
    mono = (wave / peak * volume * 32767).astype(np.int16)
    return np.column_stack((mono, mono))


# ---------------- Sampler ----------------
class NoteSampler:
    """
    Plays a note from the active scale for every bounce.

    Faster bounces play higher notes. Playing is fire and forget; when no
    audio device could be opened the sampler stays silent.
    """

    def __init__(self):
        self.ready = False
        self.muted = False
        self._sounds: Dict[Tuple[str, str], "pygame.mixer.Sound"] = {}

    def initialize(self) -> bool:
        if self.ready:
            return True
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            pygame.mixer.set_num_channels(32)
        except pygame.error as e:
            logger.warning(f"Audio unavailable, running silent: {e}")
            return False
        self.ready = True
        logger.info("Audio initialised.")
        return True

    def _sound(self, instrument: str, note: str) -> "pygame.mixer.Sound":
        key = (instrument, note)
        snd = self._sounds.get(key)
        if snd is None:
            wave = WAVES[instrument](note_frequency(note))
            snd = pygame.sndarray.make_sound(to_stereo_int16(wave))
            self._sounds[key] = snd
        return snd

    def play(self, speed: float, instrument: str, root: str, scale_type: str):
        if not self.ready or self.muted:
            return
        if instrument not in INSTRUMENTS:
            raise ValueError(f"invalid instrument: {instrument}")
        note = note_for_speed(speed, root, scale_type)
        self._sound(instrument, note).play()

    def mute(self, toggle: bool):
        self.muted = bool(toggle)
        if self.ready:
            if toggle:
                pygame.mixer.pause()
            else:
                pygame.mixer.unpause()

    def close(self):
        if self.ready:
            pygame.mixer.quit()
            self.ready = False
            self._sounds.clear()
