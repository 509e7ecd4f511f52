# notedrop/scales.py
"""
Maps bounce speed to a note.

Scales span three octaves. A bounce speed is clamped to [MIN_SPEED,
MAX_SPEED] and split into equal steps, one per note, so faster balls play
higher notes.
"""
from typing import Dict, List, Tuple

INSTRUMENTS: Tuple[str, ...] = ("marimba", "guitar")

NOTES: Tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

SCALES: Dict[str, Tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 11),
    "pentatonic_major": (0, 2, 4, 7, 9),
    "pentatonic_minor": (0, 3, 5, 7, 10),
}

OCTAVES: Tuple[int, ...] = (3, 4, 5)

# px/ms
MIN_SPEED = 0.0
MAX_SPEED = 2.0


def scale_notes(root: str, scale_type: str) -> List[str]:
    """Note names with octave, e.g. ['C3', 'D3', ..., 'B5']."""
    if root not in NOTES:
        raise ValueError(f"invalid root: {root}")
    if scale_type not in SCALES:
        raise ValueError(f"invalid scale: {scale_type}")

    root_index = NOTES.index(root)
    scale = [NOTES[(root_index + offset) % len(NOTES)] for offset in SCALES[scale_type]]
    return [f"{note}{octave}" for octave in OCTAVES for note in scale]


def note_for_speed(speed: float, root: str, scale_type: str) -> str:
    scale = scale_notes(root, scale_type)
    step = (MAX_SPEED - MIN_SPEED) / (len(scale) - 1)
    resolved = max(MIN_SPEED, min(speed, MAX_SPEED)) - MIN_SPEED
    return scale[min(int(resolved / step), len(scale) - 1)]


def note_frequency(note: str) -> float:
    """Equal temperament frequency of a name like 'C#4' (A4 = 440 Hz)."""
    name, octave = note[:-1], int(note[-1])
    semitones = NOTES.index(name) - NOTES.index("A") + (octave - 4) * 12
    return 440.0 * 2 ** (semitones / 12)
