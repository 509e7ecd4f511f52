# notedrop/statecodec.py
"""
Shareable board state.

A board is flattened to a JSON object and carried around as one base64
token (e.g. in a ``?state=`` query parameter)::

    {
      "gravity": 1.5, "dropperTimeout": 800,
      "root": "C", "scaleType": "major", "instrument": "marimba",
      "size": {"x": 480, "y": 800},
      "lines": [{"from": {"x": 0, "y": 10}, "to": {"x": 30, "y": 10}}],
      "droppers": [{"pos": {"x": 240, "y": 200}, "timeout": 0}]
    }

Bad tokens never raise: decoding hands back None and loading leaves the
board as it was.
"""
import base64
import binascii
import json
import logging
import math
from typing import TYPE_CHECKING, Any, Dict, Optional

from pygame.math import Vector2 as Vec2

from notedrop.entities import Dropper
from notedrop.scales import INSTRUMENTS, NOTES, SCALES
from notedrop.segment import Segment
from notedrop.vec import from_dict, to_dict

if TYPE_CHECKING:
    from notedrop.board import Board

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number in state: {name}")


def _finite(x: Any) -> float:
    v = float(x)
    if not math.isfinite(v):
        raise ValueError(f"non-finite number in state: {v}")
    return v


def _finite_vec(v: Vec2) -> Vec2:
    _finite(v.x)
    _finite(v.y)
    return v


# ---------------- Token ----------------
def encode_token(data: Dict[str, Any]) -> str:
    """Encode dict as base64 of compact JSON."""
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode a token -> dict, or None if invalid."""
    try:
        s = (token or "").strip()
        if not s:
            return None
        raw = base64.b64decode(s, validate=True)
        obj = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
        return obj if isinstance(obj, dict) else None
    except (binascii.Error, ValueError, RecursionError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors;
        # deeply nested arrays exhaust the recursion limit
        logger.debug(f"Discarding malformed state token: {e}")
        return None


# ---------------- Board <-> dict ----------------
def serialize(board: "Board", size: Vec2) -> Dict[str, Any]:
    return {
        "gravity": float(board.params.gravity),
        "dropperTimeout": float(board.params.dropper_timeout),
        "root": board.audio.root,
        "scaleType": board.audio.scale_type,
        "instrument": board.audio.instrument,
        "size": to_dict(size),
        "lines": [l.to_dict() for l in board.lines],
        "droppers": [d.to_dict() for d in board.droppers],
    }


def deserialize(board: "Board", data: Dict[str, Any], size: Vec2) -> bool:
    """
    Load a serialised board.

    Everything is parsed before anything is applied; on any missing or bad
    field the board is left untouched and False is returned. Boards saved
    on a viewport of a different width are re-centred horizontally.
    """
    try:
        gravity = _finite(data["gravity"])
        dropper_timeout = _finite(data["dropperTimeout"])
        root = str(data["root"])
        scale_type = str(data["scaleType"])
        instrument = str(data["instrument"])
        stored = _finite_vec(from_dict(data["size"]))

        x_offset = (size.x - stored.x) / 2
        shift = Vec2(x_offset, 0)

        lines = []
        for item in data["lines"]:
            l = Segment.from_dict(item)
            lines.append(Segment(_finite_vec(l.start + shift), _finite_vec(l.end + shift)))

        droppers = []
        for item in data["droppers"]:
            d = Dropper.from_dict(item)
            droppers.append(Dropper(_finite_vec(d.pos + shift), _finite(d.timeout_ms)))
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        logger.debug(f"Discarding malformed board state: {e!r}")
        return False

    if root not in NOTES or scale_type not in SCALES or instrument not in INSTRUMENTS:
        logger.debug(f"Discarding board state with unknown audio selection: {root}/{scale_type}/{instrument}")
        return False

    board.lines = lines
    board.droppers = droppers
    board.params.gravity = gravity
    board.params.dropper_timeout = dropper_timeout
    board.audio.root = root
    board.audio.scale_type = scale_type
    board.audio.instrument = instrument
    logger.info(f"Loaded board with {len(lines)} lines and {len(droppers)} droppers.")
    return True


def save_token(board: "Board", size: Vec2) -> str:
    return encode_token(serialize(board, size))


def load_token(board: "Board", token: str, size: Vec2) -> bool:
    data = decode_token(token)
    if data is None:
        return False
    return deserialize(board, data, size)
