# notedrop/history.py
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from notedrop.entities import Dropper
from notedrop.segment import Segment

if TYPE_CHECKING:
    from notedrop.board import Board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UndoPoint:
    """Board geometry at one moment, held in serialised form.

    Nothing in here refers to live board objects, so later edits to the
    board cannot leak into it.
    """
    lines: Tuple[Dict[str, Any], ...]
    droppers: Tuple[Dict[str, Any], ...]

    def segments(self) -> List[Segment]:
        return [Segment.from_dict(d) for d in self.lines]

    def dropper_list(self) -> List[Dropper]:
        return [Dropper.from_dict(d) for d in self.droppers]


def capture(board: "Board") -> UndoPoint:
    return UndoPoint(
        lines=tuple(l.to_dict() for l in board.lines),
        droppers=tuple(d.to_dict() for d in board.droppers),
    )


def restore(board: "Board", point: UndoPoint):
    """Swap in the point's lines and droppers. Balls, parameters and audio stay."""
    board.lines = point.segments()
    board.droppers = point.dropper_list()


class UndoHistory:
    """Unbounded LIFO of undo points. No redo."""

    def __init__(self):
        self._stack: List[UndoPoint] = []

    def push(self, point: UndoPoint):
        self._stack.append(point)

    def pop(self) -> Optional[UndoPoint]:
        if not self._stack:
            return None
        return self._stack.pop()

    def clear(self):
        self._stack.clear()

    def __len__(self):
        return len(self._stack)

    def undo(self, board: "Board") -> bool:
        point = self.pop()
        if point is None:
            logger.debug("Nothing to undo.")
            return False
        restore(board, point)
        logger.debug(f"Restored undo point ({len(self._stack)} left).")
        return True
