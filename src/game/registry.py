"""
Mine registry for flag validation.

Tracks which mines are still waiting for a flag.
"""
import logging
from typing import Iterable, List

from .neighbors import Position


logger = logging.getLogger(__name__)


class MineRegistry:
    """
    Set of mine coordinates ordered row-major.

    The pending set only shrinks: confirming a flag removes a mine,
    nothing ever adds one back.
    """

    def __init__(self, mines: Iterable[Position]) -> None:
        self._pending = set((int(r), int(c)) for r, c in mines)
        self._total = len(self._pending)

    @classmethod
    def from_board(cls, board) -> "MineRegistry":
        return cls(board.mine_positions())

    @property
    def total(self) -> int:
        """Number of mines on the board."""
        return self._total

    @property
    def remaining(self) -> int:
        """Number of mines not yet flagged."""
        return len(self._pending)

    @property
    def all_flagged(self) -> bool:
        return not self._pending

    def pending(self) -> List[Position]:
        """Unflagged mines in row-major order."""
        return sorted(self._pending)

    def __contains__(self, position: Position) -> bool:
        return position in self._pending

    def confirm(self, position: Position) -> bool:
        """
        Check a flag placement and record it if correct.

        Args:
            position: (row, col) of the new flag.

        Returns:
            True if a pending mine sits there, False otherwise.
        """
        if position not in self._pending:
            return False
        self._pending.remove(position)
        logger.debug(
            "Confirmed mine at %s; %d mines remaining", position, self.remaining
        )
        return True
