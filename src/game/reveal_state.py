"""
Reveal state module for Minesweeper game.

Holds the player's view of a board (closed/flagged/revealed cells)
and the only operations allowed to change it: flood reveal and flag.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

import numpy as np

from .board import Board
from .cell import CLOSED, FLAGGED, Visibility
from .errors import InternalInconsistencyError
from .neighbors import Position
from .registry import MineRegistry


logger = logging.getLogger(__name__)


# ============================================================================
# Results
# ============================================================================

@dataclass
class RevealResult:
    """
    Outcome of a single reveal call.

    Attributes:
        opened: Cells that went from closed to revealed, in opening order.
        mine: Position of the mine that was opened, if any.
    """

    opened: List[Position] = field(default_factory=list)
    mine: Optional[Position] = None

    @property
    def hit_mine(self) -> bool:
        return self.mine is not None

    def __len__(self) -> int:
        return len(self.opened)


# ============================================================================
# Reveal State
# ============================================================================

class RevealState:
    """
    The game view of a board.

    Observation codes:
        -1 = closed
        -2 = flagged
        0-8 = revealed with adjacent count
    """

    def __init__(self, board: Board) -> None:
        """
        Create a fully closed view of a board.

        Args:
            board: Ground truth consulted by reveal and flag.
        """
        self.board = board
        self.registry = MineRegistry.from_board(board)
        self._view = np.full(board.shape, CLOSED, dtype=np.int8)
        self._lost_at: Optional[Position] = None

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Open a cell, flooding outward from zero counts.

        Flagged and already revealed cells are left alone. Opening a
        mine records the loss and changes nothing else. Once lost,
        every reveal is a no-op.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The cells opened and the mine hit, if any.

        Raises:
            OutOfBoundsError: If the position is not on the board.
        """
        self.board.check_bounds(row, col)
        result = RevealResult()
        if self.is_lost or self._view[row, col] != CLOSED:
            return result

        if self.board.is_mine(row, col):
            self._lost_at = (row, col)
            result.mine = (row, col)
            logger.info("Opened a mine at %s", (row, col))
            return result

        frontier: Deque[Position] = deque([(row, col)])
        while frontier:
            cell_row, cell_col = frontier.popleft()
            # The closed -> revealed transition is the visited guard
            if self._view[cell_row, cell_col] != CLOSED:
                continue

            count = self.board.count_at(cell_row, cell_col)
            self._view[cell_row, cell_col] = count
            result.opened.append((cell_row, cell_col))

            if count == 0:
                for neighbor in self.board.neighbors(cell_row, cell_col):
                    if self._view[neighbor] == CLOSED:
                        frontier.append(neighbor)

        logger.debug("Revealed %d cells from %s", len(result), (row, col))
        return result

    def open_zero_cells(self) -> int:
        """
        Reveal every cell whose count is zero.

        Gives the solver a starting frontier without guessing.

        Returns:
            Number of cells opened.
        """
        opened = 0
        for row, col in np.argwhere(self.board.codes == 0):
            opened += len(self.reveal(int(row), int(col)))
        return opened

    def flag(self, row: int, col: int) -> bool:
        """
        Flag a closed cell as a mine.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if a flag was placed, False if the cell was not closed
            or the game is lost.

        Raises:
            OutOfBoundsError: If the position is not on the board.
            InternalInconsistencyError: If the cell is not a mine.
        """
        self.board.check_bounds(row, col)
        if self.is_lost or self._view[row, col] != CLOSED:
            return False
        if not self.registry.confirm((row, col)):
            raise InternalInconsistencyError("Flagged a safe cell", (row, col))
        self._view[row, col] = FLAGGED
        return True

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def is_lost(self) -> bool:
        return self._lost_at is not None

    @property
    def lost_at(self) -> Optional[Position]:
        """Mine that was opened, or None."""
        return self._lost_at

    @property
    def closed_count(self) -> int:
        """Number of closed (unflagged, unrevealed) cells."""
        return int(np.count_nonzero(self._view == CLOSED))

    @property
    def is_solved(self) -> bool:
        """True when no closed cell remains (flags may remain)."""
        return self.closed_count == 0

    def visibility_of(self, row: int, col: int) -> Visibility:
        """Get what the player sees at a cell."""
        self.board.check_bounds(row, col)
        return Visibility.from_observation(self._view[row, col])

    def code_at(self, row: int, col: int) -> int:
        """Observation code of a cell (-1, -2 or 0-8)."""
        self.board.check_bounds(row, col)
        return int(self._view[row, col])

    def is_closed(self, row: int, col: int) -> bool:
        return self.code_at(row, col) == CLOSED

    def is_flagged(self, row: int, col: int) -> bool:
        return self.code_at(row, col) == FLAGGED

    def is_revealed(self, row: int, col: int) -> bool:
        return self.code_at(row, col) >= 0

    def get_observation(self) -> np.ndarray:
        """
        Get the view as a numpy array.

        Returns:
            Copy of the int8 observation grid.
        """
        return self._view.copy()

    def closed_cells(self) -> List[Position]:
        """Closed cells in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self._view == CLOSED)]

    def revealed_cells(self) -> List[Position]:
        """Revealed cells in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self._view >= 0)]

    def border_cells(self) -> List[Position]:
        """
        Closed cells touching at least one revealed cell.

        Returns:
            Border positions in row-major order.
        """
        border = []
        for row, col in self.closed_cells():
            if any(
                self._view[neighbor] >= 0
                for neighbor in self.board.neighbors(row, col)
            ):
                border.append((row, col))
        return border

    def __repr__(self) -> str:
        flagged = int(np.count_nonzero(self._view == FLAGGED))
        return (
            f"RevealState({self.height}x{self.width}, "
            f"closed={self.closed_count}, flagged={flagged})"
        )
