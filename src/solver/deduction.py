"""
Local deduction for Minesweeper.

Applies the two single-cell rules to every revealed number until a
full sweep changes nothing:

    A. count == closed + flagged  ->  every closed neighbor is a mine
    B. count == flagged           ->  every closed neighbor is safe

No search is involved, so whenever a rule fires it is correct.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

from game import RevealState
from game.cell import CLOSED, FLAGGED


logger = logging.getLogger(__name__)


# ============================================================================
# Cell Analysis
# ============================================================================

@dataclass
class CellInfo:
    """Information about a revealed cell for rule checks."""

    row: int
    col: int
    adjacent_mines: int
    closed_neighbors: List[Tuple[int, int]]
    flagged_count: int

    @property
    def remaining_mines(self) -> int:
        """Mines still to be found among closed neighbors."""
        return self.adjacent_mines - self.flagged_count


def get_cell_info(state: RevealState, row: int, col: int) -> CellInfo:
    """Get analysis info for a revealed cell."""
    closed_neighbors = []
    flagged_count = 0
    for neighbor in state.board.neighbors(row, col):
        code = state.code_at(*neighbor)
        if code == CLOSED:
            closed_neighbors.append(neighbor)
        elif code == FLAGGED:
            flagged_count += 1

    return CellInfo(
        row=row,
        col=col,
        adjacent_mines=state.code_at(row, col),
        closed_neighbors=closed_neighbors,
        flagged_count=flagged_count,
    )


# ============================================================================
# Deduction Pass
# ============================================================================

class DeductionPass:
    """
    Repeated sweeps of the single-cell rules over a reveal state.

    Every flag goes through RevealState.flag, so a wrong deduction
    raises InternalInconsistencyError instead of corrupting the view.
    """

    def __init__(self, state: RevealState) -> None:
        self.state = state
        self.sweeps = 0

    def sweep(self) -> int:
        """
        Apply both rules once at every revealed cell.

        Stops early if a reveal opens a mine.

        Returns:
            Number of flags placed plus cells opened.
        """
        self.sweeps += 1
        changes = 0

        for row, col in self.state.revealed_cells():
            if self.state.is_lost:
                break
            changes += self._apply_rules(row, col)

        return changes

    def run(self) -> int:
        """
        Sweep until a sweep makes no change.

        Returns:
            Total number of changes over all sweeps.
        """
        total = 0
        while not self.state.is_lost:
            changes = self.sweep()
            total += changes
            if changes == 0:
                break
        logger.debug("Deduction reached fixpoint with %d changes", total)
        return total

    def _apply_rules(self, row: int, col: int) -> int:
        """Apply rule A then rule B at one revealed cell."""
        info = get_cell_info(self.state, row, col)
        if not info.closed_neighbors:
            return 0

        changes = 0

        # Rule A: every closed neighbor is needed to reach the count
        if info.remaining_mines == len(info.closed_neighbors):
            for neighbor in info.closed_neighbors:
                if self.state.flag(*neighbor):
                    changes += 1
            info = get_cell_info(self.state, row, col)

        # Rule B: the flags already satisfy the count
        if info.closed_neighbors and info.remaining_mines == 0:
            for neighbor in info.closed_neighbors:
                result = self.state.reveal(*neighbor)
                changes += len(result)
                if result.hit_mine:
                    break

        return changes
