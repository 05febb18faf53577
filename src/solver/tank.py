"""
Backtracking ("tank") search over a border region.

Enumerates every mine/safe labeling of a region that is consistent
with all revealed numbers, then acts on the cells that have the same
label in every consistent labeling.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from game import InternalInconsistencyError, RevealState
from game.cell import FLAGGED
from game.neighbors import Position, neighbor_sums


logger = logging.getLogger(__name__)


Assignment = Tuple[bool, ...]


class _BudgetExhausted(Exception):
    """Raised inside the recursion when the node budget runs out."""


# ============================================================================
# Search Result
# ============================================================================

@dataclass
class SearchResult:
    """
    Everything one region search produced.

    Attributes:
        region: Cells searched, in labeling order.
        assignments: Consistent labelings, True = mine.
        nodes: Recursion nodes visited.
        labelings_covered: Labelings accounted for, either reached as
            leaves or cut off by pruning. Equals 2 ** len(region) for a
            finished search.
        exhausted: True if the node budget ran out.
    """

    region: List[Position] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)
    nodes: int = 0
    labelings_covered: int = 0
    exhausted: bool = False

    def certain_mines(self) -> List[Position]:
        """Cells that are a mine in every assignment."""
        if not self.assignments:
            return []
        return [
            cell for index, cell in enumerate(self.region)
            if all(assignment[index] for assignment in self.assignments)
        ]

    def certain_safe(self) -> List[Position]:
        """Cells that are safe in every assignment."""
        if not self.assignments:
            return []
        return [
            cell for index, cell in enumerate(self.region)
            if not any(assignment[index] for assignment in self.assignments)
        ]


# ============================================================================
# Tank Solver
# ============================================================================

class TankSolver:
    """
    Exhaustive backtracking over one region at a time.

    The trial labeling covers the whole grid: flags count as mines,
    revealed cells as safe. Each region cell is labeled mine, then
    safe, and the label is undone on the way back up. Before going
    deeper every revealed number on the grid is checked:

        - its neighbors not yet known safe must be able to hold its count
        - its neighbors labeled mine must not exceed its count

    and the total number of mines may never exceed the board's.
    """

    def __init__(
        self, state: RevealState, max_nodes: Optional[int] = None
    ) -> None:
        """
        Initialize the solver.

        Args:
            state: Game view to read and update.
            max_nodes: Node budget per region; None for no limit.
        """
        self.state = state
        self.max_nodes = max_nodes
        self.total_mines = state.registry.total
        self.last_result: Optional[SearchResult] = None

    def enumerate(
        self, region: Sequence[Position], whole_board: bool = False
    ) -> SearchResult:
        """
        Find every consistent labeling of a region.

        Args:
            region: Closed cells to label.
            whole_board: If True the region holds every closed cell and
                a labeling must place exactly the remaining mines.

        Returns:
            The search result; the view is not modified.
        """
        view = self.state.get_observation().astype(np.int16)
        self._counts = view
        self._revealed = view >= 0
        self._slots = neighbor_sums(np.ones(view.shape, dtype=bool))
        self._mines = view == FLAGGED
        self._safe = self._revealed.copy()
        self._mine_count = int(self._mines.sum())

        result = SearchResult(region=list(region))
        try:
            self._search(result, 0, whole_board)
        except _BudgetExhausted:
            result.exhausted = True
        return result

    def solve(
        self, region: Sequence[Position], whole_board: bool = False
    ) -> int:
        """
        Search a region and apply its certain cells.

        Cells that stopped being closed since the region was planned
        are dropped first.

        Args:
            region: Closed cells to label.
            whole_board: Whether the exact mine count applies.

        Returns:
            Number of flags placed plus cells opened.

        Raises:
            InternalInconsistencyError: If no labeling is consistent.
        """
        self.last_result = None
        region = [cell for cell in region if self.state.is_closed(*cell)]
        if not region:
            return 0

        result = self.enumerate(region, whole_board)
        self.last_result = result
        if result.exhausted:
            logger.warning(
                "Search budget of %d nodes exhausted on a %d-cell region",
                self.max_nodes, len(region),
            )
            return 0
        if not result.assignments:
            raise InternalInconsistencyError(
                "No consistent assignment for region", region[0]
            )

        logger.debug(
            "Region of %d cells: %d assignments from %d nodes",
            len(region), len(result.assignments), result.nodes,
        )

        changes = 0
        for cell in result.certain_mines():
            if self.state.flag(*cell):
                changes += 1
        for cell in result.certain_safe():
            opened = self.state.reveal(*cell)
            changes += len(opened)
            if opened.hit_mine:
                break
        return changes

    # ========================================================================
    # Recursion
    # ========================================================================

    def _search(
        self, result: SearchResult, level: int, whole_board: bool
    ) -> None:
        result.nodes += 1
        if self.max_nodes is not None and result.nodes > self.max_nodes:
            raise _BudgetExhausted()

        remaining = len(result.region) - level
        if not self._consistent():
            result.labelings_covered += 2 ** remaining
            return

        if remaining == 0:
            result.labelings_covered += 1
            if whole_board and self._mine_count != self.total_mines:
                return
            result.assignments.append(
                tuple(bool(self._mines[cell]) for cell in result.region)
            )
            return

        cell = result.region[level]

        self._mines[cell] = True
        self._mine_count += 1
        self._search(result, level + 1, whole_board)
        self._mines[cell] = False
        self._mine_count -= 1

        self._safe[cell] = True
        self._search(result, level + 1, whole_board)
        self._safe[cell] = False

    def _consistent(self) -> bool:
        """Check every revealed number against the trial labeling."""
        if self._mine_count > self.total_mines:
            return False

        revealed = self._revealed
        counts = self._counts
        open_slots = self._slots - neighbor_sums(self._safe)
        if np.any(revealed & (open_slots < counts)):
            return False
        mines_around = neighbor_sums(self._mines)
        if np.any(revealed & (mines_around > counts)):
            return False
        return True
