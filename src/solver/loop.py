"""
Solving loop for Minesweeper.

Alternates cheap local deduction with backtracking search until the
board is cleared, a mine is opened, or nothing more can be derived.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional, Sequence, Union

from game import Board, RevealState
from game.neighbors import Position

from .config import SolverConfig
from .deduction import DeductionPass
from .regions import plan_regions, segregate
from .tank import TankSolver


logger = logging.getLogger(__name__)


# ============================================================================
# States and Outcomes
# ============================================================================

class GameState(Enum):
    """Possible states of a solving run."""

    RUNNING = auto()
    WON = auto()
    LOST = auto()
    STUCK = auto()


@dataclass(frozen=True)
class Won:
    """Every safe cell has been opened."""

    steps: int
    elapsed_time: float

    @property
    def state(self) -> GameState:
        return GameState.WON


@dataclass(frozen=True)
class Lost:
    """A mine was opened at (row, col)."""

    row: int
    col: int

    @property
    def state(self) -> GameState:
        return GameState.LOST


@dataclass(frozen=True)
class Stuck:
    """No further progress can be derived from the current view."""

    remaining_closed: int

    @property
    def state(self) -> GameState:
        return GameState.STUCK


SolverOutcome = Union[Won, Lost, Stuck]


@dataclass
class SolverStats:
    """Counters accumulated over a solving run."""

    cycles: int = 0
    deduction_changes: int = 0
    search_rounds: int = 0
    search_changes: int = 0
    regions_searched: int = 0
    assignments_found: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "cycles": self.cycles,
            "deduction_changes": self.deduction_changes,
            "search_rounds": self.search_rounds,
            "search_changes": self.search_changes,
            "regions_searched": self.regions_searched,
            "assignments_found": self.assignments_found,
        }


# ============================================================================
# Solver Loop
# ============================================================================

class SolverLoop:
    """
    State machine driving deduction and search.

    Each cycle runs deduction to its fixpoint. Only when deduction
    made no change are the border regions searched; a search round
    without any change means the run is stuck.
    """

    def __init__(
        self,
        board: Board,
        state: Optional[RevealState] = None,
        config: Optional[SolverConfig] = None,
    ) -> None:
        """
        Initialize the loop.

        Args:
            board: Ground truth.
            state: Existing view of the board. When omitted a fresh
                view is created and, unless disabled in the config,
                every zero cell is opened.
            config: Solver settings.
        """
        self.board = board
        self.config = config or SolverConfig()
        self.stats = SolverStats()

        if state is None:
            state = RevealState(board)
            if self.config.open_zero_cells:
                opened = state.open_zero_cells()
                logger.debug("Opened %d cells from zero counts", opened)
        elif state.board is not board:
            raise ValueError("Reveal state belongs to a different board")
        self.state = state

        self.deduction = DeductionPass(state)
        self.tank = TankSolver(state, max_nodes=self.config.max_search_nodes)
        self._state = GameState.LOST if state.is_lost else GameState.RUNNING

    @property
    def game_state(self) -> GameState:
        """Get current state."""
        return self._state

    def open(self, row: int, col: int) -> Optional[Lost]:
        """
        Open a cell from outside the solver.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Lost outcome if the cell was a mine, otherwise None.
        """
        self.state.reveal(row, col)
        if self.state.is_lost:
            self._state = GameState.LOST
            return self._lost()
        return None

    def run(self) -> SolverOutcome:
        """
        Solve until won, lost or stuck.

        Returns:
            The terminal outcome.

        Raises:
            InternalInconsistencyError: If deduction or search
                contradicts the board.
        """
        start_time = time.time()

        while True:
            if self.state.is_lost:
                self._state = GameState.LOST
                return self._finish(self._lost())

            if self.state.is_solved:
                self._state = GameState.WON
                elapsed = time.time() - start_time
                return self._finish(Won(self.stats.cycles, elapsed))

            limit = self.config.max_cycles
            if limit is not None and self.stats.cycles >= limit:
                logger.warning("Cycle limit of %d reached", limit)
                return self._finish(self._stuck())

            self.stats.cycles += 1
            changes = self.deduction.run()
            self.stats.deduction_changes += changes
            if changes or self.state.is_lost or self.state.is_solved:
                continue

            changes = self._search_round()
            if changes == 0 and not self.state.is_lost:
                return self._finish(self._stuck())

    def _search_round(self) -> int:
        """
        Search every planned region once.

        A whole-board search that runs out of nodes falls back to the
        segregated border regions within the same round.
        """
        self.stats.search_rounds += 1
        plan = plan_regions(self.state, self.config.segregation_threshold)

        changes = 0
        for region in plan.regions:
            if self.state.is_lost:
                break
            changes += self._search_region(region, plan.whole_board)

            result = self.tank.last_result
            if plan.whole_board and result is not None and result.exhausted:
                border = self.state.border_cells()
                regions = segregate(self.state, border)
                logger.info(
                    "Falling back to %d border regions after exhausted "
                    "whole-board search", len(regions),
                )
                for border_region in regions:
                    if self.state.is_lost:
                        break
                    changes += self._search_region(border_region, False)

        self.stats.search_changes += changes
        return changes

    def _search_region(
        self, region: Sequence[Position], whole_board: bool
    ) -> int:
        self.stats.regions_searched += 1
        changes = self.tank.solve(region, whole_board=whole_board)
        if self.tank.last_result is not None:
            self.stats.assignments_found += len(
                self.tank.last_result.assignments
            )
        return changes

    def _lost(self) -> Lost:
        row, col = self.state.lost_at
        return Lost(row, col)

    def _stuck(self) -> Stuck:
        self._state = GameState.STUCK
        return Stuck(self.state.closed_count)

    def _finish(self, outcome: SolverOutcome) -> SolverOutcome:
        logger.info("Solver finished: %s", outcome)
        return outcome


def solve(
    board: Board, config: Optional[SolverConfig] = None
) -> SolverOutcome:
    """Solve a board from a fresh view."""
    return SolverLoop(board, config=config).run()
