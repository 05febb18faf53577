"""
Board module for Minesweeper game.

Implements the ground-truth grid: mine placement, neighbor counts
and bounds checking. A Board never changes after construction.
"""
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .cell import MINE
from .errors import InvalidBoardError, InvalidDimensionsError, OutOfBoundsError
from .neighbors import Position, get_neighbors, neighbor_sums


logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for random board generation.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_probability: Chance that each eligible cell is a mine.
        margin: Width of the mine-free frame along the edges.
        seed: Optional seed for reproducible boards.
    """

    width: int = 9
    height: int = 9
    mine_probability: float = 0.12
    margin: int = 0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensionsError("Board dimensions must be positive")
        if not 0.0 <= self.mine_probability <= 1.0:
            raise ValueError("Mine probability must be within [0, 1]")
        if self.margin < 0:
            raise ValueError("Margin cannot be negative")


# Preset difficulty levels (same densities as the classic mine counts)
BEGINNER = BoardConfig(9, 9, 10 / 81)
INTERMEDIATE = BoardConfig(16, 16, 40 / 256)
EXPERT = BoardConfig(30, 16, 99 / 480)

DIFFICULTIES = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


def preset(
    name: str, margin: int = 0, seed: Optional[int] = None
) -> BoardConfig:
    """
    Get a difficulty preset with its own margin and seed.

    Args:
        name: One of "beginner", "intermediate" or "expert".
        margin: Width of the mine-free frame.
        seed: Optional seed for reproducible boards.

    Returns:
        A new configuration with the preset's size and density.

    Raises:
        ValueError: If the name is not a known difficulty.
    """
    if name not in DIFFICULTIES:
        raise ValueError(f"Unknown difficulty: {name}")
    return replace(DIFFICULTIES[name], margin=margin, seed=seed)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper ground truth.

    Every cell holds either a mine (code 9) or the number of mines
    among its in-bounds neighbors (0-8).
    """

    def __init__(self, mines: np.ndarray) -> None:
        """
        Build a board from a boolean mine mask.

        Args:
            mines: 2D boolean array, True where a mine sits.

        Raises:
            InvalidDimensionsError: If the mask is not a non-empty 2D grid.
        """
        mines = np.asarray(mines, dtype=bool)
        if mines.ndim != 2 or mines.shape[0] < 1 or mines.shape[1] < 1:
            raise InvalidDimensionsError("Board dimensions must be positive")

        grid = neighbor_sums(mines).astype(np.int8)
        grid[mines] = MINE
        grid.setflags(write=False)
        mines = mines.copy()
        mines.setflags(write=False)

        self._grid = grid
        self._mines = mines

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def generate(cls, config: BoardConfig) -> "Board":
        """
        Place mines independently at random.

        Each cell outside the safe margin is a mine with probability
        config.mine_probability.

        Args:
            config: Generation settings.

        Returns:
            A new consistent board.
        """
        rng = np.random.default_rng(config.seed)
        mines = rng.random((config.height, config.width)) < config.mine_probability
        if config.margin:
            eligible = np.zeros_like(mines)
            eligible[
                config.margin:config.height - config.margin,
                config.margin:config.width - config.margin,
            ] = True
            mines &= eligible

        board = cls(mines)
        logger.debug(
            "Generated %dx%d board with %d mines",
            board.height, board.width, board.num_mines,
        )
        return board

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """
        Build a board from a parsed grid of codes.

        Args:
            rows: Row lists of integers, 9 = mine, 0-8 = neighbor count.

        Returns:
            Board matching the grid.

        Raises:
            InvalidDimensionsError: If the grid is empty or ragged.
            InvalidBoardError: If a code is out of range or a count
                disagrees with the mines around it.
        """
        if len(rows) == 0 or len(rows[0]) == 0:
            raise InvalidDimensionsError("Board dimensions must be positive")
        width = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != width:
                raise InvalidDimensionsError(
                    f"Row {index} has {len(row)} cells, expected {width}"
                )

        grid = np.array(rows, dtype=np.int16)
        if grid.min() < 0 or grid.max() > MINE:
            raise InvalidBoardError("Cell codes must be within 0-9")

        board = cls(grid == MINE)
        mismatch = np.argwhere(board._grid != grid)
        if len(mismatch):
            row, col = (int(v) for v in mismatch[0])
            raise InvalidBoardError(
                f"Cell ({row}, {col}) says {grid[row, col]} but has "
                f"{board._grid[row, col]} adjacent mines"
            )
        return board

    # ========================================================================
    # Geometry
    # ========================================================================

    @property
    def height(self) -> int:
        return self._grid.shape[0]

    @property
    def width(self) -> int:
        return self._grid.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def check_bounds(self, row: int, col: int) -> None:
        """
        Reject coordinates outside the board.

        Raises:
            OutOfBoundsError: If (row, col) is not on the board.
        """
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.height, self.width)

    def neighbors(self, row: int, col: int) -> Tuple[Position, ...]:
        """In-bounds 8-neighborhood of a cell."""
        self.check_bounds(row, col)
        return get_neighbors(row, col, self.height, self.width)

    # ========================================================================
    # Ground Truth Accessors
    # ========================================================================

    def is_mine(self, row: int, col: int) -> bool:
        self.check_bounds(row, col)
        return bool(self._mines[row, col])

    def count_at(self, row: int, col: int) -> int:
        """
        Get the neighbor mine count of a cell.

        Mines report the code 9.
        """
        self.check_bounds(row, col)
        return int(self._grid[row, col])

    @property
    def num_mines(self) -> int:
        return int(self._mines.sum())

    @property
    def mine_mask(self) -> np.ndarray:
        """Read-only boolean mine mask."""
        return self._mines

    @property
    def codes(self) -> np.ndarray:
        """Read-only grid of codes (9 = mine, 0-8 = count)."""
        return self._grid

    def mine_positions(self) -> List[Position]:
        """All mine coordinates in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self._mines)]

    def to_grid(self) -> List[List[int]]:
        """Grid of codes as nested lists."""
        return self._grid.tolist()

    def __repr__(self) -> str:
        return f"Board({self.height}x{self.width}, mines={self.num_mines})"
