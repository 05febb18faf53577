"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Sequence

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, BoardConfig, RevealState


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def make_board() -> Callable[[Sequence[str]], Board]:
    """
    Build boards from pictures.

    Each string is one row; "*" marks a mine, anything else is safe.
    """
    def _make(rows: Sequence[str]) -> Board:
        mines = np.array([[ch == "*" for ch in row] for row in rows])
        return Board(mines)
    return _make


@pytest.fixture
def corner_board(make_board) -> Board:
    """3x3 board with a single mine at (0, 0)."""
    return make_board(["*..", "...", "..."])


@pytest.fixture
def line_board(make_board) -> Board:
    """1x7 board with mines at both ends: 9 1 0 0 0 1 9."""
    return make_board(["*.....*"])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board.generate(BoardConfig(5, 5, 0.0))


@pytest.fixture
def line_state(line_board: Board) -> RevealState:
    """
    Line board with only the two numbered cells revealed.

    Border: (0,0), (0,2) around the left 1 and (0,4), (0,6) around the
    right 1; (0,3) is closed and touches no revealed cell.
    """
    state = RevealState(line_board)
    state.reveal(0, 1)
    state.reveal(0, 5)
    return state


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 0.15, seed=7)


@pytest.fixture
def true_count() -> Callable[[np.ndarray, int, int], int]:
    """Count mines around a cell the slow way."""
    def _count(mines: np.ndarray, row: int, col: int) -> int:
        height, width = mines.shape
        total = 0
        for r in range(row - 1, row + 2):
            for c in range(col - 1, col + 2):
                if (r, c) == (row, col):
                    continue
                if 0 <= r < height and 0 <= c < width and mines[r, c]:
                    total += 1
        return total
    return _count
