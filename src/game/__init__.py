"""
Minesweeper game module.

Provides the ground-truth board, the player's reveal state and
the board text format.
"""
from .cell import CellState, Visibility, MINE, CLOSED, FLAGGED
from .board import (
    Board,
    BoardConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
    preset,
)
from .registry import MineRegistry
from .reveal_state import RevealState, RevealResult
from .errors import (
    MinesweeperError,
    InvalidBoardError,
    InvalidDimensionsError,
    OutOfBoundsError,
    InternalInconsistencyError,
)
from .serialization import dumps_board, loads_board, save_board, load_board
from .render import format_board, format_view

__all__ = [
    "CellState",
    "Visibility",
    "MINE",
    "CLOSED",
    "FLAGGED",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "preset",
    "MineRegistry",
    "RevealState",
    "RevealResult",
    "MinesweeperError",
    "InvalidBoardError",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "InternalInconsistencyError",
    "dumps_board",
    "loads_board",
    "save_board",
    "load_board",
    "format_board",
    "format_view",
]
