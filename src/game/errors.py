"""
Error types for the Minesweeper game and solver.

Loss is not an error: opening a mine is reported as a solver outcome.
"""
from typing import Optional, Tuple


class MinesweeperError(Exception):
    """Base class for all game and solver errors."""


class InvalidBoardError(MinesweeperError, ValueError):
    """A board grid or its text form is malformed."""


class InvalidDimensionsError(InvalidBoardError):
    """Rows or columns are non-positive, or grid rows are ragged."""


class OutOfBoundsError(MinesweeperError, IndexError):
    """A coordinate lies outside the board."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {height}x{width} board"
        )
        self.row = row
        self.col = col


class InternalInconsistencyError(MinesweeperError, AssertionError):
    """
    Solver logic contradicted the ground truth.

    Raised when a deduction flags a safe cell or a search region has
    no consistent assignment. Never expected under correct logic.
    """

    def __init__(
        self, message: str, cell: Optional[Tuple[int, int]] = None
    ) -> None:
        if cell is not None:
            message = f"{message} at {cell}"
        super().__init__(message)
        self.cell = cell
