"""
Cell module for Minesweeper game.

Represents what the player can see of a single cell
(closed/flagged/revealed) and the integer codes used in grids.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

MINE = 9
CLOSED = -1
FLAGGED = -2


class CellState(Enum):
    """Possible visual states of a cell."""

    CLOSED = auto()
    FLAGGED = auto()
    REVEALED = auto()


# ============================================================================
# Visibility Value Type
# ============================================================================

@dataclass(frozen=True)
class Visibility:
    """
    What the player sees at one cell.

    Attributes:
        state: Closed, flagged or revealed.
        count: Adjacent mine count (0-8) when revealed, otherwise None.
    """

    state: CellState
    count: Optional[int] = None

    def __post_init__(self) -> None:
        """Revealed cells carry a count, the others never do."""
        if self.state == CellState.REVEALED:
            if self.count is None or not 0 <= self.count <= 8:
                raise ValueError("Revealed cells need a count in 0-8")
        elif self.count is not None:
            raise ValueError(f"{self.state.name} cells carry no count")

    @classmethod
    def closed(cls) -> "Visibility":
        return cls(CellState.CLOSED)

    @classmethod
    def flagged(cls) -> "Visibility":
        return cls(CellState.FLAGGED)

    @classmethod
    def revealed(cls, count: int) -> "Visibility":
        return cls(CellState.REVEALED, count)

    @classmethod
    def from_observation(cls, value: int) -> "Visibility":
        """
        Build a visibility from an observation code.

        Args:
            value: -1 for closed, -2 for flagged, 0-8 for revealed.

        Returns:
            Matching Visibility.
        """
        value = int(value)
        if value == CLOSED:
            return cls.closed()
        if value == FLAGGED:
            return cls.flagged()
        return cls.revealed(value)

    @property
    def is_closed(self) -> bool:
        """Check if cell is closed."""
        return self.state == CellState.CLOSED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    def to_observation(self) -> int:
        """
        Convert to an observation code.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
        """
        if self.state == CellState.CLOSED:
            return CLOSED
        if self.state == CellState.FLAGGED:
            return FLAGGED
        return self.count
