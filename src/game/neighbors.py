"""
Neighborhood utilities shared by the board, the view and the solver.

All neighbor lookups go through one bounds-checked 8-connected routine.
"""
from functools import lru_cache
from typing import Tuple

import numpy as np


Position = Tuple[int, int]


@lru_cache(maxsize=None)
def get_neighbors(
    row: int, col: int, height: int, width: int
) -> Tuple[Position, ...]:
    """
    Get valid neighboring cell positions.

    Args:
        row: Row index of center cell.
        col: Column index of center cell.
        height: Number of rows in the grid.
        width: Number of columns in the grid.

    Returns:
        Tuple of in-bounds (row, col) neighbors in row-major order.
    """
    neighbors = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if 0 <= new_row < height and 0 <= new_col < width:
                neighbors.append((new_row, new_col))
    return tuple(neighbors)


def chebyshev(a: Position, b: Position) -> int:
    """Chebyshev (king-move) distance between two cells."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def neighbor_sums(mask: np.ndarray) -> np.ndarray:
    """
    Sum a 2D array over each cell's 8-neighborhood.

    Cells outside the grid contribute nothing, so edge and corner
    cells only see their in-bounds neighbors.

    Args:
        mask: 2D numeric or boolean array.

    Returns:
        Integer array of the same shape.
    """
    height, width = mask.shape
    padded = np.pad(mask.astype(np.int16), 1)
    total = np.zeros((height, width), dtype=np.int16)
    for delta_row in (0, 1, 2):
        for delta_col in (0, 1, 2):
            if delta_row == 1 and delta_col == 1:
                continue
            total += padded[
                delta_row:delta_row + height, delta_col:delta_col + width
            ]
    return total
