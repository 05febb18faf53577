"""
Border region segregation.

Splits the border (closed cells next to a revealed number) into
independent regions so the backtracking search can run on each one
separately. Two border cells belong together when some revealed cell
touches both of them; regions are the connected components of that
relation.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Sequence, Set

from game import RevealState
from game.neighbors import Position, chebyshev


logger = logging.getLogger(__name__)


Region = List[Position]


@dataclass
class RegionPlan:
    """
    Regions to hand to the search.

    Attributes:
        regions: Ordered, disjoint regions.
        whole_board: True when segregation was skipped and the single
            region holds every closed cell; the search must then match
            the total mine count exactly.
    """

    regions: List[Region] = field(default_factory=list)
    whole_board: bool = False

    def __bool__(self) -> bool:
        return any(self.regions)


def share_witness(state: RevealState, a: Position, b: Position) -> bool:
    """
    Check whether a revealed cell touches both positions.

    Cells more than two apart can never share a neighbor, so they are
    rejected before scanning.
    """
    if chebyshev(a, b) > 2:
        return False
    for witness in state.board.neighbors(*a):
        if chebyshev(witness, b) <= 1 and state.is_revealed(*witness):
            return True
    return False


def segregate(state: RevealState, border: Sequence[Position]) -> List[Region]:
    """
    Partition border cells into witness-connected regions.

    Each region is grown breadth-first from the first unclaimed cell
    in border order.

    Args:
        state: Current game view.
        border: Border cells to partition.

    Returns:
        Non-empty regions whose union is exactly the border.
    """
    regions: List[Region] = []
    claimed: Set[Position] = set()

    for seed in border:
        if seed in claimed:
            continue

        region: Region = []
        queue: Deque[Position] = deque([seed])
        claimed.add(seed)

        while queue:
            tile = queue.popleft()
            region.append(tile)
            for other in border:
                if other in claimed:
                    continue
                if share_witness(state, tile, other):
                    claimed.add(other)
                    queue.append(other)

        regions.append(region)

    return regions


def plan_regions(state: RevealState, threshold: int = 8) -> RegionPlan:
    """
    Choose what the search should look at.

    When more than `threshold` closed cells lie away from the border,
    the border is segregated into independent regions. Otherwise the
    search runs once over every closed cell, which keeps the exact
    mine-count check meaningful near the end of a game.

    Args:
        state: Current game view.
        threshold: Maximum closed non-border cells for whole-board search.

    Returns:
        The regions to search.
    """
    closed = state.closed_cells()
    border = state.border_cells()
    slack = len(closed) - len(border)

    if slack > threshold:
        regions = segregate(state, border)
        logger.debug(
            "Segregated %d border cells into %d regions",
            len(border), len(regions),
        )
        return RegionPlan(regions=regions, whole_board=False)

    logger.debug("Searching all %d closed cells as one region", len(closed))
    return RegionPlan(regions=[closed] if closed else [], whole_board=True)
