"""
Solver configuration.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class SolverConfig:
    """
    Configuration for the solving loop.

    Attributes:
        segregation_threshold: Closed cells away from the border above
            which the border is split into independent regions. At or
            below it, all closed cells are searched as one region.
        max_search_nodes: Node budget per region search; None for no
            limit. A region that runs out yields no deductions.
        max_cycles: Upper bound on solver cycles; None for no limit.
        open_zero_cells: Open every zero cell before solving a fresh view.
    """

    segregation_threshold: int = 8
    max_search_nodes: Optional[int] = 250_000
    max_cycles: Optional[int] = None
    open_zero_cells: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.segregation_threshold < 0:
            raise ValueError("Segregation threshold cannot be negative")
        if self.max_search_nodes is not None and self.max_search_nodes < 1:
            raise ValueError("Search node budget must be positive")
        if self.max_cycles is not None and self.max_cycles < 1:
            raise ValueError("Cycle limit must be positive")
