"""
Minesweeper solver module.

Provides the solving pipeline:
- DeductionPass: single-cell rules run to a fixpoint
- plan_regions: independent border regions for the search
- TankSolver: backtracking enumeration of consistent mine placements
- SolverLoop: drives the above until won, lost or stuck
"""
from .config import SolverConfig
from .deduction import DeductionPass, CellInfo, get_cell_info
from .regions import RegionPlan, plan_regions, segregate, share_witness
from .tank import TankSolver, SearchResult
from .loop import (
    GameState,
    Won,
    Lost,
    Stuck,
    SolverOutcome,
    SolverStats,
    SolverLoop,
    solve,
)
from .evaluation import Evaluator, EvaluationStats

__all__ = [
    "SolverConfig",
    "DeductionPass",
    "CellInfo",
    "get_cell_info",
    "RegionPlan",
    "plan_regions",
    "segregate",
    "share_witness",
    "TankSolver",
    "SearchResult",
    "GameState",
    "Won",
    "Lost",
    "Stuck",
    "SolverOutcome",
    "SolverStats",
    "SolverLoop",
    "solve",
    "Evaluator",
    "EvaluationStats",
]
