"""
Batch evaluation of the solver on random boards.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from game import Board, BoardConfig

from .config import SolverConfig
from .loop import GameState, SolverLoop


logger = logging.getLogger(__name__)


@dataclass
class EvaluationStats:
    """Aggregated outcomes over many boards."""

    games: int = 0
    wins: int = 0
    losses: int = 0
    stuck: int = 0
    total_cycles: int = 0
    total_search_rounds: int = 0
    remaining_closed: List[int] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0

    @property
    def stuck_rate(self) -> float:
        return self.stuck / self.games if self.games else 0.0

    @property
    def avg_cycles(self) -> float:
        return self.total_cycles / self.games if self.games else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "games": self.games,
            "wins": self.wins,
            "losses": self.losses,
            "stuck": self.stuck,
            "win_rate": self.win_rate,
            "stuck_rate": self.stuck_rate,
            "avg_cycles": self.avg_cycles,
            "search_rounds": self.total_search_rounds,
        }


class Evaluator:
    """
    Run the solver on a series of generated boards.

    Board i uses seed `base_seed + i` when a base seed is given, so a
    run can be reproduced exactly.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        solver_config: Optional[SolverConfig] = None,
        num_games: int = 100,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Generation settings for every board.
            solver_config: Solver settings.
            num_games: Number of boards to solve.
        """
        if num_games < 1:
            raise ValueError("Number of games must be positive")
        self.board_config = board_config or BoardConfig()
        self.solver_config = solver_config or SolverConfig()
        self.num_games = num_games

    def _config_for(self, game: int) -> BoardConfig:
        base = self.board_config
        seed = None if base.seed is None else base.seed + game
        return BoardConfig(
            width=base.width,
            height=base.height,
            mine_probability=base.mine_probability,
            margin=base.margin,
            seed=seed,
        )

    def evaluate(self) -> EvaluationStats:
        """
        Solve every board and tally the outcomes.

        Returns:
            Aggregated statistics.
        """
        stats = EvaluationStats()

        for game in range(self.num_games):
            board = Board.generate(self._config_for(game))
            loop = SolverLoop(board, config=self.solver_config)
            outcome = loop.run()

            stats.games += 1
            stats.total_cycles += loop.stats.cycles
            stats.total_search_rounds += loop.stats.search_rounds
            if outcome.state == GameState.WON:
                stats.wins += 1
            elif outcome.state == GameState.LOST:
                stats.losses += 1
            else:
                stats.stuck += 1
                stats.remaining_closed.append(outcome.remaining_closed)

        logger.info(
            "Evaluated %d games: %.1f%% won, %.1f%% stuck",
            stats.games, 100 * stats.win_rate, 100 * stats.stuck_rate,
        )
        return stats
