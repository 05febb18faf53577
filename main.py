#!/usr/bin/env python3
"""
Minesweeper solver - Main entry point.

Usage:
    python main.py generate ROWS COLS PROBABILITY [--output FILE] [--seed N]
    python main.py solve [--board FILE | --difficulty NAME | --size ROWS COLS]
    python main.py evaluate [--games N] [--difficulty NAME | --size ROWS COLS]
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from game import (  # noqa: E402
    DIFFICULTIES,
    Board,
    BoardConfig,
    MinesweeperError,
    format_board,
    format_view,
    load_board,
    preset,
    save_board,
)
from solver import Evaluator, GameState, SolverConfig, SolverLoop  # noqa: E402


def generate(args: argparse.Namespace) -> None:
    """Generate a random board and print or save it."""
    config = BoardConfig(
        height=args.rows,
        width=args.cols,
        mine_probability=args.probability,
        margin=args.margin,
        seed=args.seed,
    )
    board = Board.generate(config)

    print("MINE MAP")
    print(format_board(board))
    print(f"\nTotal mines: {board.num_mines}")

    if args.output:
        save_board(board, args.output)
        print(f"Board saved to: {args.output}")


def solve(args: argparse.Namespace) -> None:
    """Solve one board, loaded from a file or generated."""
    if args.board:
        board = load_board(args.board)
    else:
        board = Board.generate(_board_config(args))

    print("MINE MAP")
    print(format_board(board))
    print(f"\nTotal mines: {board.num_mines}\n")

    loop = SolverLoop(board, config=_solver_config(args))
    print("GAME MAP")
    print(format_view(loop.state))

    outcome = loop.run()

    print("\nFINAL MAP")
    print(format_view(loop.state))
    print()

    if outcome.state == GameState.WON:
        print(
            f"Solved in {outcome.steps} cycles "
            f"({outcome.elapsed_time * 1000:.0f}ms)."
        )
    elif outcome.state == GameState.LOST:
        print(f"Opened a mine at ({outcome.row}, {outcome.col}).")
    else:
        print(
            f"Stuck with {outcome.remaining_closed} closed cells; "
            f"no further deduction is possible."
        )
    print(f"Stats: {loop.stats.to_dict()}")


def evaluate(args: argparse.Namespace) -> None:
    """Solve many random boards and print outcome rates."""
    evaluator = Evaluator(_board_config(args), _solver_config(args), args.games)

    print(f"Evaluating solver over {args.games} games...")
    results = evaluator.evaluate()

    print(f"  Win rate:   {results.win_rate:.1%}")
    print(f"  Stuck rate: {results.stuck_rate:.1%}")
    print(f"  Losses:     {results.losses}")
    print(f"  Avg cycles: {results.avg_cycles:.1f}")


def _board_config(args: argparse.Namespace) -> BoardConfig:
    """Board settings from a difficulty preset or explicit size."""
    if args.difficulty:
        return preset(args.difficulty, margin=args.margin, seed=args.seed)
    rows, cols = args.size
    return BoardConfig(
        height=rows,
        width=cols,
        mine_probability=args.probability,
        margin=args.margin,
        seed=args.seed,
    )


def _solver_config(args: argparse.Namespace) -> SolverConfig:
    return SolverConfig(
        segregation_threshold=args.threshold,
        max_search_nodes=args.max_nodes or None,
    )


def _add_board_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--difficulty", choices=sorted(DIFFICULTIES), default=None,
        help="Preset size and density (overrides --size and --probability)",
    )
    parser.add_argument(
        "--size", type=int, nargs=2, metavar=("ROWS", "COLS"),
        default=[10, 10], help="Board size for generated boards",
    )
    parser.add_argument(
        "--probability", type=float, default=0.2, help="Mine probability"
    )
    parser.add_argument(
        "--margin", type=int, default=0, help="Mine-free frame width"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def _add_solver_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--threshold", type=int, default=8,
        help="Closed non-border cells above which regions are segregated",
    )
    parser.add_argument(
        "--max-nodes", type=int, default=250_000,
        help="Search node budget per region (0 for unlimited)",
    )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper solver - deduction and backtracking search"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only show warnings"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate", help="Generate a random board"
    )
    generate_parser.add_argument("rows", type=int, help="Number of rows")
    generate_parser.add_argument("cols", type=int, help="Number of columns")
    generate_parser.add_argument(
        "probability", type=float, help="Mine probability per cell"
    )
    generate_parser.add_argument(
        "--output", type=str, default=None, help="File to save the board to"
    )
    generate_parser.add_argument(
        "--margin", type=int, default=0, help="Mine-free frame width"
    )
    generate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve one board")
    solve_parser.add_argument(
        "--board", type=str, default=None, help="Saved board to solve"
    )
    _add_board_options(solve_parser)
    _add_solver_options(solve_parser)

    # Evaluate command
    eval_parser = subparsers.add_parser(
        "evaluate", help="Solve many random boards"
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of boards to solve"
    )
    _add_board_options(eval_parser)
    _add_solver_options(eval_parser)

    args = parser.parse_args()

    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif not args.quiet:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "generate":
            generate(args)
        elif args.command == "solve":
            solve(args)
        elif args.command == "evaluate":
            evaluate(args)
        else:
            parser.print_help()
    except (MinesweeperError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
