"""Command-line interface for puzzle generation."""

from __future__ import annotations

import argparse

from colorflow.board.puzzle import Puzzle
from colorflow.core.config import GeneratorConfig, SolverConfig
from colorflow.core.constants import DEFAULT_HEIGHT, DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_COLOR, DEFAULT_WIDTH
from colorflow.core.errors import GenerationFailedError, PuzzleError
from colorflow.core.logging import MLflowRunLogger, NullRunLogger, RunLogger
from colorflow.generator.level import LevelGenerator, check_level_parameters


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Optional argument list (defaults to sys.argv)

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Generate random connect-the-dots puzzles that are proven solvable."
    )
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Board width")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Board height")
    parser.add_argument(
        "--max-color",
        type=int,
        default=DEFAULT_MAX_COLOR,
        help="Color ids are drawn from [0, max-color)",
    )
    parser.add_argument("--count", type=int, default=1, help="Number of puzzles to generate")
    parser.add_argument(
        "--pipes",
        type=int,
        default=None,
        help="Number of colors per board (default: floor(sqrt(width*height)), capped at --max-color)",
    )
    parser.add_argument(
        "--reject-lame",
        action="store_true",
        help="Reject boards where two adjacent cells share a color",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=DEFAULT_MAX_ATTEMPTS,
        help="Boards to try per puzzle before giving up",
    )
    parser.add_argument(
        "--max-expansions",
        type=int,
        default=None,
        help="Optional cap on search moves per board; boards over the cap are rejected",
    )
    parser.add_argument(
        "--no-prune",
        action="store_true",
        help="Disable dead-end pruning in the solver",
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-puzzle progress")
    parser.add_argument(
        "--mlflow-experiment",
        type=str,
        default=None,
        help="Log generation metrics to this MLflow experiment",
    )
    return parser.parse_args(argv)


def format_puzzle(puzzle: Puzzle, index: int) -> str:
    lines = [f"# puzzle {index} ({puzzle.width}x{puzzle.height}, {puzzle.color_count} colors)"]
    lines.extend(puzzle.blank.to_rows())
    lines.append("")
    lines.extend(puzzle.solution.to_rows())
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for puzzle generation CLI.

    Args:
        argv: Optional argument list (defaults to sys.argv)

    Returns:
        0 on success, 1 when generation gives up, 2 for parameters no board
        can satisfy
    """
    args = parse_args(argv)
    try:
        config = GeneratorConfig(
            width=args.width,
            height=args.height,
            max_color=args.max_color,
            reject_lame=args.reject_lame,
            pipe_count=args.pipes,
            max_attempts=args.max_attempts,
            seed=args.seed,
            verbose=args.verbose,
            solver=SolverConfig(prune=not args.no_prune, max_expansions=args.max_expansions),
        )
        check_level_parameters(config.width, config.height, config.max_color, config.pipe_count)
    except (PuzzleError, ValueError) as exc:
        print(f"[error] {exc}")
        return 2

    run_logger: RunLogger = NullRunLogger()
    if args.mlflow_experiment:
        run_logger = MLflowRunLogger(experiment_name=args.mlflow_experiment, run_name="generate")
        run_logger.log_params(
            {
                "width": config.width,
                "height": config.height,
                "max_color": config.max_color,
                "pipe_count": config.pipe_count,
                "reject_lame": config.reject_lame,
                "max_attempts": config.max_attempts,
                "seed": config.seed,
            }
        )

    generator = LevelGenerator(config, run_logger=run_logger)
    status = 0
    try:
        for index in range(1, args.count + 1):
            puzzle = generator.generate_solvable_level()
            print(format_puzzle(puzzle, index))
            print()
    except GenerationFailedError as exc:
        print(f"[error] {exc}")
        status = 1
    finally:
        run_logger.close()

    if args.verbose:
        generator.print_summary()
    return status


__all__ = ["main", "parse_args", "format_puzzle"]


if __name__ == "__main__":
    raise SystemExit(main())
