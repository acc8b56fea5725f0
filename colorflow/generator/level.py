"""Random board generation by rejection sampling."""

from __future__ import annotations

import math
import time

import numpy as np

from colorflow.board.grid import Grid
from colorflow.board.puzzle import Puzzle
from colorflow.core.config import GeneratorConfig, SolverConfig
from colorflow.core.constants import DEFAULT_MAX_ATTEMPTS, EMPTY
from colorflow.core.errors import GenerationFailedError, InvalidDimensionsError, SearchLimitExceededError
from colorflow.core.logging import NullRunLogger, RunLogger
from colorflow.solver.backtracking import is_solvable

RngLike = np.random.Generator | int | None


def default_pipe_count(width: int, height: int, max_color_value: int) -> int:
    """floor(sqrt(width * height)), capped by the number of available colors."""
    return min(int(math.sqrt(width * height)), max_color_value)


def check_level_parameters(
    width: int, height: int, max_color_value: int, pipe_count: int | None = None
) -> int:
    """Validate generation parameters and return the color count to use.

    Raises:
        InvalidDimensionsError: If width < 1, height < 1 or the board is 1x1
        ValueError: If the requested colors do not fit the palette or the board
    """
    if width < 1 or height < 1 or (width == 1 and height == 1):
        raise InvalidDimensionsError(f"Cannot generate a {width}x{height} board")
    if max_color_value <= 0:
        raise ValueError(f"max_color_value must be positive, got {max_color_value}")
    colors = default_pipe_count(width, height, max_color_value) if pipe_count is None else pipe_count
    if colors <= 0:
        raise ValueError(f"pipe_count must be positive, got {colors}")
    if colors > max_color_value:
        raise ValueError(f"Cannot draw {colors} distinct colors from [0, {max_color_value})")
    if 2 * colors > width * height:
        raise ValueError(f"{colors} colors need {2 * colors} endpoint cells, board has {width * height}")
    return colors


def random_level(
    width: int,
    height: int,
    max_color_value: int,
    pipe_count: int | None = None,
    rng: RngLike = None,
) -> np.ndarray:
    """Place two endpoints for each of several distinct random colors.

    Args:
        width: Board width
        height: Board height
        max_color_value: Color ids are drawn from [0, max_color_value)
        pipe_count: Number of colors; defaults to `default_pipe_count`
        rng: numpy Generator or seed

    Returns:
        height x width integer matrix, EMPTY everywhere but the endpoints

    Raises:
        InvalidDimensionsError: If width < 1, height < 1 or the board is 1x1
        ValueError: If the requested colors do not fit the palette or the board
    """
    colors = check_level_parameters(width, height, max_color_value, pipe_count)
    rng = np.random.default_rng(rng)
    chosen = rng.choice(max_color_value, size=colors, replace=False)
    spots = rng.choice(width * height, size=2 * colors, replace=False)

    board = np.full((height, width), EMPTY, dtype=np.int64)
    for i, color in enumerate(chosen):
        board.flat[spots[2 * i]] = color
        board.flat[spots[2 * i + 1]] = color
    return board


def not_lame(cells: Grid | np.ndarray) -> bool:
    """False when two orthogonally adjacent non-empty cells share a color."""
    matrix = cells.cells if isinstance(cells, Grid) else np.asarray(cells)
    horizontal = (matrix[:, 1:] == matrix[:, :-1]) & (matrix[:, 1:] != EMPTY)
    vertical = (matrix[1:, :] == matrix[:-1, :]) & (matrix[1:, :] != EMPTY)
    return not (horizontal.any() or vertical.any())


class LevelGenerator:
    """Draws random boards until one passes the solvability and lame filters.

    Keeps running counters in `stats` and reports per-puzzle metrics through
    a RunLogger.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        run_logger: RunLogger | None = None,
        rng: RngLike = None,
    ):
        """Initialize the generator.

        Args:
            config: Generator settings; `config.seed` seeds the RNG unless `rng` is given
            run_logger: Metrics sink (defaults to NullRunLogger)
            rng: numpy Generator or seed overriding `config.seed`
        """
        self.config = config or GeneratorConfig()
        self.run_logger = run_logger or NullRunLogger()
        self.rng = np.random.default_rng(self.config.seed if rng is None else rng)
        self.stats = {
            "generated": 0,
            "attempts": 0,
            "unsolvable": 0,
            "lame": 0,
            "search_limit": 0,
            "failed": 0,
        }

    def random_level(
        self, width: int, height: int, max_color_value: int, pipe_count: int | None = None
    ) -> np.ndarray:
        return random_level(width, height, max_color_value, pipe_count, rng=self.rng)

    def generate_solvable_level(
        self,
        width: int | None = None,
        height: int | None = None,
        max_color: int | None = None,
        reject_lame: bool | None = None,
        pipe_count: int | None = None,
    ) -> Puzzle:
        """Sample boards until one is solvable (and not lame, if requested).

        Arguments left as None fall back to the generator config.

        Raises:
            GenerationFailedError: If `config.max_attempts` boards were rejected
        """
        cfg = self.config
        width = cfg.width if width is None else width
        height = cfg.height if height is None else height
        max_color = cfg.max_color if max_color is None else max_color
        reject_lame = cfg.reject_lame if reject_lame is None else reject_lame
        pipe_count = cfg.pipe_count if pipe_count is None else pipe_count

        started = time.perf_counter()
        for attempt in range(1, cfg.max_attempts + 1):
            self.stats["attempts"] += 1
            cells = self.random_level(width, height, max_color, pipe_count)
            if reject_lame and not not_lame(cells):
                self.stats["lame"] += 1
                continue
            blank = Grid(cells)
            try:
                result = is_solvable(blank, config=cfg.solver)
            except SearchLimitExceededError:
                self.stats["search_limit"] += 1
                continue
            if not result:
                self.stats["unsolvable"] += 1
                continue

            self.stats["generated"] += 1
            elapsed = time.perf_counter() - started
            step = self.stats["generated"]
            self.run_logger.log_generation(
                step, attempts=attempt, expansions=result.expansions, seconds=elapsed
            )
            if cfg.verbose:
                print(
                    f"[ok] {width}x{height} board with {len(blank.endpoints)} colors "
                    f"after {attempt} attempt(s), {elapsed:.2f}s"
                )
            return Puzzle(blank=blank, solution=result.solution)

        self.stats["failed"] += 1
        raise GenerationFailedError(
            f"No acceptable {width}x{height} board (max_color={max_color}) after {cfg.max_attempts} attempts",
            attempts=cfg.max_attempts,
        )

    def print_summary(self) -> None:
        """Print running generation statistics."""
        print(
            f"Generated {self.stats['generated']} puzzles in {self.stats['attempts']} attempts "
            f"(unsolvable={self.stats['unsolvable']}, "
            f"lame={self.stats['lame']}, "
            f"search_limit={self.stats['search_limit']}, "
            f"failed={self.stats['failed']})."
        )


def generate_solvable_level(
    width: int,
    height: int,
    max_color: int,
    reject_lame: bool = False,
    pipe_count: int | None = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: RngLike = None,
    solver: SolverConfig | None = None,
) -> Puzzle:
    """One-shot form of `LevelGenerator.generate_solvable_level`."""
    config = GeneratorConfig(
        width=width,
        height=height,
        max_color=max_color,
        reject_lame=reject_lame,
        pipe_count=pipe_count,
        max_attempts=max_attempts,
        solver=solver or SolverConfig(),
    )
    return LevelGenerator(config, rng=rng).generate_solvable_level()


__all__ = [
    "default_pipe_count",
    "check_level_parameters",
    "random_level",
    "not_lame",
    "LevelGenerator",
    "generate_solvable_level",
]
