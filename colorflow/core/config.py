"""Solver and generator configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from colorflow.core.constants import (
    DEFAULT_HEIGHT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_COLOR,
    DEFAULT_WIDTH,
)
from colorflow.core.errors import InvalidDimensionsError


@dataclass(frozen=True)
class SolverConfig:
    """Backtracking search settings.

    - `prune` abandons branches that provably hold no solution. It never
      changes which solution is found first.
    - `max_expansions` caps the number of applied moves per search
      (None = unbounded).
    - `iterative` selects the explicit-stack search over plain recursion.
    """

    prune: bool = True
    max_expansions: int | None = None
    iterative: bool = True

    def __post_init__(self):
        if self.max_expansions is not None and self.max_expansions <= 0:
            raise ValueError(f"max_expansions must be positive, got {self.max_expansions}")


@dataclass
class GeneratorConfig:
    """Rejection-sampling generator settings."""

    # Board geometry used by the CLI and as queue defaults
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    max_color: int = DEFAULT_MAX_COLOR

    # Filters
    reject_lame: bool = False
    pipe_count: int | None = None  # None = min(floor(sqrt(w*h)), max_color)

    # Termination
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    seed: int | None = None
    verbose: bool = False
    solver: SolverConfig = field(default_factory=SolverConfig)

    def __post_init__(self):
        """Validate configuration."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensionsError(f"width and height must be positive, got {self.width}x{self.height}")
        if self.max_color <= 0:
            raise ValueError(f"max_color must be positive, got {self.max_color}")
        if self.pipe_count is not None and self.pipe_count <= 0:
            raise ValueError(f"pipe_count must be positive, got {self.pipe_count}")
        if self.max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")


__all__ = ["SolverConfig", "GeneratorConfig"]
