from __future__ import annotations

from .config import GeneratorConfig, SolverConfig
from .constants import (
    DEFAULT_HEIGHT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_COLOR,
    DEFAULT_WIDTH,
    DIRS,
    EMPTY,
    Coord,
    Direction,
)
from .errors import (
    EmptyPathError,
    GenerationFailedError,
    InvalidDimensionsError,
    MalformedBoardError,
    OutOfBoundsError,
    PuzzleError,
    SearchLimitExceededError,
)
from .logging import METRIC_PREFIX, MLflowRunLogger, NullRunLogger, RecordingRunLogger, RunLogger

__all__ = [
    "EMPTY",
    "Coord",
    "Direction",
    "DIRS",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DEFAULT_MAX_COLOR",
    "DEFAULT_MAX_ATTEMPTS",
    "SolverConfig",
    "GeneratorConfig",
    "PuzzleError",
    "MalformedBoardError",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "EmptyPathError",
    "SearchLimitExceededError",
    "GenerationFailedError",
    "METRIC_PREFIX",
    "RunLogger",
    "NullRunLogger",
    "MLflowRunLogger",
    "RecordingRunLogger",
]
