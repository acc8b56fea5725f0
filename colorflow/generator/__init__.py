"""Solvability-aware level generation and the background production queue."""

from colorflow.generator.level import (
    LevelGenerator,
    check_level_parameters,
    default_pipe_count,
    generate_solvable_level,
    not_lame,
    random_level,
)
from colorflow.generator.production import GenerationRequest, PuzzleQueue

__all__ = [
    "random_level",
    "not_lame",
    "default_pipe_count",
    "check_level_parameters",
    "LevelGenerator",
    "generate_solvable_level",
    "PuzzleQueue",
    "GenerationRequest",
]
