"""Solver and generator for connect-the-dots (Flow Free style) grid puzzles."""

from __future__ import annotations

from colorflow.board import Grid, Path, Puzzle
from colorflow.core import Direction, EMPTY
from colorflow.generator import LevelGenerator, PuzzleQueue, generate_solvable_level, random_level
from colorflow.solver import SolveResult, SolvingGrid, get_solution, is_solvable, solve

__all__ = [
    "EMPTY",
    "Direction",
    "Path",
    "Grid",
    "Puzzle",
    "SolvingGrid",
    "SolveResult",
    "solve",
    "is_solvable",
    "get_solution",
    "random_level",
    "generate_solvable_level",
    "LevelGenerator",
    "PuzzleQueue",
]
