"""Backtracking search over connect-the-dots boards."""

from colorflow.solver.backtracking import (
    SolveResult,
    get_solution,
    has_trivial_adjacency,
    is_solvable,
    move_options,
    solve,
    solve_recursive,
)
from colorflow.solver.constraints import has_dead_pocket, has_disconnect, has_stranded_cell, is_dead_end
from colorflow.solver.solving_grid import SolveStatus, SolvingGrid

__all__ = [
    "SolvingGrid",
    "SolveStatus",
    "SolveResult",
    "move_options",
    "solve",
    "solve_recursive",
    "has_trivial_adjacency",
    "is_solvable",
    "get_solution",
    "has_stranded_cell",
    "has_dead_pocket",
    "has_disconnect",
    "is_dead_end",
]
