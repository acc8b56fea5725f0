"""Depth-first backtracking solver.

Candidate moves are tried in canonical direction order (Up, Down, Left,
Right) with no reordering, so a given board always yields the same first
solution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from colorflow.board.grid import Grid
from colorflow.core.config import SolverConfig
from colorflow.core.constants import DIRS, EMPTY, Direction
from colorflow.core.errors import SearchLimitExceededError
from colorflow.solver.constraints import is_dead_end
from colorflow.solver.solving_grid import SolveStatus, SolvingGrid

DEFAULT_CONFIG = SolverConfig()


@dataclass(frozen=True)
class SolveResult:
    solvable: bool
    solution: Grid | None = None
    expansions: int = 0
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.solvable


def move_options(state: SolvingGrid) -> list[Direction]:
    """Legal directions for the active path's head, in canonical order.

    A direction is legal when the target cell is on the board and is either
    empty or the active color's end node.
    """
    r, c = state.active_path.last_point
    target = state.active_target
    occupancy = state.occupancy
    options: list[Direction] = []
    for direction in DIRS:
        dr, dc = direction.delta
        nr, nc = r + dr, c + dc
        if not (0 <= nr < state.height and 0 <= nc < state.width):
            continue
        if occupancy[nr][nc] == EMPTY or (nr, nc) == target:
            options.append(direction)
    return options


class _Search:
    """Shared bookkeeping for one solve call."""

    def __init__(self, state: SolvingGrid, config: SolverConfig):
        self.state = state
        self.config = config
        self.expansions = 0

    def apply(self, direction: Direction) -> SolveStatus:
        """Apply a move and classify it; a pruned move reports FAILED."""
        self.expansions += 1
        limit = self.config.max_expansions
        if limit is not None and self.expansions > limit:
            raise SearchLimitExceededError(
                f"Search exceeded {limit} expansions", limit=limit, observed=self.expansions
            )
        self.state.add_direction_to_current_path(direction)
        status = self.state.status
        if status is SolveStatus.SOLVING and self.config.prune and is_dead_end(self.state):
            return SolveStatus.FAILED
        return status

    def run_iterative(self) -> bool:
        state = self.state
        # One frame per applied move: the cursor over the candidates left at that depth.
        frames: list[Iterator[Direction]] = [iter(move_options(state))]
        while frames:
            direction = next(frames[-1], None)
            if direction is None:
                frames.pop()
                if frames:
                    state.remove_last_action()
                continue
            status = self.apply(direction)
            if status is SolveStatus.SUCCESS:
                return True
            if status is SolveStatus.SOLVING:
                frames.append(iter(move_options(state)))
                continue
            state.remove_last_action()
        return False

    def run_recursive(self) -> bool:
        state = self.state
        for direction in move_options(state):
            status = self.apply(direction)
            if status is SolveStatus.SUCCESS:
                return True
            if status is SolveStatus.SOLVING and self.run_recursive():
                return True
            state.remove_last_action()
        return False


def solve(state: SolvingGrid, config: SolverConfig | None = None) -> bool:
    """Search for a solution from `state`, leaving it in place on success.

    On failure every move applied by this call has been undone; undoing the
    move that led to `state` is the caller's job.

    Raises:
        SearchLimitExceededError: If `config.max_expansions` is exceeded
    """
    config = config or DEFAULT_CONFIG
    search = _Search(state, config)
    return search.run_iterative() if config.iterative else search.run_recursive()


def solve_recursive(state: SolvingGrid, config: SolverConfig | None = None) -> bool:
    """Plain recursive form of `solve`; depth is bounded by the interpreter."""
    return _Search(state, config or DEFAULT_CONFIG).run_recursive()


def has_trivial_adjacency(state: SolvingGrid) -> bool:
    """Whether any color's two endpoints touch orthogonally."""
    return any(ends.is_adjacent() for ends in state.endpoints.values())


def is_solvable(
    grid: Grid,
    reject_trivial_adjacency: bool = False,
    config: SolverConfig | None = None,
) -> SolveResult:
    """Solve `grid` on a fresh search state.

    Args:
        grid: Board to solve; its installed paths are ignored
        reject_trivial_adjacency: Report unsolvable, without searching, when
            a color's endpoints are adjacent
        config: Search settings

    Returns:
        SolveResult carrying the solved Grid when one exists. A board with
        no colors is reported unsolvable with reason "no_colors".

    Raises:
        SearchLimitExceededError: If `config.max_expansions` is exceeded
    """
    config = config or DEFAULT_CONFIG
    if not grid.endpoints:
        return SolveResult(solvable=False, reason="no_colors")
    state = SolvingGrid(grid)
    if reject_trivial_adjacency and has_trivial_adjacency(state):
        return SolveResult(solvable=False, reason="trivial_adjacency")

    search = _Search(state, config)
    found = search.run_iterative() if config.iterative else search.run_recursive()
    if not found:
        return SolveResult(solvable=False, expansions=search.expansions, reason="exhausted")
    return SolveResult(solvable=True, solution=state.to_grid(), expansions=search.expansions)


def get_solution(grid: Grid, config: SolverConfig | None = None) -> Grid | None:
    """Return the solved board, or None when `grid` has no solution."""
    return is_solvable(grid, config=config).solution


__all__ = [
    "SolveResult",
    "move_options",
    "solve",
    "solve_recursive",
    "has_trivial_adjacency",
    "is_solvable",
    "get_solution",
]
