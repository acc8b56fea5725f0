"""Mutable search state for one solve attempt."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np

from colorflow.board.grid import ColorEndpoints, Grid, as_cell_matrix, neighbors, scan_endpoints
from colorflow.board.path import Path
from colorflow.core.constants import EMPTY, Coord, Direction
from colorflow.core.errors import MalformedBoardError


class SolveStatus(Enum):
    SOLVING = "solving"
    FAILED = "failed"
    SUCCESS = "success"


class SolvingGrid:
    """
    Search state derived from a board.

    Colors are routed one at a time in first-seen row-major order. `paths`
    holds one Path per color started so far; only the last one is active and
    every earlier one already reaches its end node. `occupancy` is kept in
    step with the paths on every add/undo, `flatten()` re-derives it.

    Instances are owned by a single search and must not be shared.
    """

    def __init__(self, board: Grid | Sequence[Sequence[int]] | np.ndarray):
        if isinstance(board, Grid):
            cells = board.cells
            endpoints = dict(board.endpoints)
        else:
            cells = as_cell_matrix(board)
            endpoints = scan_endpoints(cells)
        if not endpoints:
            raise MalformedBoardError("Board has no colors to connect")

        self.cells = cells
        self.height, self.width = cells.shape
        self.endpoints: dict[int, ColorEndpoints] = endpoints
        self.colors: tuple[int, ...] = tuple(endpoints)
        self._endpoint_cells: set[Coord] = set()
        for ends in endpoints.values():
            self._endpoint_cells.update((ends.start, ends.end))

        self.adjacency: dict[Coord, list[Coord]] = {
            (r, c): neighbors((r, c), self.height, self.width)
            for r in range(self.height)
            for c in range(self.width)
        }
        self.occupancy: list[list[int]] = [[int(v) for v in row] for row in cells]
        self.empty_count = sum(row.count(EMPTY) for row in self.occupancy)

        first = self.colors[0]
        self.paths: list[Path] = [Path(endpoints[first].start, first, self.height, self.width)]
        self.status = SolveStatus.SOLVING

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #
    @property
    def start_nodes(self) -> tuple[Coord, ...]:
        return tuple(self.endpoints[color].start for color in self.colors)

    @property
    def end_nodes(self) -> tuple[Coord, ...]:
        """End nodes index-aligned with `colors` and `start_nodes`."""
        return tuple(self.endpoints[color].end for color in self.colors)

    @property
    def active_path(self) -> Path:
        return self.paths[-1]

    @property
    def active_target(self) -> Coord:
        return self.endpoints[self.paths[-1].color].end

    def unfinished_colors(self) -> tuple[int, ...]:
        """The active color followed by every color not started yet."""
        return self.colors[len(self.paths) - 1 :]

    def flatten(self) -> np.ndarray:
        flat = np.full((self.height, self.width), EMPTY, dtype=np.int64)
        for color, ends in self.endpoints.items():
            flat[ends.start] = color
            flat[ends.end] = color
        for path in self.paths:
            for point in path.coordinates():
                flat[point] = path.color
        return flat

    def snapshot(self) -> tuple[tuple[tuple[int, Coord, tuple[Direction, ...]], ...], SolveStatus]:
        paths = tuple((path.color, path.origin, path.directions) for path in self.paths)
        return paths, self.status

    def to_grid(self) -> Grid:
        """Board with every path routed so far installed."""
        return Grid(self.cells, paths=self.paths)

    # ------------------------------------------------------------------ #
    # Apply / undo
    # ------------------------------------------------------------------ #
    def add_direction_to_current_path(self, direction: Direction) -> None:
        """Extend the active path by one step.

        Reaching the active color's end node opens a path for the next color,
        or settles the status once every color is routed. The caller picks
        `direction` from the legal moves.
        """
        if self.status is not SolveStatus.SOLVING:
            raise AssertionError(f"Cannot extend a path while the search state is {self.status.value}")
        path = self.paths[-1]
        path.append(direction)
        r, c = path.last_point
        if self.occupancy[r][c] == EMPTY:
            self.occupancy[r][c] = path.color
            self.empty_count -= 1

        if path.last_point != self.endpoints[path.color].end:
            return
        if len(self.paths) < len(self.colors):
            color = self.colors[len(self.paths)]
            self.paths.append(Path(self.endpoints[color].start, color, self.height, self.width))
        elif self.empty_count == 0:
            self.status = SolveStatus.SUCCESS
        else:
            self.status = SolveStatus.FAILED

    def remove_last_action(self) -> None:
        """Undo the most recent `add_direction_to_current_path`.

        Raises:
            AssertionError: If only the first path remains and it has no steps
        """
        self.status = SolveStatus.SOLVING
        path = self.paths[-1]
        if len(path) == 0:
            if len(self.paths) == 1:
                raise AssertionError("Nothing to undo: the first path has no steps")
            self.paths.pop()
            path = self.paths[-1]
        r, c = path.last_point
        path.remove_last()
        if (r, c) not in self._endpoint_cells:
            self.occupancy[r][c] = EMPTY
            self.empty_count += 1


__all__ = ["SolvingGrid", "SolveStatus"]
