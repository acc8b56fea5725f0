"""Board model: endpoint matrix plus the installed paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from colorflow.board.path import Path
from colorflow.core.constants import DIRS, EMPTY, Coord
from colorflow.core.errors import InvalidDimensionsError, MalformedBoardError


@dataclass(frozen=True)
class ColorEndpoints:
    """The two fixed terminal cells of a color, in row-major scan order."""

    start: Coord
    end: Coord

    def is_adjacent(self) -> bool:
        return abs(self.start[0] - self.end[0]) + abs(self.start[1] - self.end[1]) == 1

    def matches(self, a: Coord, b: Coord) -> bool:
        """Whether {a, b} are exactly these endpoints, in either order."""
        return (a, b) == (self.start, self.end) or (b, a) == (self.start, self.end)


def neighbors(coord: Coord, height: int, width: int) -> list[Coord]:
    """Return in-bounds orthogonal neighbours of `coord` in canonical order.

    Args:
        coord: (row, col) coordinate
        height: Grid height
        width: Grid width

    Returns:
        List of valid neighbour coordinates (up to 4)
    """
    out: list[Coord] = []
    for direction in DIRS:
        r, c = direction.step(coord)
        if 0 <= r < height and 0 <= c < width:
            out.append((r, c))
    return out


def as_cell_matrix(cells: Sequence[Sequence[int]] | np.ndarray) -> np.ndarray:
    """Coerce `cells` into a 2-D integer array, failing fast on bad shapes."""
    try:
        matrix = np.array(cells, dtype=np.int64)
    except (TypeError, ValueError) as exc:
        raise MalformedBoardError(f"Board is not a rectangular integer matrix: {exc}") from exc
    if matrix.ndim != 2:
        raise MalformedBoardError(f"Board must be two-dimensional, got {matrix.ndim} dimension(s)")
    height, width = matrix.shape
    if height < 1 or width < 1:
        raise InvalidDimensionsError(f"Board must have at least one row and column, got {height}x{width}")
    if height == 1 and width == 1:
        raise InvalidDimensionsError("A 1x1 board cannot hold a puzzle")
    if (matrix < EMPTY).any():
        raise MalformedBoardError(f"Cell values must be {EMPTY} (empty) or a color id >= 0")
    return matrix


def scan_endpoints(matrix: np.ndarray) -> dict[int, ColorEndpoints]:
    """Map each color to its endpoints, ordered by first row-major occurrence.

    Raises:
        MalformedBoardError: If a color appears a number of times other than two
    """
    seen: dict[int, list[Coord]] = {}
    height, width = matrix.shape
    for r in range(height):
        for c in range(width):
            value = int(matrix[r, c])
            if value == EMPTY:
                continue
            seen.setdefault(value, []).append((r, c))

    endpoints: dict[int, ColorEndpoints] = {}
    for color, locs in seen.items():
        if len(locs) != 2:
            raise MalformedBoardError(f"Color {color} must appear exactly twice (got {len(locs)})")
        endpoints[color] = ColorEndpoints(start=locs[0], end=locs[1])
    return endpoints


class Grid:
    """A board: immutable endpoint matrix and one optional path per color.

    `edit_path` and `clear_path` are the only mutations.
    """

    def __init__(self, cells: Sequence[Sequence[int]] | np.ndarray, paths: Iterable[Path] | None = None):
        matrix = as_cell_matrix(cells)
        matrix.setflags(write=False)
        self._cells = matrix
        self.height, self.width = matrix.shape
        self.endpoints = scan_endpoints(matrix)
        self._paths: dict[int, Path] = {}
        for path in paths or ():
            self.edit_path(path)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the endpoint matrix."""
        return self._cells

    @property
    def colors(self) -> tuple[int, ...]:
        return tuple(self.endpoints)

    @property
    def paths(self) -> list[Path]:
        """Installed paths, in color scan order."""
        return [self._paths[color] for color in self.endpoints if color in self._paths]

    def path_of(self, color: int) -> Path | None:
        return self._paths.get(color)

    def edit_path(self, path: Path) -> None:
        """Install or replace the path for `path.color`.

        A copy is stored, so later changes to `path` do not leak in.

        Raises:
            MalformedBoardError: If the color is unknown, the bounds differ from
                the board, or the path does not start on one of its endpoints
        """
        ends = self.endpoints.get(path.color)
        if ends is None:
            raise MalformedBoardError(f"Color {path.color} is not on this board")
        if (path.height, path.width) != (self.height, self.width):
            raise MalformedBoardError(
                f"Path bounds {path.height}x{path.width} do not match board {self.height}x{self.width}"
            )
        if path.origin not in (ends.start, ends.end):
            raise MalformedBoardError(f"Path for color {path.color} must start on one of its endpoints")
        self._paths[path.color] = path.copy()

    def clear_path(self, color: int) -> None:
        self._paths.pop(color, None)

    def blank(self) -> "Grid":
        return Grid(self._cells)

    def flatten(self, exclude_color: int | None = None) -> np.ndarray:
        """Overlay endpoints and installed path cells onto one matrix.

        Args:
            exclude_color: Color whose endpoints and path are left out

        Returns:
            Writable H x W array; cells with no information stay EMPTY
        """
        flat = np.full((self.height, self.width), EMPTY, dtype=np.int64)
        for color, ends in self.endpoints.items():
            if color == exclude_color:
                continue
            flat[ends.start] = color
            flat[ends.end] = color
        for color, path in self._paths.items():
            if color == exclude_color:
                continue
            for point in path.coordinates():
                flat[point] = color
        return flat

    def is_solved(self) -> bool:
        """Every cell covered and every color joined by an installed path."""
        if self._paths.keys() != self.endpoints.keys():
            return False
        if (self.flatten() == EMPTY).any():
            return False
        for color, path in self._paths.items():
            if not self.endpoints[color].matches(path.first_point, path.last_point):
                return False
        return True

    def to_rows(self) -> list[str]:
        """Space-separated rows, `-` for empty cells."""
        rows = []
        for row in self.flatten():
            rows.append(" ".join("-" if value == EMPTY else str(int(value)) for value in row))
        return rows

    def __repr__(self) -> str:
        return f"Grid({self.height}x{self.width}, colors={list(self.endpoints)}, paths={len(self._paths)})"


__all__ = ["Grid", "ColorEndpoints", "neighbors", "as_cell_matrix", "scan_endpoints"]
