"""Incrementally built route for a single color."""

from __future__ import annotations

from typing import Iterable, Sequence

from colorflow.core.constants import Coord, Direction
from colorflow.core.errors import EmptyPathError, OutOfBoundsError


class Path:
    """Ordered unit steps from an origin cell, for one color.

    The last point is tracked as steps are appended and removed, so
    `last_point` never replays the step sequence.
    """

    __slots__ = ("origin", "color", "height", "width", "_directions", "_last")

    def __init__(
        self,
        origin: Coord,
        color: int,
        height: int,
        width: int,
        directions: Iterable[Direction] = (),
    ):
        """Create a path rooted at `origin`.

        Args:
            origin: Starting (row, col) coordinate
            color: Color id the path belongs to
            height: Board height
            width: Board width
            directions: Optional initial steps, appended in order

        Raises:
            OutOfBoundsError: If the origin or any initial step leaves the board
        """
        origin = (int(origin[0]), int(origin[1]))
        if not (0 <= origin[0] < height and 0 <= origin[1] < width):
            raise OutOfBoundsError(f"Origin {origin} outside {height}x{width} board")
        self.origin = origin
        self.color = int(color)
        self.height = height
        self.width = width
        self._directions: list[Direction] = []
        self._last: Coord = origin
        for direction in directions:
            self.append(direction)

    @classmethod
    def from_points(cls, points: Sequence[Coord], color: int, height: int, width: int) -> "Path":
        """Build a path from consecutive orthogonally adjacent coordinates.

        Raises:
            ValueError: If `points` is empty or two consecutive points are not adjacent
        """
        if not points:
            raise ValueError("A path needs at least one point")
        by_delta = {direction.delta: direction for direction in Direction}
        directions: list[Direction] = []
        for (fr, fc), (tr, tc) in zip(points, points[1:]):
            direction = by_delta.get((tr - fr, tc - fc))
            if direction is None:
                raise ValueError(f"Points {(fr, fc)} and {(tr, tc)} are not orthogonally adjacent")
            directions.append(direction)
        return cls(points[0], color, height, width, directions)

    @property
    def directions(self) -> tuple[Direction, ...]:
        return tuple(self._directions)

    @property
    def first_point(self) -> Coord:
        return self.origin

    @property
    def last_point(self) -> Coord:
        return self._last

    def __len__(self) -> int:
        return len(self._directions)

    def append(self, direction: Direction) -> None:
        nr, nc = direction.step(self._last)
        if not (0 <= nr < self.height and 0 <= nc < self.width):
            raise OutOfBoundsError(
                f"Step {direction.name} from {self._last} leaves the {self.height}x{self.width} board"
            )
        self._directions.append(direction)
        self._last = (nr, nc)

    def remove_last(self) -> Direction:
        if not self._directions:
            raise EmptyPathError(f"Path for color {self.color} has no steps to remove")
        direction = self._directions.pop()
        dr, dc = direction.delta
        self._last = (self._last[0] - dr, self._last[1] - dc)
        return direction

    def coordinates(self) -> list[Coord]:
        points = [self.origin]
        current = self.origin
        for direction in self._directions:
            current = direction.step(current)
            points.append(current)
        return points

    def copy(self) -> "Path":
        clone = Path(self.origin, self.color, self.height, self.width)
        clone._directions = list(self._directions)
        clone._last = self._last
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (
            self.origin == other.origin
            and self.color == other.color
            and self.height == other.height
            and self.width == other.width
            and self._directions == other._directions
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        steps = ",".join(direction.name for direction in self._directions)
        return f"Path(color={self.color}, origin={self.origin}, steps=[{steps}])"


__all__ = ["Path"]
