from __future__ import annotations

from enum import Enum
from typing import Tuple

EMPTY = -1

Coord = Tuple[int, int]


class Direction(Enum):
    """Unit steps in (row, col) deltas.

    Member order is the canonical enumeration order used by the solver, so it
    decides which solution is found first.
    """

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> Coord:
        return self.value

    def step(self, coord: Coord) -> Coord:
        dr, dc = self.value
        return coord[0] + dr, coord[1] + dc


# Canonical order: Up, Down, Left, Right
DIRS: Tuple[Direction, ...] = tuple(Direction)

DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 7
DEFAULT_MAX_COLOR = 8  # size of the UI palette
DEFAULT_MAX_ATTEMPTS = 10_000

__all__ = [
    "EMPTY",
    "Coord",
    "Direction",
    "DIRS",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DEFAULT_MAX_COLOR",
    "DEFAULT_MAX_ATTEMPTS",
]
