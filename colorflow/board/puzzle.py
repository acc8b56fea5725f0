from __future__ import annotations

from dataclasses import dataclass

from colorflow.board.grid import Grid


@dataclass(frozen=True)
class Puzzle:
    """A blank board paired with a proven solution."""

    blank: Grid
    solution: Grid

    @property
    def width(self) -> int:
        return self.blank.width

    @property
    def height(self) -> int:
        return self.blank.height

    @property
    def color_count(self) -> int:
        return len(self.blank.endpoints)


__all__ = ["Puzzle"]
