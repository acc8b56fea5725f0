"""Board data model: paths, grids and puzzles."""

from colorflow.board.grid import ColorEndpoints, Grid, neighbors
from colorflow.board.path import Path
from colorflow.board.puzzle import Puzzle

__all__ = [
    "Path",
    "Grid",
    "ColorEndpoints",
    "Puzzle",
    "neighbors",
]
